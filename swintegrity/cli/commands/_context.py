"""Shared command plumbing: settings, project config, fatal-exit helper."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from swintegrity.config import ConfigError, Settings, load_integrity_config
from swintegrity.models.config import IntegrityConfig


def fail(console: Console, title: str, detail: object) -> NoReturn:
    """Print a red diagnostic and exit with code 1."""
    console.print(f"[bold red]{title}[/bold red] {escape(str(detail))}", highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def load_config(console: Console) -> IntegrityConfig:
    """Load the project config for the current settings, exiting 1 on error."""
    try:
        return load_integrity_config(Settings())
    except ConfigError as exc:
        fail(console, "Configuration error:", exc)
