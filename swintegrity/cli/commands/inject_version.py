"""``swintegrity inject-version`` — write the package version into targets."""

from __future__ import annotations

from rich.console import Console

from swintegrity.cli.commands._context import fail, load_config
from swintegrity.core.version_injector import (
    InjectionError,
    VersionInjector,
    VersionNotFoundError,
)

console = Console()


def inject_version_cmd() -> None:
    """Replace the version placeholder in every configured target file.

    Targets without the placeholder are reported and left unchanged; any
    read or write failure aborts with exit code 1.
    """
    config = load_config(console)
    injector = VersionInjector(config)

    try:
        result = injector.inject()
    except (VersionNotFoundError, InjectionError) as exc:
        fail(console, "Version injection failed:", exc)

    console.print(f"[bold cyan]Injected version {result.version}[/bold cyan]")
    for path in result.updated_files:
        count = result.replacements.get(str(path), 0)
        console.print(f"  [green]updated[/green] {path} ({count} replacement(s))", highlight=False, soft_wrap=True)
    for path in result.skipped_files:
        console.print(f"  [yellow]no placeholder[/yellow] {path}", highlight=False, soft_wrap=True)
