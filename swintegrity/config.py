"""Runtime settings and project configuration loading.

``Settings`` is env-driven via pydantic-settings (SWINTEGRITY_* variables or
a .env file). It says where the project lives and how to log. The project
itself (tracked resources, version targets, release options) is described
by an ``IntegrityConfig`` loaded from ``swintegrity.toml`` or the
``[tool.swintegrity]`` table of ``pyproject.toml``; with neither present the
built-in defaults are used.

Examples
--------
Point the commands at another checkout::

    export SWINTEGRITY_ROOT=/srv/app
    export SWINTEGRITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from swintegrity.models.config import IntegrityConfig

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when the project configuration cannot be loaded or is invalid."""


class Settings(BaseSettings):
    """Process-level settings with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SWINTEGRITY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path = Path(".")
    config_file: Path = Path("swintegrity.toml")
    log_level: str = "INFO"
    debug: bool = False

    @property
    def config_path(self) -> Path:
        return self.config_file if self.config_file.is_absolute() else self.root / self.config_file


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _raw_project_config(settings: Settings) -> tuple[dict[str, Any], Path | None]:
    """Find the project table: swintegrity.toml first, then pyproject.toml."""
    if settings.config_path.exists():
        return _read_toml(settings.config_path), settings.config_path

    pyproject = settings.root / "pyproject.toml"
    if pyproject.exists():
        table = _read_toml(pyproject).get("tool", {}).get("swintegrity")
        if table is not None:
            return table, pyproject

    return {}, None


def load_integrity_config(settings: Settings | None = None) -> IntegrityConfig:
    """Build the ``IntegrityConfig`` for ``settings.root``.

    ``resources`` may be written either as a table mapping cache key to path
    or as a list of ``{cache_key, path}`` tables. Cache keys are checked for
    uniqueness before anything is digested.
    """
    settings = settings or Settings()
    raw, source = _raw_project_config(settings)
    raw = dict(raw)

    resources = raw.get("resources")
    if isinstance(resources, dict):
        raw["resources"] = [
            {"cache_key": key, "path": path} for key, path in resources.items()
        ]
    raw["root"] = settings.root

    try:
        config = IntegrityConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source or 'defaults'}:\n{exc}") from exc

    logger.debug(
        "Loaded configuration from %s (%d resources, %d version targets)",
        source or "built-in defaults",
        len(config.resources),
        len(config.version_targets),
    )
    return config
