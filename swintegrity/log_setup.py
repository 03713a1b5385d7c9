"""Logging setup — one Rich handler on the ``swintegrity`` logger.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``configure_logging`` once with the level from ``Settings``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "swintegrity-rich"


def configure_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Attach a ``RichHandler`` to the package logger (idempotent)."""
    logger = logging.getLogger("swintegrity")
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        show_time=False,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    logger.addHandler(handler)
    return logger
