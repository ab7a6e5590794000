"""Centralized logging configuration for the ``tally`` package.

- ``configure_logging(...)``: attach a single Rich handler to the package
  root logger (``"tally"``). Called once by the CLI at startup.
- Library modules never attach handlers; they call
  ``logging.getLogger(__name__)`` and rely on this configuration.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from tally.config import LOG_LEVEL_ENV

_PKG_LOGGER_NAME = "tally"
_CONFIGURED = False


def _level_from(value: int | str | None) -> int | None:
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        # Accept numeric strings or standard level names (INFO/DEBUG/etc.).
        value = value.strip().upper()
        if value.isdigit():
            return int(value)
        numeric = getattr(logging, value, None)
        if isinstance(numeric, int):
            return numeric
    return None


def _parse_level(level: int | str | None) -> int:
    resolved = _level_from(level)
    if resolved is None:
        resolved = _level_from(os.getenv(LOG_LEVEL_ENV))
    return logging.WARNING if resolved is None else resolved


def configure_logging(level: int | str | None = None, *, console: Console | None = None) -> None:
    """Configure the package root logger exactly once.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string. If ``None``, defaults
        to the ``TALLY_LOG_LEVEL`` environment variable when set, otherwise
        ``logging.WARNING``.
    console:
        Rich console to log to (defaults to a stderr console).
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = _parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True


__all__ = ["configure_logging"]
