"""Settings and logging for fountainkit.

Modules obtain loggers through ``get_logger`` here, which configures logging
from the global settings the first time any logger is requested.
"""

from __future__ import annotations

from typing import Any

from fountainkit.config import logging as _logging
from fountainkit.config import settings as _settings
from fountainkit.config.logging import configure_logging
from fountainkit.config.settings import (
    FountainKitSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "FountainKitSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

_configured = False
_loggers: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Logger for ``name``; the first call configures logging."""
    global _configured
    logger = _loggers.get(name)
    if logger is None:
        if not _configured:
            configure_logging(get_settings())
            _configured = True
        logger = _loggers[name] = _logging.get_logger(name)
    return logger


def reset_settings() -> None:
    """Drop cached settings and loggers so both are rebuilt on next use."""
    global _configured
    _settings.reset_settings()
    _configured = False
    _loggers.clear()
