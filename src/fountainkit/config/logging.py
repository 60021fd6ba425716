"""structlog setup for fountainkit.

Records from structlog and from plain stdlib loggers share the same handlers
and formatters. Everything is written to stderr, and optionally to a rotating
log file, so stdout only ever carries rendered documents.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import (
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
    render_to_log_kwargs,
)

from fountainkit.config.settings import FountainKitSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _console_renderer() -> structlog.dev.ConsoleRenderer:
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.rich_traceback,
    )


def _build_formatter(log_format: str) -> ProcessorFormatter:
    """Stdlib formatter rendering records as console text, JSON or key=value."""
    if log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    elif log_format == "structured":
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"],
            drop_missing=True,
        )
    else:
        renderer = _console_renderer()
    return ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[TimeStamper(fmt="iso"), add_log_level, add_logger_name],
    )


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        valid = sorted(n for n in logging.getLevelNamesMapping() if n != "NOTSET")
        raise ValueError(
            f"Invalid log level '{name}'. Valid levels are: {', '.join(valid)}"
        )
    return level


def _build_handlers(
    settings: FountainKitSettings, formatter: logging.Formatter, level: int
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def _processors(settings: FountainKitSettings) -> list[Any]:
    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        TimeStamper(fmt="iso"),
        add_log_level,
        dict_tracebacks,
    ]
    if settings.debug:
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ]
            )
        )
    processors.append(format_exc_info)

    # Under pytest records must reach the stdlib handlers for caplog
    under_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ
    if settings.log_format in ("json", "structured") or under_pytest:
        processors.extend([render_to_log_kwargs, ProcessorFormatter.wrap_for_formatter])
    else:
        processors.append(_console_renderer())
    return processors


def configure_logging(settings: FountainKitSettings) -> None:
    """Install handlers on the root logger and configure structlog.

    Raises:
        ValueError: If ``settings.log_level`` is not a logging level name
    """
    level = _resolve_level(settings.log_level)
    handlers = _build_handlers(settings, _build_formatter(settings.log_format), level)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """structlog logger bound to the stdlib logger ``name``."""
    return structlog.get_logger(name)
