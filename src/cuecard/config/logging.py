"""Logging configuration for cuecard."""

from __future__ import annotations

import logging
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
    format_exc_info,
)
from structlog.stdlib import ProcessorFormatter, add_logger_name, filter_by_level

from cuecard.config.settings import CueCardSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _renderers(log_format: str) -> list[Any]:
    if log_format == "json":
        return [format_exc_info, structlog.processors.JSONRenderer()]
    if log_format == "structured":
        return [
            format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "logger", "event"],
                drop_missing=True,
            ),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.rich_traceback,
        )
    ]


def _build_formatter(log_format: str) -> ProcessorFormatter:
    """Create the stdlib formatter that renders both structlog and stdlib records."""
    return ProcessorFormatter(
        processors=[ProcessorFormatter.remove_processors_meta, *_renderers(log_format)],
        foreign_pre_chain=[
            add_logger_name,
            add_log_level,
            TimeStamper(fmt="iso"),
        ],
    )


def configure_logging(settings: CueCardSettings) -> None:
    """Configure logging based on settings.

    Every handler renders through one ``ProcessorFormatter``, so the chosen
    format applies to the console and to the log file alike.

    Args:
        settings: Application settings containing logging configuration.

    Raises:
        ValueError: If the log level is not known to the logging module.
    """
    log_level = logging.getLevelNamesMapping().get(settings.log_level.upper())
    if log_level is None:
        raise ValueError(
            f"Invalid log level '{settings.log_level}'. "
            f"Valid levels are: {', '.join(sorted(logging.getLevelNamesMapping()))}"
        )

    formatter = _build_formatter(settings.log_format)
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
    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
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
    processors.append(ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger instance (cached after first use)."""
    return structlog.get_logger(name)
