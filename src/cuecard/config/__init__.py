"""cuecard configuration module."""

from __future__ import annotations

from typing import Any

from cuecard.config.logging import configure_logging
from cuecard.config.logging import get_logger as _get_logger
from cuecard.config.settings import (
    CueCardSettings,
    get_settings,
    set_settings,
)
from cuecard.config.settings import (
    reset_settings as _reset_settings,
)

__all__ = [
    "CueCardSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_settings",
    "set_settings",
]

_logging_initialized = False
_logger_cache: dict[str, Any] = {}


def _ensure_logging_configured() -> None:
    """Configure logging from the global settings on first use."""
    global _logging_initialized
    if not _logging_initialized:
        configure_logging(get_settings())
        _logging_initialized = True


def get_logger(name: str) -> Any:
    """Get a configured logger instance.

    Loggers are cached locally so hot paths skip the structlog lookup, and
    logging is configured lazily the first time any logger is requested.

    Args:
        name: Logger name (usually __name__).

    Returns:
        Configured structlog logger (cached after first use).
    """
    if name in _logger_cache:
        return _logger_cache[name]

    _ensure_logging_configured()

    logger = _get_logger(name)
    _logger_cache[name] = logger
    return logger


def reset_settings() -> None:
    """Reset settings and clear logger cache.

    Ensures a clean state for testing or reconfiguration.
    """
    global _logging_initialized
    _reset_settings()
    _logging_initialized = False
    _logger_cache.clear()
