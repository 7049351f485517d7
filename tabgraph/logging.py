"""Logging utilities for tabgraph.

Provides package-scoped loggers that share one handler configuration and
never leak records into the host application's root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_DEFAULT_LEVEL = logging.WARNING
_BASE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_DEFAULT_FORMAT = _BASE_FORMAT
_DEFAULT_STREAM: Optional[TextIO] = None

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _make_handler(level: int, format_string: str, stream: Optional[TextIO]) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be `__name__` from the calling module.

    Args:
        name: Logger name (typically `__name__`). If None, returns the
            package logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from tabgraph.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("Built graph with %d nodes", 3)
    """
    if name is None:
        name = "tabgraph"

    logger_name = name if name == "tabgraph" or name.startswith("tabgraph.") else f"tabgraph.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL, _DEFAULT_FORMAT, _DEFAULT_STREAM))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all tabgraph loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or string
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').

    Example:
        >>> import logging
        >>> from tabgraph.logging import set_log_level
        >>> set_log_level(logging.DEBUG)
    """
    global _DEFAULT_LEVEL

    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure logging for tabgraph.

    Replaces the handler of every cached logger and records the settings as
    defaults for loggers created afterwards. Typically called once at
    application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default
            ``[LEVEL] name: message`` layout.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from tabgraph.logging import configure_logging
        >>> configure_logging(level=logging.INFO)
    """
    global _DEFAULT_LEVEL, _DEFAULT_FORMAT, _DEFAULT_STREAM

    level = _coerce_level(level)
    if format_string is None:
        format_string = _BASE_FORMAT

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(level, format_string, stream))

    _DEFAULT_LEVEL = level
    _DEFAULT_FORMAT = format_string
    _DEFAULT_STREAM = stream
