"""
Logging layer for blart.

Extends Python's standard logging with:
- A custom TRACE level below DEBUG
- Colored console output
- Structured extra fields rendered as ``[key:value]``
- Derived per-component loggers ("/debounce", "/shutdown", ...) sharing
  the root logger's handlers

Log Level Control:
- Use standard levels: trace, debug, info, warning, error, critical
- Disable logging completely: False or "false"
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter, format_extra
from .logger import Logger

logging.addLevelName(LogConstants.TRACE, "TRACE")


def create_root_lg(
    level: str | int | bool = "info", colors: bool = True, micros: bool = False
) -> Logger:
    """
    Create a root logger with the specified configuration.

    Example:
        >>> lg = create_root_lg("debug", colors=False)
    """
    return LoggerFactory.create_root(LogConfig.from_params(level, colors, micros))


def derive_lg(lg: Logger, tag: str) -> Logger:
    """
    Derive a component logger from a parent logger.

    Example:
        >>> child_lg = derive_lg(create_root_lg(), "watch")
    """
    return LoggerFactory.derive(lg, tag)


__all__ = [
    "Logger",
    "LoggerFactory",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LogError",
    "InvalidLogLevelError",
    "resolve_level",
    "format_extra",
    "create_root_lg",
    "derive_lg",
]
