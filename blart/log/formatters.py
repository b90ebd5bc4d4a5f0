"""
Log formatter rendering structured extra fields.

Lines look like:

    [12:34:56,789] [I] signalling child               [signal:SIGHUP] [1234] [/debounce]

Extra fields passed via ``extra={...}`` are rendered as ``[key:value]`` after
the message, sorted by key. Exceptions passed as values render as their class
name followed by the message.
"""

import logging
from datetime import datetime
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

# Attribute under which the Logger stores the caller's extra fields
EXTRA_ATTR = "__blart__extra"


def _format_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return f"{value.__class__.__name__}: {value}"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


def format_extra(extra: dict[str, Any] | None) -> str:
    """Render extra fields as ``[key:value]`` pairs, sorted by key."""
    if not extra:
        return ""
    return " ".join(f"[{key}:{_format_value(extra[key])}]" for key in sorted(extra))


class LogFormatter(logging.Formatter):
    """Formatter for blart's console output."""

    def __init__(self, config: LogConfig) -> None:
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        ts = datetime.fromtimestamp(record.created)
        if self._config.micros:
            return ts.strftime("%H:%M:%S,%f")
        return ts.strftime("%H:%M:%S,") + f"{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        head = f"[{self.formatTime(record)}] [{record.levelname[:1]}] "
        if len(message) < LogConstants.RULE_WIDTH:
            message = message.ljust(LogConstants.RULE_WIDTH)

        tail_parts = []
        fields = format_extra(getattr(record, EXTRA_ATTR, None))
        if fields:
            tail_parts.append(fields)
        tail_parts.append(f"[{record.process}] [{record.name}]")
        tail = " ".join(tail_parts)

        if self._config.colors:
            col = ColorManager.for_level(record.levelno)
            line = (
                f"{col}{head}{ColorManager.BOLD}{message}{ColorManager.RESET}"
                f" {col}{tail}{ColorManager.RESET}"
            )
        else:
            line = f"{head}{message} {tail}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
