"""
Logger class with structured extra fields.

Extends the standard Python logger with:
- A TRACE level below DEBUG
- Extra fields stored on the record for the formatter to render, so keys
  like ``name`` or ``path`` never clash with LogRecord attributes
- Pre-populated extra fields for derived loggers
- Derived "view" loggers that share the root logger's handlers
"""

from __future__ import annotations

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants
from .formatters import EXTRA_ATTR


class Logger(logging.Logger):
    """Logger with structured extra fields and handler sharing for derived loggers."""

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name
            config: Logger configuration (defaults to info level)
            extra: Pre-populated extra fields added to every record
        """
        if config is None:
            config = LogConfig()
        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
        else:
            super().__init__(name, config.level)
        self._config = config
        self._extra = dict(extra or {})
        self._root_logger: Logger | None = None

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def logging_disabled(self) -> bool:
        return self._config.level is False

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        merged = dict(self._extra)
        if extra:
            merged.update(extra)
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, EXTRA_ATTR, merged)
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE level message."""
        if self.isEnabledFor(LogConstants.TRACE):
            self._log(LogConstants.TRACE, msg, args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        if self._root_logger is not None and not self._root_logger.isEnabledFor(level):
            return False
        return super().isEnabledFor(level)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """Derived loggers hand records to the root logger's handlers."""
        if self._root_logger is None:
            super().callHandlers(record)
            return
        for handler in self._root_logger.handlers:
            if record.levelno >= handler.level:
                handler.handle(record)
