"""
Factory for creating and configuring loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(config: LogConfig, stream: TextIO | None = None) -> Logger:
        """
        Create the root logger ("/") writing to stdout.

        Example:
            >>> lg = LoggerFactory.create_root(LogConfig.from_params("debug"))
            >>> lg.info("starting child", extra={"cmd": "nginx"})
            [12:34:56,789] [I] starting child     [cmd:nginx] [1234] [/]
        """
        return LoggerFactory.create("/", config, stream=stream)

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        stream: TextIO | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a standalone logger with its own console handler.

        The logger is not registered with the ``logging`` module's manager,
        so it never propagates to (or picks up handlers from) the Python
        root logger.
        """
        lg = Logger(name, config, extra=extra)
        lg.propagate = False

        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(LogFormatter(config))
        if config.level is not False:
            handler.setLevel(config.level)
        lg.addHandler(handler)
        return lg

    @staticmethod
    def derive(
        parent: Logger, tag: str, extra: dict[str, Any] | None = None
    ) -> Logger:
        """
        Derive a child logger for a component.

        The child's name is the parent's name with the tag appended
        ("/" + "debounce" -> "/debounce"); it writes through the root
        logger's handlers and inherits its level.
        """
        root = parent._root_logger or parent
        name = parent.name.rstrip("/") + "/" + tag
        merged = dict(parent._extra)
        if extra:
            merged.update(extra)
        child = Logger(name, parent.config, extra=merged)
        child.propagate = False
        child._root_logger = root
        return child
