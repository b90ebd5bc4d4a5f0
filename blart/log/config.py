"""
Configuration for the logging layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from a name, numeric value, or boolean.

    Args:
        level: Level name ("debug", "info", ...), number, or False to disable

    Returns:
        Numeric log level, or False when logging is disabled

    Raises:
        InvalidLogLevelError: If the level name is unknown
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    name = str(level).strip().lower()
    if name.isnumeric():
        return int(name)
    if name in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[name]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable logger configuration.

    Attributes:
        level: Numeric level, or False to disable logging
        colors: Whether to emit ANSI colors
        micros: Whether timestamps carry microseconds
    """

    level: int | bool = logging.INFO
    colors: bool = True
    micros: bool = False

    @classmethod
    def from_params(
        cls, level: str | int | bool = "info", colors: bool = True, micros: bool = False
    ) -> LogConfig:
        """Create LogConfig from individual parameters, resolving the level name."""
        return cls(level=resolve_level(level), colors=colors, micros=micros)

    @classmethod
    def from_dict(cls, section: dict[str, Any] | None) -> LogConfig:
        """
        Create LogConfig from the ``logging`` section of a config dict.

        Example:
            LogConfig.from_dict({"level": "debug", "colors": False})
        """
        section = section or {}
        return cls.from_params(
            level=section.get("level", "info"),
            colors=bool(section.get("colors", True)),
            micros=bool(section.get("micros", False)),
        )
