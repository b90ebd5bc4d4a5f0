"""
ANSI colors for log output.
"""

import logging

from .constants import LogConstants


class ColorManager:
    """Maps log levels to ANSI color sequences."""

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    GRAY = "\x1b[38;5;244m"
    BOLD = "\x1b[1m"
    RESET = LogConstants.RESET

    COLORS: dict[int, str] = {
        LogConstants.TRACE: GRAY,
        logging.DEBUG: GREEN,
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def for_level(level: int) -> str:
        """Return the color for a level, falling back to the nearest lower level."""
        for known in sorted(ColorManager.COLORS, reverse=True):
            if level >= known:
                return ColorManager.COLORS[known]
        return ColorManager.GRAY
