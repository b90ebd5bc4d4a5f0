"""
Constants for the logging layer.
"""

import logging


class LogConstants:
    """Constants for the logging layer."""

    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"

    # Messages are padded to this width before extra fields are appended
    RULE_WIDTH: int = 50

    TRACE: int = 5

    LEVEL_NAMES: dict[str, int | bool] = {
        "trace": TRACE,
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
        "false": False,  # Disables all logging
    }

    RESET: str = "\x1b[0m"
