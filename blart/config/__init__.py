"""
Configuration package.

This module provides:
- SupervisorConfig, the validated settings model (Pydantic)
- load_config, merging defaults, a YAML file, BLART_* variables and CLI flags
"""

from .config import env_overrides, load_config, load_yaml, merge
from .constants import ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import (
    DEFAULT_DELAY_SECS,
    DEFAULT_SIGNAL,
    LoggingConfig,
    SupervisorConfig,
)

__all__ = [
    "DEFAULT_DELAY_SECS",
    "DEFAULT_SIGNAL",
    "ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
    "LoggingConfig",
    "SupervisorConfig",
    "env_overrides",
    "load_config",
    "load_yaml",
    "merge",
]
