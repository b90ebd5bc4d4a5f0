"""
Configuration loading.

Settings are merged from, lowest precedence first:

1. Built-in defaults (see ``SupervisorConfig``)
2. An optional YAML file (``--config``)
3. ``BLART_*`` environment variables (``BLART_DELAY=500ms``,
   ``BLART_LOGGING_LEVEL=debug``)
4. Command-line flags

Example config file:

    files:
      - /etc/nginx/nginx.conf
      - /etc/nginx/conf.d
    signal: HUP
    delay: 2s
    debounce_mode: reset
    logging:
      level: debug
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .constants import ENV_PREFIX, MAX_CONFIG_SIZE_BYTES
from .schemas import SupervisorConfig

# Top-level keys that contain an underscore; env keys are matched against
# these before being split into nested sections
_FLAT_KEYS = ("debounce_mode",)


def load_yaml(path: str | Path) -> dict[str, Any]:
    """
    Load a YAML config file into a dict.

    Raises:
        ConfigError: If the file is missing, too large, malformed, or not a mapping
    """
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ConfigError("cannot read config file", path=str(path), error=str(e)) from e
    if size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "config file too large", path=str(path), max_bytes=MAX_CONFIG_SIZE_BYTES
        )

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError("malformed config file", path=str(path), error=str(e)) from e
    except OSError as e:
        raise ConfigError("cannot read config file", path=str(path), error=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", path=str(path))
    return data


def _env_key_to_path(key: str) -> list[str]:
    """BLART_LOGGING_LEVEL -> ["logging", "level"]; BLART_DEBOUNCE_MODE -> ["debounce_mode"]."""
    name = key[len(ENV_PREFIX) :].lower()
    if name in _FLAT_KEYS or "_" not in name:
        return [name]
    return name.split("_", 1)


def _convert_env_value(value: str) -> bool | int | float | str | None:
    """Convert an environment variable string to a YAML-like scalar."""
    lowered = value.lower()
    if lowered in ("null", "none", ""):
        return None
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return float(value) if "." in value else int(value)
    except ValueError:
        return value


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``BLART_*`` variables into a nested config dict."""
    environ = os.environ if environ is None else environ
    result: dict[str, Any] = {}
    for key, raw in environ.items():
        if not key.startswith(ENV_PREFIX) or key == ENV_PREFIX:
            continue
        value = _convert_env_value(raw)
        if value is None:
            continue
        path = _env_key_to_path(key)
        current = result
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = value
    return result


def merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``; None values are skipped."""
    result = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            current = result.get(key)
            result[key] = merge(current if isinstance(current, dict) else {}, value)
        else:
            result[key] = value
    return result


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"].removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


def load_config(
    overrides: Mapping[str, Any] | None = None,
    config_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> SupervisorConfig:
    """
    Build and validate the supervisor configuration.

    Args:
        overrides: Values from the command line (None values are ignored)
        config_file: Optional YAML file
        environ: Environment to read ``BLART_*`` variables from (default: os.environ)

    Raises:
        ConfigError: If any source is unreadable or a value is invalid
    """
    data: dict[str, Any] = {}
    if config_file is not None:
        data = merge(data, load_yaml(config_file))
    data = merge(data, env_overrides(environ))
    data = merge(data, overrides or {})

    try:
        return SupervisorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_describe(e)) from e
