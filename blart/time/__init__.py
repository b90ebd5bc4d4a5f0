"""Time utilities: duration parsing and formatting."""

from .delta import InvalidDurationError, delta_str, delta_to_secs

__all__ = ["InvalidDurationError", "delta_str", "delta_to_secs"]
