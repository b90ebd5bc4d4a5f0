"""
Duration parsing and formatting.

Example Usage:
    >>> delta_to_secs("1m30s")
    90.0
    >>> delta_to_secs("250ms")
    0.25
    >>> delta_str(0.25)
    '250ms'
    >>> delta_str(90)
    '1m30s'
"""

import math
import re

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# Longer units must come first so "ms" is not read as "m" followed by "s"
_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # micro sign
    "μs": 1e-6,  # greek mu
    "ms": 1e-3,
    "d": SECONDS_PER_DAY,
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
    "s": 1.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d+)?|\.\d+)(ns|us|µs|μs|ms|d|h|m|s)")


class InvalidDurationError(ValueError):
    """Raised when an invalid duration value or string is provided."""

    pass


def delta_to_secs(duration_str: str) -> float:
    """
    Parse a duration string to seconds.

    Accepts compound strings of number+unit components with units
    d, h, m, s, ms, us (or µs/μs) and ns, e.g. "3s", "1.5s", "1m30s",
    "300ms". A bare "0" is accepted as zero.

    Raises:
        InvalidDurationError: If the string cannot be parsed or repeats a unit
    """
    if not isinstance(duration_str, str) or not duration_str.strip():
        raise InvalidDurationError("duration string cannot be empty")

    text = duration_str.strip()
    if text == "0":
        return 0.0

    total = 0.0
    seen: set[str] = set()
    pos = 0
    for match in _COMPONENT.finditer(text):
        if match.start() != pos:
            break
        value, unit = match.groups()
        if unit in seen:
            raise InvalidDurationError(f"duplicate unit '{unit}' in '{duration_str}'")
        seen.add(unit)
        total += float(value) * _UNITS[unit]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise InvalidDurationError(f"could not parse duration: '{duration_str}'")
    return total


def delta_str(secs: float) -> str:
    """
    Format a duration in seconds as a compact human-readable string.

    Durations under a second are shown in ms (or us below a millisecond);
    longer ones as h/m/s components, with up to three decimals on seconds.

    Examples:
        >>> delta_str(5)
        '5s'
        >>> delta_str(3661.5)
        '1h1m1.5s'
        >>> delta_str(0.0015)
        '1.5ms'
    """
    if not isinstance(secs, (int, float)) or math.isnan(secs) or math.isinf(secs):
        raise InvalidDurationError(f"invalid duration: {secs!r}")
    if secs < 0:
        raise InvalidDurationError(f"duration cannot be negative, got {secs}")
    if secs == 0:
        return "0s"
    if secs < 1e-3:
        return f"{_trim(secs * 1e6)}us"
    if secs < 1:
        return f"{_trim(secs * 1e3)}ms"

    secs = round(secs, 3)
    hours, rest = divmod(secs, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
    out = ""
    if hours:
        out += f"{int(hours)}h"
    if hours or minutes:
        out += f"{int(minutes)}m"
    return out + f"{_trim(seconds)}s"


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")
