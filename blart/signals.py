"""
Signal name table.

Maps short signal names ("HUP", "TERM", ...) to the platform's signal
numbers. The table lists every name blart knows about; entries the running
platform does not define (e.g. SIGHUP on Windows) are left out, so the set
of accepted names is platform-dependent.
"""

from __future__ import annotations

import signal

from .exceptions import SignalNameError

# Names accepted by --signal, without the SIG prefix
KNOWN_NAMES: tuple[str, ...] = (
    "ABRT",
    "ALRM",
    "BUS",
    "FPE",
    "HUP",
    "ILL",
    "INT",
    "KILL",
    "PIPE",
    "QUIT",
    "SEGV",
    "TERM",
    "TRAP",
    "USR1",
    "USR2",
    "WINCH",
)

# Signals that start the graceful-then-forced shutdown sequence
TERMINATION_NAMES: tuple[str, ...] = ("INT", "KILL", "TERM")

# Signals a process can never install a handler for
UNCATCHABLE_NAMES: tuple[str, ...] = ("KILL", "STOP")

# Not relayed: it reports our own child's exit back to us
UNRELAYED_NAMES: tuple[str, ...] = ("CHLD",)


def _build_table(names: tuple[str, ...]) -> dict[str, signal.Signals]:
    table = {}
    for name in names:
        sig = getattr(signal, "SIG" + name, None)
        if sig is not None:
            table[name] = signal.Signals(sig)
    return table


SIGNALS: dict[str, signal.Signals] = _build_table(KNOWN_NAMES)

TERMINATION_SIGNALS: frozenset[signal.Signals] = frozenset(
    _build_table(TERMINATION_NAMES).values()
)


def signal_by_name(name: str) -> signal.Signals:
    """
    Look up a signal by name.

    Lookup is case-insensitive and accepts an optional SIG prefix, so
    "hup", "HUP" and "SIGHUP" all resolve to SIGHUP.

    Raises:
        SignalNameError: If the name is not in the table for this platform
    """
    key = name.strip().upper()
    if key.startswith("SIG"):
        key = key[3:]
    try:
        return SIGNALS[key]
    except KeyError:
        raise SignalNameError(name) from None


def signal_name(sig: int) -> str:
    """Return the canonical name of a signal number (e.g. "SIGHUP")."""
    try:
        return signal.Signals(sig).name
    except ValueError:
        return f"signal {sig}"


def is_termination(sig: int) -> bool:
    """Check whether a signal starts the shutdown sequence."""
    return sig in TERMINATION_SIGNALS


def relayable_signals() -> list[int]:
    """
    Return every signal the supervisor should try to catch and relay.

    That is all valid signals on the platform except the uncatchable ones
    and SIGCHLD. Some of the remaining ones may still be refused by the OS
    (e.g. signals reserved by the C library); callers skip those.
    """
    skip = set(_build_table(UNCATCHABLE_NAMES + UNRELAYED_NAMES).values())
    result: list[int] = []
    for sig in sorted(signal.valid_signals()):
        try:
            sig = signal.Signals(sig)
        except ValueError:
            # Real-time signals have no enum member; relay them by number
            pass
        if sig not in skip:
            result.append(sig)
    return result
