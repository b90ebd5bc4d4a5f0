"""
Exception hierarchy for blart.

Everything that can go wrong before the child is running is a ConfigError:
the CLI reports it together with the usage text and exits with status 1.
Runtime problems (watcher errors, signalling a dead child) are logged and
never raised out of the supervisor's threads.
"""

from typing import Any


class BlartError(Exception):
    """
    Base exception for all blart errors.

    Carries a human-readable message and optional context fields which are
    appended to the string form.

    Example:
        try:
            supervisor.start()
        except BlartError as e:
            lg.error(f"startup failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(BlartError):
    """
    Startup configuration errors.

    Examples:
        - No files to watch
        - No command specified
        - Invalid delay or debounce mode
        - Unreadable config file
    """

    pass


class SignalNameError(ConfigError):
    """Raised when a signal name is not known on this platform."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown signal: {name}")


class WatchError(ConfigError):
    """Raised when a path cannot be watched (usually because it does not exist)."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot watch {path}: {reason}")


class ChildStartError(ConfigError):
    """Raised when the child command cannot be started."""

    def __init__(self, argv: list[str], reason: str) -> None:
        self.argv = argv
        self.reason = reason
        super().__init__(f"failed to start {argv[0] if argv else '<empty>'}: {reason}")
