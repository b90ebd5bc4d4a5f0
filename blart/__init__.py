"""
blart - file-watching signal relay for a supervised child process.

Watches a set of files and directories, starts a child command, and sends
the child a signal (SIGHUP by default) a short while after the watched set
changes. Every signal delivered to blart itself is relayed to the child, and
termination signals run a graceful-then-forced shutdown.
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    BlartError,
    ChildStartError,
    ConfigError,
    SignalNameError,
    WatchError,
)

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("blart")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.2.0-dev"

__all__ = [
    "__version__",
    "BlartError",
    "ChildStartError",
    "ConfigError",
    "SignalNameError",
    "WatchError",
]
