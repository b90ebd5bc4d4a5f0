"""
OS signal relay.

Installs a handler for every catchable signal. Handlers only enqueue the
signal number; a relay thread hands each one to a callback (normally
``ShutdownController.handle``), so no logging or locking ever happens in
signal-handler context.
"""

from __future__ import annotations

import queue
import signal
import threading
from collections.abc import Callable, Iterable
from types import FrameType
from typing import TYPE_CHECKING, Any

from .signals import relayable_signals, signal_name

if TYPE_CHECKING:
    from .log import Logger

_STOP = -1


class SignalRelay:
    """
    Catches signals sent to blart and passes them to a callback on a relay thread.

    Must be installed from the main thread (a Python restriction on
    ``signal.signal``).

    Example:
        relay = SignalRelay(lg, controller.handle)
        relay.install()
        ...
        relay.uninstall()
    """

    def __init__(
        self,
        lg: Logger,
        on_signal: Callable[[int], None],
        signals: Iterable[int] | None = None,
    ) -> None:
        """
        Args:
            lg: Logger
            on_signal: Called with each received signal number, in order
            signals: Signals to catch (default: every relayable signal)
        """
        self._lg = lg
        self._on_signal = on_signal
        self._signals = list(signals) if signals is not None else None
        self._queue: queue.SimpleQueue[int] = queue.SimpleQueue()
        self._original_handlers: dict[int, Any] = {}
        self._thread: threading.Thread | None = None

    @property
    def installed(self) -> list[int]:
        """Signals that currently have the relay's handler."""
        return list(self._original_handlers)

    def install(self) -> None:
        """Install signal handlers and start the relay thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="blart-signal-relay", daemon=True
        )
        self._thread.start()

        for sig in self._signals if self._signals is not None else relayable_signals():
            try:
                self._original_handlers[sig] = signal.signal(sig, self._handle_signal)
            except (OSError, ValueError, RuntimeError) as e:
                # Reserved by the C library or not supported here
                self._lg.trace(
                    "cannot relay signal",
                    extra={"signal": signal_name(sig), "exception": e},
                )
        self._lg.debug("relaying signals", extra={"count": len(self._original_handlers)})

    def uninstall(self, timeout: float = 2.0) -> None:
        """Restore the original handlers and stop the relay thread."""
        for sig, handler in self._original_handlers.items():
            try:
                signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
            except (OSError, ValueError, RuntimeError) as e:
                self._lg.debug(
                    "failed to restore signal handler",
                    extra={"signal": signal_name(sig), "exception": e},
                )
        self._original_handlers = {}

        if self._thread is not None:
            self._queue.put(_STOP)
            if self._thread is not threading.current_thread():
                self._thread.join(timeout)
            self._thread = None

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        self._queue.put(signum)

    def _run(self) -> None:
        while True:
            signum = self._queue.get()
            if signum == _STOP:
                return
            try:
                self._on_signal(signum)
            except Exception as e:
                self._lg.error(
                    "signal handling failed",
                    extra={"signal": signal_name(signum), "exception": e},
                )
