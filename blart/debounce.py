"""
Trailing debounce of change notifications into child signals.

Any number of threads call ``notify()``; one dispatch thread turns each burst
of notifications into exactly one signal to the child. This is a trailing
debounce: the first notification of a burst does not fire immediately. The
dispatcher wakes, waits out the delay, signals the child once, and only then
re-arms. Notifications that land while a cycle is in progress are absorbed
into that cycle; the first one after the dispatcher re-arms starts a new one.

Two ways of measuring the delay are supported:

- ``DebounceMode.FIXED``: the delay runs from the moment the dispatcher woke,
  so a burst fires ``delay`` after its first notification no matter how many
  follow. A continuous stream of notifications still fires once per delay.
- ``DebounceMode.RESET``: each notification during the window pushes the fire
  out to ``delay`` after the latest notification.
"""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from .signals import signal_name

if TYPE_CHECKING:
    from .log import Logger


class DebounceMode(str, Enum):
    """How the quiescence window is measured."""

    FIXED = "fixed"
    RESET = "reset"


class SignalTarget(Protocol):
    """What the debouncer needs from the child process."""

    @property
    def started(self) -> bool: ...

    def send_signal(self, sig: int) -> bool: ...


class Debouncer:
    """
    Coalesces change notifications into delayed child signals.

    Example:
        debouncer = Debouncer(lg, child, signal.SIGHUP, delay=3.0)
        debouncer.start()
        debouncer.notify()  # child gets SIGHUP ~3s later
        debouncer.stop()
    """

    def __init__(
        self,
        lg: Logger,
        target: SignalTarget,
        sig: int,
        delay: float,
        mode: DebounceMode = DebounceMode.FIXED,
    ) -> None:
        """
        Initialize the debouncer (does not start the dispatch thread).

        Args:
            lg: Logger
            target: Child to signal; fires are dropped while it is not started
            sig: Signal to send on each fire
            delay: Quiescence window in seconds
            mode: How the window is measured
        """
        if delay < 0:
            raise ValueError(f"delay cannot be negative, got {delay}")
        self._lg = lg
        self._target = target
        self._sig = sig
        self._delay = delay
        self._mode = DebounceMode(mode)
        self._cond = threading.Condition()
        self._pending = False
        self._last_notify = 0.0
        self._running = False
        self._idle = threading.Event()
        self._thread: threading.Thread | None = None
        self._fire_count = 0

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def mode(self) -> DebounceMode:
        return self._mode

    @property
    def fire_count(self) -> int:
        """Number of signals delivered to the child so far."""
        with self._cond:
            return self._fire_count

    def is_running(self) -> bool:
        with self._cond:
            return self._running

    def start(self) -> Debouncer:
        """Start the dispatch thread."""
        with self._cond:
            if self._running:
                return self
            self._running = True
        self._thread = threading.Thread(
            target=self._run, name="blart-debounce", daemon=True
        )
        self._thread.start()
        return self

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the dispatch thread; a pending fire is abandoned."""
        with self._cond:
            self._running = False
            self._cond.notify_all()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def notify(self) -> None:
        """Record that something changed. Never blocks on the dispatch cycle."""
        with self._cond:
            self._pending = True
            self._last_notify = time.monotonic()
            self._cond.notify()

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait until the dispatcher is armed and waiting for a notification."""
        return self._idle.wait(timeout)

    def _run(self) -> None:
        while True:
            with self._cond:
                # Re-arm: whatever arrived during the last cycle was covered by it
                self._pending = False
                self._idle.set()
                while not self._pending and self._running:
                    self._cond.wait()
                self._idle.clear()
                if not self._running:
                    return
                if not self._wait_window(time.monotonic()):
                    return
            self._fire()

    def _wait_window(self, woke_at: float) -> bool:
        """Wait out the quiescence window. Caller holds the condition lock."""
        while self._running:
            anchor = self._last_notify if self._mode is DebounceMode.RESET else woke_at
            remaining = anchor + self._delay - time.monotonic()
            if remaining <= 0:
                return True
            self._cond.wait(remaining)
        return False

    def _fire(self) -> None:
        if not self._target.started:
            self._lg.debug("child not started, dropping signal")
            return
        self._lg.info("signalling child", extra={"signal": signal_name(self._sig)})
        if self._target.send_signal(self._sig):
            with self._cond:
                self._fire_count += 1
