"""
Signal forwarding and the escalating shutdown sequence.

Every signal blart receives is forwarded to the child. A termination signal
(SIGINT, SIGTERM, or SIGKILL where it can be observed) additionally starts
the shutdown sequence, at most once per supervisor lifetime:

    RUNNING -> DRAINING        wait up to graceful_timeout for the child
    DRAINING -> EXITED         child exited in time: exit code 0, no kill
    DRAINING -> FORCE_KILLING  deadline hit: kill the child once, then wait
                               up to kill_timeout whatever happens
    FORCE_KILLING -> EXITED    exit code 1

The sequence runs on its own thread so signals keep being forwarded while
it is in progress.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from .signals import is_termination, signal_name
from .time import delta_str

if TYPE_CHECKING:
    from .log import Logger

GRACEFUL_TIMEOUT = 5.0
KILL_TIMEOUT = 1.0


class ShutdownState(Enum):
    RUNNING = "running"
    DRAINING = "draining"
    FORCE_KILLING = "force_killing"
    EXITED = "exited"


class ShutdownTarget(Protocol):
    """What the shutdown controller needs from the child process."""

    def send_signal(self, sig: int) -> bool: ...

    def kill(self) -> bool: ...

    def wait_exit(self, timeout: float | None = None) -> bool: ...


class ShutdownController:
    """
    Forwards signals to the child and drives the shutdown state machine.

    Example:
        controller = ShutdownController(lg, child)
        controller.handle(signal.SIGTERM)  # forwarded, then drain/kill
        controller.wait_done()
        sys.exit(controller.exit_code)
    """

    def __init__(
        self,
        lg: Logger,
        target: ShutdownTarget,
        graceful_timeout: float = GRACEFUL_TIMEOUT,
        kill_timeout: float = KILL_TIMEOUT,
        on_done: Callable[[int], None] | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            lg: Logger
            target: Child to signal
            graceful_timeout: Seconds to wait for a clean exit before killing
            kill_timeout: Seconds to wait after the kill before giving up
            on_done: Called with the exit code when the sequence finishes
        """
        self._lg = lg
        self._target = target
        self._graceful_timeout = graceful_timeout
        self._kill_timeout = kill_timeout
        self._on_done = on_done
        self._lock = threading.Lock()
        self._state = ShutdownState.RUNNING
        self._exit_code = 0
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> ShutdownState:
        with self._lock:
            return self._state

    @property
    def engaged(self) -> bool:
        """Whether a shutdown sequence has started."""
        return self.state is not ShutdownState.RUNNING

    @property
    def exit_code(self) -> int:
        """0 unless the sequence had to force-kill the child."""
        with self._lock:
            return self._exit_code

    def wait_done(self, timeout: float | None = None) -> bool:
        """Wait for a started shutdown sequence to reach EXITED."""
        return self._done.wait(timeout)

    def handle(self, sig: int) -> None:
        """
        Forward a received signal to the child and react to termination signals.

        Forwarding always happens first, even while a sequence is already
        draining or force-killing; a second termination signal never starts
        a second sequence.
        """
        self._lg.debug("relaying signal", extra={"signal": signal_name(sig)})
        self._target.send_signal(sig)

        if not is_termination(sig):
            return
        with self._lock:
            if self._state is not ShutdownState.RUNNING:
                return
            self._state = ShutdownState.DRAINING
            self._thread = threading.Thread(
                target=self._run_sequence, name="blart-shutdown", daemon=True
            )
        self._thread.start()

    def _transition(self, state: ShutdownState) -> None:
        with self._lock:
            self._state = state

    def _run_sequence(self) -> None:
        self._lg.info("attempting to shut down cleanly")
        self._lg.info(
            f"waiting up to {delta_str(self._graceful_timeout)} for child to exit"
        )
        if self._target.wait_exit(self._graceful_timeout):
            self._finish(0)
            return

        self._transition(ShutdownState.FORCE_KILLING)
        self._lg.warning("attempting to now kill child")
        self._target.kill()
        # Outcome of the second race is ignored
        self._target.wait_exit(self._kill_timeout)
        self._lg.warning("child did not exit cleanly, exiting")
        self._finish(1)

    def _finish(self, exit_code: int) -> None:
        with self._lock:
            self._exit_code = exit_code
            self._state = ShutdownState.EXITED
        self._done.set()
        if self._on_done is not None:
            self._on_done(exit_code)
