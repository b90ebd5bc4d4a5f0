"""
Supervised child process.

Wraps ``subprocess.Popen`` with the few operations the supervisor needs:
fire-and-forget signalling that tolerates a dead child, and a one-shot
exit notification that any number of threads can wait on, before or after
the child has exited.
"""

from __future__ import annotations

import signal
import subprocess
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .exceptions import ChildStartError
from .signals import signal_name

if TYPE_CHECKING:
    from .log import Logger


class ChildProcess:
    """
    The one child process blart supervises.

    The child inherits blart's stdin, stdout and stderr. It is started once
    and never restarted; once it exits, the exit event stays set.

    Example:
        child = ChildProcess(lg, ["nginx", "-g", "daemon off;"])
        child.start()
        child.send_signal(signal.SIGHUP)
        if not child.wait_exit(timeout=5.0):
            child.kill()
    """

    def __init__(
        self,
        lg: Logger,
        argv: list[str],
        popen: Callable[..., Any] = subprocess.Popen,
    ) -> None:
        """
        Initialize the child (does not start it).

        Args:
            lg: Logger for child lifecycle messages
            argv: Command and arguments
            popen: Process factory, replaceable in tests
        """
        self._lg = lg
        self._argv = list(argv)
        self._popen = popen
        self._proc: Any = None
        self._returncode: int | None = None
        self._exited = threading.Event()
        self._exit_callbacks: list[Callable[[int], None]] = []
        self._lock = threading.Lock()

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    @property
    def started(self) -> bool:
        return self._proc is not None

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    @property
    def returncode(self) -> int | None:
        """Exit status, or None while the child is running (or not started)."""
        return self._returncode

    @property
    def exited(self) -> bool:
        return self._exited.is_set()

    def add_exit_callback(self, callback: Callable[[int], None]) -> None:
        """Register a callback run (on the waiter thread) once the child exits."""
        with self._lock:
            if not self._exited.is_set():
                self._exit_callbacks.append(callback)
                return
        callback(self._returncode if self._returncode is not None else -1)

    def start(self) -> None:
        """
        Start the child and the thread that waits for it to exit.

        Raises:
            ChildStartError: If the command is empty or cannot be executed
        """
        if self._proc is not None:
            return
        if not self._argv:
            raise ChildStartError(self._argv, "no command specified")
        try:
            self._proc = self._popen(self._argv)
        except (OSError, ValueError) as e:
            raise ChildStartError(self._argv, str(e)) from e

        self._lg.info(
            "starting child", extra={"cmd": " ".join(self._argv), "pid": self.pid}
        )
        waiter = threading.Thread(
            target=self._wait_for_exit, name="blart-child-waiter", daemon=True
        )
        waiter.start()

    def _wait_for_exit(self) -> None:
        returncode = self._proc.wait()
        with self._lock:
            self._returncode = returncode
            self._exited.set()
            callbacks = list(self._exit_callbacks)
            self._exit_callbacks.clear()
        self._lg.info("child exited", extra={"status": returncode})
        for callback in callbacks:
            try:
                callback(returncode)
            except Exception as e:
                self._lg.error("child exit callback failed", extra={"exception": e})

    def send_signal(self, sig: int) -> bool:
        """
        Send a signal to the child without waiting on it.

        Signalling a child that has not started or has already exited is not
        an error: nothing is sent and False is returned.

        Returns:
            True if the signal was delivered to a live process
        """
        if self._proc is None or self._exited.is_set():
            return False
        try:
            self._proc.send_signal(sig)
        except OSError as e:
            self._lg.debug(
                "could not signal child",
                extra={"signal": signal_name(sig), "exception": e},
            )
            return False
        return True

    def kill(self) -> bool:
        """Forcefully terminate the child (SIGKILL, or TerminateProcess on Windows)."""
        sigkill = getattr(signal, "SIGKILL", None)
        if sigkill is not None:
            return self.send_signal(sigkill)
        if self._proc is None or self._exited.is_set():
            return False
        try:
            self._proc.kill()
        except OSError as e:
            self._lg.debug("could not kill child", extra={"exception": e})
            return False
        return True

    def wait_exit(self, timeout: float | None = None) -> bool:
        """
        Wait for the child to exit.

        Safe to call from any number of threads, any number of times; once
        the child has exited every call returns True immediately.

        Returns:
            True if the child has exited, False if the timeout elapsed first
        """
        return self._exited.wait(timeout)

    def wait(self) -> int | None:
        """Block until the child exits and return its exit status."""
        self._exited.wait()
        return self._returncode
