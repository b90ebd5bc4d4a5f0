"""
Supervisor: wires the watcher, debouncer, signal relay and shutdown
controller around one child process.

Threads while running:

- watchdog observer, publishing changes on the watcher channel
- aggregator, turning changes into debouncer notifications
- debounce dispatcher, signalling the child after each burst
- signal relay, forwarding received signals to the shutdown controller
- child waiter, publishing the child's exit
- shutdown sequence (only after a termination signal)

The main thread blocks until the child exits or the shutdown sequence
finishes, whichever comes first.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from .child import ChildProcess
from .debounce import Debouncer
from .log import derive_lg
from .relay import SignalRelay
from .shutdown import GRACEFUL_TIMEOUT, KILL_TIMEOUT, ShutdownController
from .time import delta_str
from .watch import ChangeAggregator, Watcher

if TYPE_CHECKING:
    from .config import SupervisorConfig
    from .log import Logger


class Supervisor:
    """
    Runs one child under blart's watch-and-relay regime.

    Example:
        config = load_config({"files": ["app.conf"], "command": ["app"]})
        exit_code = Supervisor(lg, config).run()
    """

    def __init__(
        self,
        lg: Logger,
        config: SupervisorConfig,
        child: ChildProcess | None = None,
        watcher: Watcher | None = None,
        relay_signals: bool = True,
        graceful_timeout: float = GRACEFUL_TIMEOUT,
        kill_timeout: float = KILL_TIMEOUT,
    ) -> None:
        """
        Args:
            lg: Root logger; components log through derived loggers
            config: Validated configuration
            child: Child process (default: built from ``config.command``)
            watcher: Filesystem watcher (default: a watchdog-backed Watcher)
            relay_signals: Install OS signal handlers (main thread only)
            graceful_timeout: Seconds a terminating child gets before the kill
            kill_timeout: Seconds to wait after the kill
        """
        self._lg = lg
        self._config = config
        self._child = child or ChildProcess(derive_lg(lg, "child"), config.command)
        self._watcher = watcher or Watcher(derive_lg(lg, "watch"))
        self._wake = threading.Event()
        self._kill_timeout = kill_timeout

        self._debouncer = Debouncer(
            derive_lg(lg, "debounce"),
            self._child,
            config.sig,
            config.delay,
            config.debounce_mode,
        )
        self._aggregator = ChangeAggregator(
            derive_lg(lg, "watch"), self._watcher, self._debouncer
        )
        self._controller = ShutdownController(
            derive_lg(lg, "shutdown"),
            self._child,
            graceful_timeout=graceful_timeout,
            kill_timeout=kill_timeout,
            on_done=lambda _code: self._wake.set(),
        )
        self._relay = (
            SignalRelay(derive_lg(lg, "relay"), self._controller.handle)
            if relay_signals
            else None
        )

    @property
    def child(self) -> ChildProcess:
        return self._child

    @property
    def watcher(self) -> Watcher:
        return self._watcher

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    @property
    def controller(self) -> ShutdownController:
        return self._controller

    def start(self) -> None:
        """
        Validate, start watching, then start the child and the background threads.

        Raises:
            ConfigError: On an empty watch list or command, an unwatchable
                path, or a child that fails to start
        """
        self._config.check_runnable()
        for path in self._config.files:
            self._watcher.add(path)
        self._aggregator.start()
        self._watcher.start()

        self._child.add_exit_callback(lambda _code: self._wake.set())
        self._child.start()
        self._debouncer.start()
        if self._relay is not None:
            self._relay.install()
        self._lg.debug(
            "watching for changes",
            extra={
                "paths": self._watcher.paths,
                "signal": self._config.signal,
                "delay": delta_str(self._config.delay),
                "mode": self._config.debounce_mode.value,
            },
        )

    def wait(self) -> int:
        """
        Block until the child exits or a shutdown sequence finishes.

        Returns:
            0 after a clean child exit, 1 if the child had to be force-killed
        """
        self._wake.wait()
        if self._controller.engaged:
            # Bounded by the graceful and kill timeouts
            self._controller.wait_done()
        exit_code = self._controller.exit_code
        if exit_code:
            self._lg.warning("now exiting", extra={"status": exit_code})
        else:
            self._lg.info("now exiting", extra={"status": exit_code})
        return exit_code

    def close(self) -> None:
        """Stop background threads, restore signal handlers and reap the child."""
        if self._relay is not None:
            self._relay.uninstall()
        self._watcher.stop()
        self._debouncer.stop()
        self._aggregator.join(timeout=1.0)

        if self._child.started and not self._child.exited:
            self._lg.warning("killing child left running")
            self._child.kill()
            self._child.wait_exit(self._kill_timeout)

    def run(self) -> int:
        """Start, wait, and always clean up."""
        try:
            self.start()
            return self.wait()
        finally:
            self.close()
