"""
Filesystem watching and change aggregation.

``Watcher`` wraps a watchdog observer and publishes what it sees on a single
channel: ``ChangeEvent`` items for changes and exception items for errors.
``ChangeAggregator`` drains that channel, notifies the debouncer once per
change and re-subscribes renamed paths. Errors are logged and never stop it.
"""

from __future__ import annotations

import os
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import WatchError

if TYPE_CHECKING:
    from .log import Logger


class ChangeOp(Enum):
    """Kind of filesystem change."""

    CREATE = "create"
    WRITE = "write"
    REMOVE = "remove"
    RENAME = "rename"
    CHMOD = "chmod"


# watchdog event_type -> ChangeOp; access events (opened/closed) are not changes
_WATCHDOG_OPS: dict[str, ChangeOp] = {
    "created": ChangeOp.CREATE,
    "modified": ChangeOp.WRITE,
    "deleted": ChangeOp.REMOVE,
    "moved": ChangeOp.RENAME,
}


@dataclass(frozen=True)
class ChangeEvent:
    """A change to a watched path."""

    path: str
    op: ChangeOp


# Channel items are changes or errors; None wakes the reader to stop
WatchItem = ChangeEvent | Exception | None


def split_paths(files: str) -> list[str]:
    """Split a colon-separated path list, dropping empty entries."""
    return [p for p in files.split(":") if p]


def event_from_watchdog(event: Any) -> ChangeEvent | None:
    """Map a watchdog FileSystemEvent to a ChangeEvent (None for access events)."""
    op = _WATCHDOG_OPS.get(event.event_type)
    if op is None:
        return None
    path = event.src_path
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    return ChangeEvent(path=os.path.abspath(path), op=op)


class Watcher:
    """
    Watches files and directories with watchdog.

    Directories are watched non-recursively, like the files in them; a file
    path gets a watch of its own.

    Example:
        watcher = Watcher(lg)
        watcher.add("/etc/nginx/nginx.conf")
        watcher.start()
        item = watcher.channel.get()
        watcher.stop()
    """

    def __init__(self, lg: Logger, observer: Any = None) -> None:
        """
        Args:
            lg: Logger
            observer: watchdog observer (default: a new ``watchdog.observers.Observer``)
        """
        if observer is None:
            from watchdog.observers import Observer

            observer = Observer()
        self._lg = lg
        self._observer = observer
        self._channel: queue.Queue[WatchItem] = queue.Queue()
        self._watches: dict[str, Any] = {}
        self._lock = threading.RLock()
        self._handler = self._create_handler()
        self._running = False

    @property
    def channel(self) -> queue.Queue[WatchItem]:
        """Where changes and errors are published."""
        return self._channel

    @property
    def paths(self) -> list[str]:
        with self._lock:
            return list(self._watches)

    def _create_handler(self) -> Any:
        from watchdog.events import FileSystemEventHandler

        watcher = self

        class ChangeHandler(FileSystemEventHandler):  # type: ignore[misc]
            def on_any_event(self, event: Any) -> None:
                try:
                    change = event_from_watchdog(event)
                except Exception as e:
                    # Runs on the observer thread; errors go to the channel
                    watcher.report_error(e)
                    return
                if change is not None:
                    watcher.channel.put(change)

        return ChangeHandler()

    def add(self, path: str) -> None:
        """
        Start watching a path.

        Raises:
            WatchError: If the path does not exist or cannot be watched
        """
        path = os.path.abspath(path)
        if not Path(path).exists():
            raise WatchError(path, "no such file or directory")
        with self._lock:
            if path in self._watches:
                return
            try:
                watch = self._observer.schedule(self._handler, path, recursive=False)
            except OSError as e:
                raise WatchError(path, str(e)) from e
            self._watches[path] = watch

    def remove(self, path: str) -> None:
        """Stop watching a path (no-op if it is not watched)."""
        path = os.path.abspath(path)
        with self._lock:
            watch = self._watches.pop(path, None)
            if watch is None:
                return
            try:
                self._observer.unschedule(watch)
            except (KeyError, OSError) as e:
                self._lg.debug("unschedule failed", extra={"path": path, "exception": e})

    def resubscribe(self, path: str) -> None:
        """
        Replace the watch on a path (used after a rename).

        Only paths added with ``add`` have a watch of their own; anything
        else is covered by its directory's watch and is left alone.
        Failures are published on the channel rather than raised.
        """
        path = os.path.abspath(path)
        with self._lock:
            if path not in self._watches:
                return
            self.remove(path)
            try:
                self.add(path)
            except WatchError as e:
                self.report_error(e)

    def report_error(self, error: Exception) -> None:
        """Publish an asynchronous error on the channel."""
        self._channel.put(error)

    def start(self) -> None:
        """
        Start the observer thread.

        Raises:
            WatchError: If the OS refuses the watches (e.g. inotify limits)
        """
        with self._lock:
            if self._running:
                return
            try:
                self._observer.start()
            except OSError as e:
                paths = ", ".join(self._watches) or "<nothing>"
                raise WatchError(paths, str(e)) from e
            self._running = True

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the observer and wake any channel reader."""
        with self._lock:
            if self._running:
                self._observer.stop()
                self._observer.join(timeout)
                self._running = False
        self._channel.put(None)


class Notifiable(Protocol):
    def notify(self) -> None: ...


class ChangeAggregator:
    """
    Turns watcher output into debouncer notifications.

    Every change of any kind notifies the debouncer once. A rename also asks
    the watcher to re-subscribe the path, since the old watch may have
    followed the renamed inode. Errors are logged and the loop continues.
    """

    def __init__(self, lg: Logger, watcher: Watcher, debouncer: Notifiable) -> None:
        self._lg = lg
        self._watcher = watcher
        self._debouncer = debouncer
        self._thread: threading.Thread | None = None
        self._events = 0
        self._errors = 0

    @property
    def events(self) -> int:
        """Number of change events handled."""
        return self._events

    @property
    def errors(self) -> int:
        """Number of watcher errors logged."""
        return self._errors

    def start(self) -> ChangeAggregator:
        self._thread = threading.Thread(
            target=self.run, name="blart-aggregator", daemon=True
        )
        self._thread.start()
        return self

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def run(self) -> None:
        """Drain the watcher channel until it yields None."""
        channel = self._watcher.channel
        while True:
            item = channel.get()
            if item is None:
                return
            if isinstance(item, ChangeEvent):
                self.handle_event(item)
            else:
                self._errors += 1
                self._lg.error("watcher error", extra={"exception": item})

    def handle_event(self, event: ChangeEvent) -> None:
        self._events += 1
        self._lg.info(
            "detected change", extra={"path": event.path, "op": event.op.value}
        )
        self._debouncer.notify()
        if event.op is ChangeOp.RENAME:
            self._watcher.resubscribe(event.path)
