"""
Watch the denylist file and reload the store whenever it changes.

The watchdog observer runs on its own thread. Every change notification for
the denylist path triggers a reload under the store lock; notifications are
not debounced, since reloading an unchanged file is harmless.
"""

from __future__ import annotations

import asyncio
import enum
import os
from pathlib import Path
from typing import Any, Callable, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from denycord.denylist.denylist_store import DenylistStore
from denycord.util.logger import get_logger

logger = get_logger("denylist_watcher")

# Access notifications, including the ones produced by reload itself reading the file.
IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


class WatcherState(enum.Enum):
    STARTING = "starting"
    WATCHING = "watching"
    STOPPED = "stopped"


class DenylistEventHandler(FileSystemEventHandler):
    """Reloads ``store`` for every event that touches ``path``."""

    def __init__(self, store: DenylistStore, path: Path) -> None:
        super().__init__()
        self.store = store
        self.path = path

    def concerns_denylist(self, event: FileSystemEvent) -> bool:
        if event.is_directory or event.event_type in IGNORED_EVENT_TYPES:
            return False
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if raw and Path(os.fsdecode(raw)).resolve() == self.path:
                return True
        return False

    def on_any_event(self, event: FileSystemEvent) -> None:
        if not self.concerns_denylist(event):
            return
        logger.debug("[DENYLIST WATCHER] %s event on %s", event.event_type, self.path)
        self.store.locked_reload(self.path)


class DenylistWatcher:
    """
    Long-running task that keeps a :class:`DenylistStore` in sync with a file.

    ``run`` performs the initial reload, starts a watchdog observer on the file's
    directory, reloads once more to catch edits made during setup, and then
    waits for the stop event. If the observer cannot be set
    up, the failure is logged and setup is retried every ``setup_retry_seconds``;
    with a retry interval of zero the watcher gives up after the first failure
    and the store keeps whatever the initial reload produced.

    Attributes:
        store (DenylistStore): Store to reload.
        path (Path): Absolute path of the denylist file.
        setup_retry_seconds (float): Delay between setup attempts; 0 disables retries.
        state (WatcherState): Current lifecycle state.
    """

    def __init__(
        self,
        store: DenylistStore,
        path: Union[str, Path],
        *,
        setup_retry_seconds: float = 30.0,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        self.store = store
        self.path = Path(path).resolve()
        self.setup_retry_seconds = setup_retry_seconds
        self.observer_factory = observer_factory
        self.handler = DenylistEventHandler(store, self.path)
        self.state = WatcherState.STOPPED

    def start_observer(self) -> Any | None:
        """Create, schedule and start an observer; return None on failure."""
        observer = None
        try:
            observer = self.observer_factory()
            observer.schedule(self.handler, str(self.path.parent), recursive=False)
            observer.start()
        except Exception as exc:
            logger.error("[DENYLIST WATCHER] Failed to watch %s: %s", self.path, exc)
            if observer is not None:
                self.discard_observer(observer)
            return None
        return observer

    @staticmethod
    def discard_observer(observer: Any) -> None:
        try:
            observer.stop()
        except Exception as exc:
            logger.warning("[DENYLIST WATCHER] Failed to stop half-started observer: %s", exc)

    async def run(self, stop_event: asyncio.Event) -> None:
        """
        Watch the denylist until ``stop_event`` is set.

        Args:
            stop_event: Process-wide cancellation signal.
        """
        self.state = WatcherState.STARTING
        self.store.locked_reload(self.path)
        logger.info("[DENYLIST WATCHER] Monitoring denylist %s for file changes", self.path)

        observer = None
        while observer is None and not stop_event.is_set():
            observer = self.start_observer()
            if observer is not None:
                break
            if self.setup_retry_seconds <= 0:
                logger.error("[DENYLIST WATCHER] Watching disabled; the denylist will not be reloaded")
                self.state = WatcherState.STOPPED
                return
            logger.warning("[DENYLIST WATCHER] Retrying watch setup in %.0f seconds", self.setup_retry_seconds)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.setup_retry_seconds)
            except asyncio.TimeoutError:
                continue

        if observer is None:
            self.state = WatcherState.STOPPED
            return

        # Edits made before the observer started produced no events.
        self.store.locked_reload(self.path)
        self.state = WatcherState.WATCHING
        try:
            await stop_event.wait()
        finally:
            observer.stop()
            await asyncio.to_thread(observer.join)
            self.state = WatcherState.STOPPED
            logger.info("[DENYLIST WATCHER] Stopped watching %s", self.path)
