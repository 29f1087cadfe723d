"""
Change Watcher

Observes the posts directory with ``watchdog`` and reloads the content index
whenever a file is created, modified, deleted or moved.

Threads
-------
- The watchdog observer thread only enqueues events.
- A single worker thread consumes the queue and calls
  ``ContentIndex.reload()``. It is the only writer to the index store.

Every event triggers a full reload. With ``debounce_seconds > 0`` the worker
first drains events that arrive within the window and reloads once for the
whole burst, draining for at most ``MAX_DEBOUNCE_WINDOWS`` windows.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .errors import DirectoryLoadError
from .service import ContentIndex

logger = logging.getLogger("mdblog.watcher")

RELOAD_EVENT_TYPES = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_DELETED, EVENT_TYPE_MOVED}
)

# Upper bound on how long one burst can postpone its reload.
MAX_DEBOUNCE_WINDOWS = 5

_STOP = object()


class _EnqueueHandler(FileSystemEventHandler):
    """Forwards relevant watchdog events to the worker queue."""

    def __init__(self, events: "queue.Queue[object]") -> None:
        super().__init__()
        self._events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in RELOAD_EVENT_TYPES:
            return
        logger.info("%s: %s", event.event_type, event.src_path)
        self._events.put(event)


class ContentWatcher:
    """
    Background reloader for a ``ContentIndex``.
    """

    def __init__(
        self,
        content_index: ContentIndex,
        debounce_seconds: float = 0.0,
    ) -> None:
        self._index = content_index
        self._debounce = max(debounce_seconds, 0.0)
        self._events: "queue.Queue[object]" = queue.Queue()
        self._observer: Optional[Observer] = None
        self._worker: Optional[threading.Thread] = None
        self.reload_count = 0
        self.failure_count = 0

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start watching. Returns False if the directory cannot be watched.
        """
        if self.is_running:
            return True

        directory = str(self._index.posts_dir)
        if not self._index.posts_dir.is_dir():
            logger.error("Cannot watch %s: not a directory", directory)
            return False

        observer = Observer()
        try:
            observer.schedule(_EnqueueHandler(self._events), directory, recursive=False)
            observer.start()
        except OSError as exc:
            logger.error("Cannot watch %s: %s", directory, exc)
            return False

        self._observer = observer
        self._worker = threading.Thread(
            target=self._run,
            name="mdblog-watcher",
            daemon=True,
        )
        self._worker.start()
        logger.info("Watching directory: %s", directory)
        return True

    def stop(self, timeout: float = 5.0) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout)
            self._observer = None

        if self._worker is not None:
            self._events.put(_STOP)
            self._worker.join(timeout)
            self._worker = None

        logger.info("Watcher stopped")

    def notify(self) -> None:
        """Request a reload without a filesystem event."""
        self._events.put(None)

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _drain_burst(self) -> bool:
        """Swallow events arriving within the debounce window. True on stop."""
        deadline = time.monotonic() + self._debounce * MAX_DEBOUNCE_WINDOWS
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            try:
                item = self._events.get(timeout=min(self._debounce, remaining))
            except queue.Empty:
                return False
            if item is _STOP:
                return True

    def _run(self) -> None:
        while True:
            item = self._events.get()
            if item is _STOP:
                break

            if self._debounce and self._drain_burst():
                break

            self._reload()

    def _reload(self) -> None:
        try:
            self._index.reload()
            self.reload_count += 1
        except DirectoryLoadError as exc:
            self.failure_count += 1
            logger.error("Reload failed, keeping previous snapshot: %s", exc)
        except Exception:
            self.failure_count += 1
            logger.exception("Unexpected error during reload")
