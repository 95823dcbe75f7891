"""File change notification built on watchdog."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Set, Union

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


def _candidates(path: Union[str, bytes]) -> Set[str]:
    path = os.fsdecode(path)
    return {os.path.abspath(path), os.path.realpath(path)}


class _FileChangeHandler(FileSystemEventHandler):
    """Forwards events that touch one file to a callback.

    The parent directory is what gets watched, so editors that save by
    writing a temporary file and renaming it over the original still
    trigger the callback through the move's destination.
    """

    def __init__(self, path: str, callback: Callable[[], None]):
        super().__init__()
        self._paths = _candidates(path)
        self._callback = callback

    def _matches(self, path: Union[str, bytes, None]) -> bool:
        if not path:
            return False
        return bool(_candidates(path) & self._paths)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if event.event_type in (EVENT_TYPE_MODIFIED, EVENT_TYPE_CREATED):
            hit = self._matches(event.src_path)
        elif event.event_type == EVENT_TYPE_MOVED:
            hit = self._matches(getattr(event, "dest_path", None))
        else:
            return
        if hit:
            logger.debug("%s event for %s", event.event_type, event.src_path)
            self._callback()


class FileWatcher:
    """Watches one file and calls ``callback`` on each content change.

    Each watcher owns a watchdog observer, so events for one file are
    delivered serially on that observer's thread while different files are
    handled concurrently. ``callback`` must not raise.
    """

    def __init__(self, path: Union[str, Path], callback: Callable[[], None]):
        self.path = os.path.abspath(os.fspath(path))
        self._callback = callback
        self._observer: Optional[Observer] = None

    @property
    def running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        if self._observer is not None:
            return
        directory = os.path.dirname(self.path) or "."
        observer = Observer()
        observer.schedule(_FileChangeHandler(self.path, self._callback), directory, recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer
        logger.info("watching %s", self.path)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout)
        self._observer = None
        logger.info("stopped watching %s", self.path)
