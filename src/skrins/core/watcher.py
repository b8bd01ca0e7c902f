#!/usr/bin/env python3
"""
Directory Watcher

This module observes the capture store with watchdog and calls a callback
(normally UploadPipeline.trigger) whenever an entry is created, modified or
moved into it. Deletions are ignored. The watch is not recursive.

Errors raised by the callback are logged and do not stop the observer.
Failing to establish the watch at startup raises WatchError.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Links:
- watchdog: https://python-watchdog.readthedocs.io/en/stable/api.html

Sample input:
    watcher = DirectoryWatcher(config.capture_dir, pipeline.trigger)
    watcher.start()

Expected output:
    One pipeline trigger per relevant filesystem event
"""

from pathlib import Path
from typing import Callable, Optional

from loguru import logger
from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from skrins.core.exceptions import WatchError

TRIGGER_EVENTS = (EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED)


class CaptureStoreEventHandler(FileSystemEventHandler):
    """Forwards create/modify/move events to a callback."""

    def __init__(self, on_change: Callable[[], object]):
        super().__init__()
        self.on_change = on_change

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in TRIGGER_EVENTS:
            return

        logger.debug(f"{event.event_type}: {getattr(event, 'dest_path', '') or event.src_path}")
        try:
            self.on_change()
        except Exception:
            logger.exception(f"Change handler failed for {event.src_path}")


class DirectoryWatcher:
    """Runs a watchdog observer over the capture store on its own thread."""

    def __init__(self, capture_dir: Path, on_change: Callable[[], object]):
        self.capture_dir = Path(capture_dir)
        self.handler = CaptureStoreEventHandler(on_change)
        self._observer: Optional[Observer] = None

    @property
    def running(self) -> bool:
        return self._observer is not None and self._observer.is_alive()

    def start(self) -> None:
        """
        Start watching.

        Raises:
            WatchError: If the directory is missing or the observer cannot start
        """
        if not self.capture_dir.is_dir():
            raise WatchError(f"Capture directory does not exist: {self.capture_dir}")

        observer = Observer()
        try:
            observer.schedule(self.handler, str(self.capture_dir), recursive=False)
            observer.start()
        except OSError as e:
            raise WatchError(f"Cannot watch {self.capture_dir}: {str(e)}") from e

        self._observer = observer
        logger.info(f"Watching {self.capture_dir}")

    def stop(self, timeout: Optional[float] = None) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout)
        self._observer = None
        logger.debug(f"Stopped watching {self.capture_dir}")
