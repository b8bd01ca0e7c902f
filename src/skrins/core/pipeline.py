#!/usr/bin/env python3
"""
Upload Pipeline

This module reacts to changes in the capture store. Each pass lists the
store and decides, per file, whether to skip it, transcode it or upload it.
Uploaded files are removed locally and announced through the side-effect
collaborators (clipboard, notification, browser).

Passes never overlap: run_pass holds a lock for its whole duration, and the
background worker started by start() executes queued passes one at a time.
Redundant triggers that arrive while a pass is already queued are coalesced,
since the queued pass re-lists the directory anyway. A path that is being
handled is additionally recorded as in flight and refused by any other
caller, so a file is handed to the transfer client at most once at a time.

Per-file failures (unsupported extension, transcode failure, transfer
failure) are logged, leave the file in place and never stop the pass.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
    pipeline = UploadPipeline(config, transfer=SFTPTransferClient(config.require_remote()),
                              transcoder=FfmpegTranscoder())
    report = pipeline.run_pass()

Expected output:
    report.outcomes
    # [ItemOutcome(path=.../shot.png, status=ItemStatus.UPLOADED,
    #              destination='3f2a...png', url='https://i.example.com/3f2a...png', ...)]
"""

import os
import queue
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Set

from loguru import logger

from skrins.core.config import SkrinsConfig
from skrins.core.exceptions import TransferError
from skrins.core.side_effects import (
    BrowserLauncher,
    Clipboard,
    Notifier,
    fire_upload_effects,
)
from skrins.core.utils import (
    extract_extension,
    generate_remote_name,
    is_allowed_extension,
    needs_transcode,
    safe_remove,
)


class Transfer(Protocol):
    def upload(self, local_path: Path, remote_name: str) -> int: ...


class Transcoder(Protocol):
    def transcode(self, input_path: Path, output_path: Path) -> bool: ...


class ItemStatus(str, Enum):
    SKIPPED = "skipped"
    TRANSCODED = "transcoded"
    UPLOADED = "uploaded"
    FAILED = "failed"
    BUSY = "busy"


@dataclass
class ItemOutcome:
    path: Path
    status: ItemStatus
    extension: Optional[str] = None
    destination: Optional[str] = None
    url: Optional[str] = None
    bytes_sent: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.path.name,
            "status": self.status.value,
            "extension": self.extension,
            "destination": self.destination,
            "url": self.url,
            "bytes": self.bytes_sent,
            "error": self.error,
        }


@dataclass
class PassReport:
    started_at: float = field(default_factory=time.time)
    outcomes: List[ItemOutcome] = field(default_factory=list)
    error: Optional[str] = None

    def by_status(self, status: ItemStatus) -> List[ItemOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def uploaded(self) -> List[ItemOutcome]:
        return self.by_status(ItemStatus.UPLOADED)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at,
            "error": self.error,
            "items": [o.to_dict() for o in self.outcomes],
        }


_RUN_PASS = object()
_STOP = object()


class UploadPipeline:
    """
    Skips, transcodes or uploads the files found in the capture store.

    Args:
        config: Process configuration; must include a remote target
        transfer: Client that copies a file to the remote directory
        transcoder: Converts formats listed in TRANSCODE_POLICY
        clipboard, notifier, browser: Optional post-upload collaborators
    """

    def __init__(
        self,
        config: SkrinsConfig,
        transfer: Transfer,
        transcoder: Transcoder,
        clipboard: Optional[Clipboard] = None,
        notifier: Optional[Notifier] = None,
        browser: Optional[BrowserLauncher] = None,
    ):
        self.config = config
        self.remote = config.require_remote()
        self.capture_dir = Path(config.capture_dir)
        self.transfer = transfer
        self.transcoder = transcoder
        self.clipboard = clipboard
        self.notifier = notifier
        self.browser = browser

        self._pass_lock = threading.Lock()
        self._in_flight: Set[Path] = set()
        self._in_flight_lock = threading.Lock()

        self._queue: "queue.Queue[object]" = queue.Queue()
        self._pending = False
        self._pending_lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def list_candidates(self) -> List[Path]:
        """Regular files directly inside the capture store, in name order."""
        with os.scandir(self.capture_dir) as entries:
            files = [Path(entry.path) for entry in entries if entry.is_file()]
        return sorted(files, key=lambda p: p.name)

    def run_pass(self) -> PassReport:
        """Handle every file currently in the capture store. Passes are serialized."""
        with self._pass_lock:
            report = PassReport()
            try:
                candidates = self.list_candidates()
            except OSError as e:
                logger.error(f"Cannot list capture store {self.capture_dir}: {str(e)}")
                report.error = str(e)
                return report

            logger.debug(f"Pass over {len(candidates)} file(s) in {self.capture_dir}")
            for path in candidates:
                report.outcomes.append(self.process_file(path))
            return report

    def process_file(self, path: Path) -> ItemOutcome:
        """Skip, transcode or upload a single file."""
        path = Path(path)
        with self._in_flight_lock:
            if path in self._in_flight:
                logger.debug(f"{path.name} is already being handled")
                return ItemOutcome(path, ItemStatus.BUSY)
            self._in_flight.add(path)

        try:
            return self._handle(path)
        except OSError as e:
            logger.error(f"Failed to handle {path}: {str(e)}")
            return ItemOutcome(path, ItemStatus.FAILED, error=str(e))
        except Exception as e:
            # Collaborator bugs or unmapped library errors stay confined to this file
            logger.exception(f"Unexpected error while handling {path}")
            return ItemOutcome(path, ItemStatus.FAILED, error=f"{type(e).__name__}: {str(e)}")
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(path)

    def _handle(self, path: Path) -> ItemOutcome:
        ext = extract_extension(path.name)
        if not is_allowed_extension(ext):
            logger.debug(f"Skipping {path.name}: extension {ext!r} not allowed")
            return ItemOutcome(path, ItemStatus.SKIPPED, extension=ext)

        if not path.exists():
            # Removed since the listing was taken
            return ItemOutcome(path, ItemStatus.SKIPPED, extension=ext, error="file vanished")

        if needs_transcode(ext):
            return self._transcode(path, ext)

        return self._upload(path, ext)

    def _transcode(self, path: Path, ext: str) -> ItemOutcome:
        output = self.capture_dir / self.config.transcode_output_name
        logger.info(f"Detected .{ext} file {path.name}, converting to {output.name}")

        if not self.transcoder.transcode(path, output):
            logger.warning(f"Transcoding {path.name} failed, keeping original")
            return ItemOutcome(path, ItemStatus.FAILED, extension=ext, error="transcode failed")

        # The output is uploaded by a later pass, triggered by its own creation.
        safe_remove(path)
        return ItemOutcome(path, ItemStatus.TRANSCODED, extension=ext, destination=output.name)

    def _upload(self, path: Path, ext: str) -> ItemOutcome:
        remote_name = generate_remote_name(ext)
        try:
            sent = self.transfer.upload(path, remote_name)
        except TransferError as e:
            logger.error(f"Upload of {path.name} failed: {str(e)}")
            return ItemOutcome(path, ItemStatus.FAILED, extension=ext, destination=remote_name, error=str(e))

        url = self.remote.url_for(remote_name)
        if not safe_remove(path):
            logger.error(f"{path.name} was uploaded but could not be removed")
        logger.info(f"Uploaded {path.name} -> {url}")

        fire_upload_effects(url, self.clipboard, self.notifier, self.browser)
        return ItemOutcome(
            path,
            ItemStatus.UPLOADED,
            extension=ext,
            destination=remote_name,
            url=url,
            bytes_sent=sent,
        )

    # ------------------------------------------------------------------
    # Background worker
    # ------------------------------------------------------------------

    def trigger(self) -> bool:
        """
        Request a pass on the worker thread.

        Returns:
            bool: False if a pass was already queued and this request was merged into it
        """
        with self._pending_lock:
            if self._pending:
                return False
            self._pending = True
        self._queue.put(_RUN_PASS)
        return True

    def start(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._worker = threading.Thread(target=self._work, name="skrins-upload", daemon=True)
        self._worker.start()
        logger.debug("Upload worker started")

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Stop the worker after the pass in progress, if any.

        Returns:
            bool: False if the worker was still busy when the timeout expired
        """
        if self._worker is None:
            return True
        self._queue.put(_STOP)
        self._worker.join(timeout)
        stopped = not self._worker.is_alive()
        self._worker = None
        if stopped:
            logger.debug("Upload worker stopped")
        else:
            # Daemon thread, it dies with the process
            logger.warning(f"Upload worker still busy after {timeout}s, abandoning it")
        return stopped

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                with self._pending_lock:
                    self._pending = False
                try:
                    self.run_pass()
                except Exception:
                    logger.exception("Upload pass failed unexpectedly")
            finally:
                self._queue.task_done()

    def wait_idle(self) -> None:
        """Block until every queued pass has finished."""
        self._queue.join()
