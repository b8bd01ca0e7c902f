#!/usr/bin/env python3
"""
Integration tests: real watchdog observer and upload worker over a temp store.

Only the transfer client, transcoder and desktop collaborators are fakes.
"""

import os
import sys
import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from skrins.cli.cli import start_background_upload
from skrins.core.config import RemoteTarget, SkrinsConfig
from skrins.core.exceptions import WatchError
from skrins.core.pipeline import UploadPipeline
from skrins.core.watcher import DirectoryWatcher
from skrins.tests.test_pipeline import (
    FakeTranscoder,
    FakeTransfer,
    RecordingBrowser,
    RecordingClipboard,
    RecordingNotifier,
)

TIMEOUT = 10


def wait_for(condition, timeout=TIMEOUT):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.05)
    return condition()


class BackgroundUploadTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.capture_dir = Path(self._tmp.name)

        self.config = SkrinsConfig(
            capture_dir=self.capture_dir,
            remote=RemoteTarget(
                host="example.com",
                user="deploy",
                private_key_path="/keys/id_ed25519",
                remote_dir="/var/www/i",
                base_url="https://i.example.com",
            ),
        )
        self.transfer = FakeTransfer()
        self.transcoder = FakeTranscoder()
        self.clipboard = RecordingClipboard()
        self.notifier = RecordingNotifier()
        self.browser = RecordingBrowser()

    def drop(self, name, data=b"data"):
        """Land a file the way the capturer does: write aside, then rename."""
        partial = self.capture_dir / (name + ".part")
        partial.write_bytes(data)
        os.replace(partial, self.capture_dir / name)

    def settle(self, pipeline):
        # Let late events queue their passes, then drain them
        time.sleep(0.5)
        pipeline.wait_idle()

    def uploaded_names(self):
        return [name for name, _ in self.transfer.calls]


class TestWatcherDrivesPipeline(BackgroundUploadTestCase):
    """Watcher events trigger passes on the worker thread"""

    def setUp(self):
        super().setUp()
        self.pipeline = UploadPipeline(
            self.config,
            transfer=self.transfer,
            transcoder=self.transcoder,
            clipboard=self.clipboard,
            notifier=self.notifier,
            browser=self.browser,
        )
        self.watcher = DirectoryWatcher(self.capture_dir, self.pipeline.trigger)
        self.pipeline.start()
        self.watcher.start()
        self.addCleanup(self.pipeline.stop, 5)
        self.addCleanup(self.watcher.stop, 5)

    def test_dropped_file_uploaded_once(self):
        """A new capture is transferred exactly once with one set of side effects"""
        self.drop("shot.png")

        self.assertTrue(wait_for(lambda: not (self.capture_dir / "shot.png").exists()))
        self.settle(self.pipeline)

        self.assertEqual(self.uploaded_names(), ["shot.png"])
        self.assertEqual(len(self.clipboard.texts), 1)
        self.assertEqual(len(self.notifier.messages), 1)
        self.assertEqual(len(self.browser.urls), 1)

    def test_file_written_in_place_uploaded_once(self):
        """Create and modify events for one file still give a single transfer"""
        (self.capture_dir / "direct.png").write_bytes(b"x" * 4096)

        self.assertTrue(wait_for(lambda: not (self.capture_dir / "direct.png").exists()))
        self.settle(self.pipeline)

        self.assertEqual(self.uploaded_names(), ["direct.png"])

    def test_transcode_output_uploaded_by_its_own_event(self):
        """The out.mp4 written by the transcoder triggers the pass that uploads it"""
        self.drop("clip.mov")

        self.assertTrue(wait_for(lambda: "out.mp4" in self.uploaded_names()))
        self.settle(self.pipeline)

        self.assertEqual(self.transcoder.calls, [("clip.mov", "out.mp4")])
        self.assertEqual(self.uploaded_names(), ["out.mp4"])
        self.assertEqual(os.listdir(self.capture_dir), [])
        self.assertTrue(self.browser.urls[0].endswith(".mp4"))

    def test_unsupported_file_left_alone(self):
        """Events for disallowed files cause no transfer"""
        self.drop("notes.txt")
        self.settle(self.pipeline)

        self.assertEqual(self.transfer.calls, [])
        self.assertTrue((self.capture_dir / "notes.txt").exists())


class TestStartBackgroundUpload(BackgroundUploadTestCase):
    """The run and watch commands' startup helper"""

    def test_uploads_waiting_and_new_files(self):
        """Files already in the store and files dropped later are both uploaded"""
        self.drop("waiting.png")

        with patch("skrins.cli.cli.SFTPTransferClient", return_value=self.transfer), \
                patch("skrins.cli.cli.FfmpegTranscoder", return_value=self.transcoder), \
                patch("skrins.cli.cli.PyperclipClipboard", return_value=self.clipboard), \
                patch("skrins.cli.cli.PlyerNotifier", return_value=self.notifier), \
                patch("skrins.cli.cli.WebBrowserLauncher", return_value=self.browser):
            pipeline, watcher = start_background_upload(self.config)
        self.addCleanup(pipeline.stop, 5)
        self.addCleanup(watcher.stop, 5)

        self.assertTrue(watcher.running)
        self.assertTrue(wait_for(lambda: "waiting.png" in self.uploaded_names()))

        self.drop("new.png")
        self.assertTrue(wait_for(lambda: "new.png" in self.uploaded_names()))
        self.settle(pipeline)

        self.assertEqual(sorted(self.uploaded_names()), ["new.png", "waiting.png"])
        self.assertEqual(len(self.browser.urls), 2)

    def test_watch_failure_stops_worker(self):
        """A store that cannot be watched is fatal and leaves no worker behind"""
        config = self.config.model_copy(update={"capture_dir": self.capture_dir / "missing"})
        pipeline = MagicMock()

        with patch("skrins.cli.cli.build_pipeline", return_value=pipeline):
            with self.assertRaises(WatchError):
                start_background_upload(config)

        pipeline.start.assert_called_once()
        pipeline.stop.assert_called_once()


if __name__ == "__main__":
    unittest.main()
