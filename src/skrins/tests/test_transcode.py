#!/usr/bin/env python3
"""
Unit tests for core/transcode.py
"""

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from skrins.core.transcode import FfmpegTranscoder


class TestFfmpegTranscoder(unittest.TestCase):
    """Test cases for the ffmpeg wrapper"""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        tmp = Path(self._tmp.name)

        self.input_path = tmp / "clip.mov"
        self.input_path.write_bytes(b"mov")
        self.output_path = tmp / "out.mp4"

    def completed(self, returncode=0, create_output=True):
        def run(cmd, **kwargs):
            if create_output:
                self.output_path.write_bytes(b"mp4")
            return MagicMock(returncode=returncode, stdout="", stderr="frame=1")
        return run

    def test_build_command(self):
        """Command converts input to output without overwriting"""
        cmd = FfmpegTranscoder().build_command("/usr/bin/ffmpeg", self.input_path, self.output_path)

        self.assertEqual(cmd[0], "/usr/bin/ffmpeg")
        self.assertIn("-n", cmd)
        self.assertEqual(cmd[cmd.index("-i") + 1], str(self.input_path))
        self.assertEqual(cmd[-1], str(self.output_path))

    @patch("skrins.core.transcode.subprocess.run")
    def test_success(self, mock_run):
        """Zero exit status and an output file mean success"""
        mock_run.side_effect = self.completed()
        transcoder = FfmpegTranscoder(ffmpeg_path="/opt/ffmpeg/bin/ffmpeg")

        self.assertTrue(transcoder.transcode(self.input_path, self.output_path))
        self.assertEqual(mock_run.call_args.args[0][0], "/opt/ffmpeg/bin/ffmpeg")

    @patch("skrins.core.transcode.subprocess.run")
    @patch("skrins.core.transcode.shutil.which", return_value="/usr/bin/ffmpeg")
    def test_path_lookup(self, mock_which, mock_run):
        """Without an explicit binary ffmpeg is looked up on PATH"""
        mock_run.side_effect = self.completed()

        self.assertTrue(FfmpegTranscoder().transcode(self.input_path, self.output_path))
        self.assertEqual(mock_run.call_args.args[0][0], "/usr/bin/ffmpeg")

    @patch("skrins.core.transcode.subprocess.run")
    @patch("skrins.core.transcode.shutil.which", return_value=None)
    def test_binary_missing(self, mock_which, mock_run):
        """Missing ffmpeg is a failure, not an exception"""
        self.assertFalse(FfmpegTranscoder().transcode(self.input_path, self.output_path))
        mock_run.assert_not_called()

    @patch("skrins.core.transcode.subprocess.run")
    def test_nonzero_exit(self, mock_run):
        """Nonzero exit status is a failure"""
        mock_run.side_effect = self.completed(returncode=1, create_output=False)
        self.assertFalse(FfmpegTranscoder("ffmpeg").transcode(self.input_path, self.output_path))

    @patch("skrins.core.transcode.subprocess.run")
    def test_output_missing(self, mock_run):
        """Success without an output file is a failure"""
        mock_run.side_effect = self.completed(create_output=False)
        self.assertFalse(FfmpegTranscoder("ffmpeg").transcode(self.input_path, self.output_path))

    @patch("skrins.core.transcode.subprocess.run")
    def test_timeout(self, mock_run):
        """A hung ffmpeg is a failure"""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffmpeg", timeout=1)
        transcoder = FfmpegTranscoder("ffmpeg", timeout=1)

        self.assertFalse(transcoder.transcode(self.input_path, self.output_path))
        self.assertEqual(mock_run.call_args.kwargs["timeout"], 1)

    @patch("skrins.core.transcode.subprocess.run")
    def test_not_executable(self, mock_run):
        """An unrunnable binary is a failure"""
        mock_run.side_effect = FileNotFoundError("No such file")
        self.assertFalse(FfmpegTranscoder("/nope/ffmpeg").transcode(self.input_path, self.output_path))


if __name__ == "__main__":
    unittest.main()
