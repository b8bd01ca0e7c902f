#!/usr/bin/env python3
"""
Unit tests for core/utils.py
"""

import os
import re
import sys
import tempfile
import unittest
from pathlib import Path

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from skrins.core.utils import (
    extract_extension,
    generate_capture_filename,
    generate_remote_name,
    is_allowed_extension,
    needs_transcode,
    safe_remove,
    unique_path,
)


class TestCoreUtils(unittest.TestCase):
    """Test cases for core utility functions"""

    def test_extract_extension(self):
        """Test extension extraction"""
        self.assertEqual(extract_extension("shot.png"), "png")
        self.assertEqual(extract_extension("clip.MOV"), "mov")
        self.assertEqual(extract_extension("photo.final.JPEG"), "jpeg")

        # Compound extensions
        self.assertEqual(extract_extension("backup.tar.gz"), "tar.gz")
        self.assertEqual(extract_extension("backup.TAR.BZ2"), "tar.bz2")
        self.assertEqual(extract_extension("backup.tar"), "tar")
        self.assertEqual(extract_extension("notes.gz"), "gz")

        # No extension
        self.assertIsNone(extract_extension("README"))
        self.assertIsNone(extract_extension(".hidden"))
        self.assertIsNone(extract_extension("trailing."))

    def test_is_allowed_extension(self):
        """Test the allow-list"""
        for ext in ("jpg", "jpeg", "png", "gif", "webm", "mp4", "mov", "zip", "tar", "tar.gz", "tar.bz2"):
            self.assertTrue(is_allowed_extension(ext), ext)

        self.assertFalse(is_allowed_extension("txt"))
        self.assertFalse(is_allowed_extension("gz"))
        self.assertFalse(is_allowed_extension(None))

    def test_needs_transcode(self):
        """Only mov is transcoded"""
        self.assertTrue(needs_transcode("mov"))
        self.assertFalse(needs_transcode("mp4"))
        self.assertFalse(needs_transcode(None))

    def test_generate_remote_name(self):
        """Remote names are random hex plus the extension"""
        name = generate_remote_name("png")
        self.assertRegex(name, r"^[0-9a-f]{32}\.png$")

        compound = generate_remote_name("tar.gz")
        self.assertTrue(compound.endswith(".tar.gz"))

        names = {generate_remote_name("png") for _ in range(100)}
        self.assertEqual(len(names), 100)

    def test_generate_capture_filename(self):
        """Capture names carry the timestamp and size"""
        self.assertEqual(generate_capture_filename(640, 480, timestamp=1700000000), "1700000000_640x480.png")

        filename = generate_capture_filename(10, 20)
        self.assertTrue(re.match(r"^\d+_10x20\.png$", filename))

    def test_unique_path(self):
        """Existing names get a numeric suffix"""
        with tempfile.TemporaryDirectory() as tmp:
            directory = Path(tmp)
            first = unique_path(directory, "1_1x1.png")
            self.assertEqual(first.name, "1_1x1.png")

            first.touch()
            second = unique_path(directory, "1_1x1.png")
            self.assertEqual(second.name, "1_1x1-1.png")

            second.touch()
            self.assertEqual(unique_path(directory, "1_1x1.png").name, "1_1x1-2.png")

    def test_safe_remove(self):
        """Removal never raises"""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "file.png"
            path.write_bytes(b"data")

            self.assertTrue(safe_remove(path))
            self.assertFalse(path.exists())

            # Already gone
            self.assertTrue(safe_remove(path))

            # Directories cannot be removed this way
            self.assertFalse(safe_remove(Path(tmp)))


if __name__ == "__main__":
    unittest.main()
