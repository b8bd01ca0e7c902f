#!/usr/bin/env python3
"""
Utility Functions for Skrins Core

This module provides common utility functions used by other core modules:
extension parsing, file naming and safe file operations.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- extract_extension("backup.TAR.GZ")
- generate_capture_filename(640, 480, timestamp=1700000000)

Expected output:
- "tar.gz"
- "1700000000_640x480.png"
"""

import os
import time
import uuid
from pathlib import Path
from typing import Optional

from loguru import logger

from skrins.core.constants import (
    ALLOWED_EXTENSIONS,
    CAPTURE_SETTINGS,
    COMPOUND_EXTENSIONS,
    TRANSCODE_POLICY,
)


def extract_extension(filename: str) -> Optional[str]:
    """
    Extract the lowercase extension of a file name.

    Compound extensions (tar.gz, tar.bz2) are recognised as a whole. Names
    without a dot, or starting with their only dot, have no extension.

    Args:
        filename: File name (not a path)

    Returns:
        Optional[str]: Extension without the leading dot, or None
    """
    name = filename.lower()
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem or not ext:
        return None

    for compound in COMPOUND_EXTENSIONS:
        if name.endswith("." + compound) and len(name) > len(compound) + 1:
            return compound

    return ext


def is_allowed_extension(ext: Optional[str]) -> bool:
    """Whether the upload pipeline may handle files with this extension."""
    return ext is not None and ext in ALLOWED_EXTENSIONS


def needs_transcode(ext: Optional[str]) -> bool:
    """Whether files with this extension are transcoded before upload."""
    return ext is not None and ext in TRANSCODE_POLICY


def generate_remote_name(ext: str) -> str:
    """
    Generate a collision-resistant destination name.

    Args:
        ext: Extension without dot

    Returns:
        str: "<uuid4 hex>.<ext>"
    """
    return f"{uuid.uuid4().hex}.{ext}"


def generate_capture_filename(width: int, height: int, timestamp: Optional[int] = None) -> str:
    """
    Generates a capture file name from a timestamp and the image dimensions.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        timestamp: Unix seconds, defaults to now

    Returns:
        str: "<timestamp>_<width>x<height>.png"
    """
    if timestamp is None:
        timestamp = int(time.time())
    return f"{timestamp}_{width}x{height}.{CAPTURE_SETTINGS['EXTENSION']}"


def unique_path(directory: Path, filename: str) -> Path:
    """Return directory/filename, adding a numeric suffix if it already exists."""
    candidate = directory / filename
    stem, suffix = os.path.splitext(filename)
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return candidate


def safe_remove(path: Path) -> bool:
    """
    Remove a file, logging instead of raising.

    Returns:
        bool: True if the file is gone afterwards
    """
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        logger.warning(f"File already removed: {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to remove {path}: {str(e)}")
        return False


if __name__ == "__main__":
    """Validate utility functions"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: extract_extension
    total_tests += 1
    cases = {
        "shot.png": "png",
        "SHOT.PNG": "png",
        "backup.tar.gz": "tar.gz",
        "backup.tar.bz2": "tar.bz2",
        "README": None,
        ".hidden": None,
    }
    for filename, expected in cases.items():
        result = extract_extension(filename)
        if result != expected:
            all_validation_failures.append(f"extract_extension({filename!r}): expected {expected}, got {result}")

    # Test 2: generate_capture_filename
    total_tests += 1
    filename = generate_capture_filename(640, 480, timestamp=1700000000)
    if filename != "1700000000_640x480.png":
        all_validation_failures.append(f"generate_capture_filename: unexpected {filename}")

    # Test 3: generate_remote_name
    total_tests += 1
    first, second = generate_remote_name("png"), generate_remote_name("png")
    if first == second or not first.endswith(".png"):
        all_validation_failures.append(f"generate_remote_name: {first}, {second}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
