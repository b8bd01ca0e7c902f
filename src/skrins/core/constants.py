#!/usr/bin/env python3
"""
Constants for Skrins Core

This module defines constants used throughout the capture and upload
functionality, ensuring consistent configuration across the application.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, FrozenSet, Tuple

# Application name used for notifications and logging
APP_NAME: str = "Skrins"

# Extensions the upload pipeline is allowed to handle (lowercase, no dot)
ALLOWED_EXTENSIONS: FrozenSet[str] = frozenset({
    "jpg", "jpeg", "png", "gif", "webm", "mp4", "mov",
    "zip", "tar", "tar.gz", "tar.bz2",
})

# Multi-part extensions, checked before the last suffix
COMPOUND_EXTENSIONS: Tuple[str, ...] = ("tar.gz", "tar.bz2")

# Container formats that are normalized before upload: source -> target
TRANSCODE_POLICY: Dict[str, str] = {
    "mov": "mp4",
}

# Fixed intermediate name for transcoder output inside the capture store
TRANSCODE_OUTPUT_NAME: str = "out.mp4"

# Vertical inset added to both Y bounds after reflection. Window toolkits that
# report pointer positions relative to a decorated window need the title bar
# height here (24 on the setups this was first observed on).
DEFAULT_Y_OFFSET: int = 0

# Image settings for captured frames
CAPTURE_SETTINGS: Dict[str, object] = {
    "FORMAT": "PNG",  # Lossless encoding
    "EXTENSION": "png",
    "PARTIAL_SUFFIX": ".part",  # Written first, then renamed into place
    "PRIMARY_MONITOR": 1,  # mss monitor index of the primary display
}

# Remote transfer settings
TRANSFER_SETTINGS: Dict[str, int] = {
    "DEFAULT_PORT": 22,
    "CHUNK_SIZE": 32 * 1024,
    "CONNECT_TIMEOUT": 15,
    "SHUTDOWN_TIMEOUT": 10,  # Seconds to wait for an in-progress pass on exit
}

# Notification text shown after an upload
NOTIFICATION_TITLE: str = "Screenshot uploaded!"

# Overlay settings
OVERLAY_SETTINGS: Dict[str, object] = {
    "FRAME_INTERVAL_MS": 16,  # ~60 input polls per second
    "ALPHA": 0.25,
    "BACKGROUND": "black",
    "OUTLINE": "#e1e1e1",
    "OUTLINE_WIDTH": 1,
    "CLOSE_DELAY_S": 0.15,  # Let the compositor remove the overlay before capturing
}

# Logging settings
LOG_MAX_STR_LEN: int = 500  # Maximum string length for truncated logging


if __name__ == "__main__":
    """Validate module constants"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: every transcode source must itself be an allowed extension
    total_tests += 1
    for source, target in TRANSCODE_POLICY.items():
        if source not in ALLOWED_EXTENSIONS or target not in ALLOWED_EXTENSIONS:
            all_validation_failures.append(f"TRANSCODE_POLICY entry {source}->{target} not allowed")

    # Test 2: compound extensions are allowed extensions
    total_tests += 1
    missing = [ext for ext in COMPOUND_EXTENSIONS if ext not in ALLOWED_EXTENSIONS]
    if missing:
        all_validation_failures.append(f"COMPOUND_EXTENSIONS not allowed: {missing}")

    # Test 3: transfer settings are positive
    total_tests += 1
    for key, value in TRANSFER_SETTINGS.items():
        if value <= 0:
            all_validation_failures.append(f"TRANSFER_SETTINGS[{key}] should be positive, got {value}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
