#!/usr/bin/env python3
"""
Frame Capture Module

This module captures a rectangle of the primary display and stores it as a
PNG file in the capture store, where the upload pipeline picks it up.

The image is written to a temporary ".part" file first and then renamed into
place, so watchers never observe a half-written PNG.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- CaptureRectangle(Point(100, 680), Point(300, 880))

Expected output:
- Path("<capture_dir>/1700000000_200x200.png")
"""

import os
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from skrins.core.constants import CAPTURE_SETTINGS
from skrins.core.exceptions import CaptureError
from skrins.core.geometry import CaptureRectangle
from skrins.core.mss import get_primary_monitor, grab_region
from skrins.core.utils import generate_capture_filename, unique_path


def clip_to_monitor(rect: CaptureRectangle, monitor: Dict[str, int]) -> Dict[str, int]:
    """
    Clip a capture-space rectangle to the monitor bounds.

    A rectangle that ends up with zero width or height is grown to one pixel
    so a degenerate selection still produces an image.

    Args:
        rect: Normalized rectangle in top-left pixel coordinates
        monitor: mss monitor dictionary

    Returns:
        Dict[str, int]: mss region dictionary inside the monitor
    """
    mon_left, mon_top = monitor["left"], monitor["top"]
    mon_right = mon_left + monitor["width"]
    mon_bottom = mon_top + monitor["height"]

    left = min(max(int(rect.min.x), mon_left), mon_right - 1)
    top = min(max(int(rect.min.y), mon_top), mon_bottom - 1)
    right = min(max(int(rect.max.x), left), mon_right)
    bottom = min(max(int(rect.max.y), top), mon_bottom)

    return {
        "left": left,
        "top": top,
        "width": max(right - left, 1),
        "height": max(bottom - top, 1),
    }


class FrameCapturer:
    """Writes captures of the primary display into the capture store."""

    def __init__(self, capture_dir: Path):
        self.capture_dir = Path(capture_dir)

    def capture(self, rect: CaptureRectangle, timestamp: Optional[int] = None) -> Path:
        """
        Capture a region and save it as a new PNG file.

        Args:
            rect: Normalized rectangle in top-left pixel coordinates
            timestamp: Unix seconds for the file name, defaults to now

        Returns:
            Path: The written capture file

        Raises:
            CaptureError: If the screen cannot be read or the file cannot be written
        """
        monitor = get_primary_monitor()
        region = clip_to_monitor(rect, monitor)
        if region != rect.as_region():
            logger.info(f"Selection {rect.as_region()} clipped to {region}")

        img = grab_region(region)

        filename = generate_capture_filename(img.width, img.height, timestamp)
        path = unique_path(self.capture_dir, filename)
        partial = path.with_name(path.name + CAPTURE_SETTINGS["PARTIAL_SUFFIX"])

        try:
            img.save(partial, format=CAPTURE_SETTINGS["FORMAT"])
            os.replace(partial, path)
        except OSError as e:
            logger.error(f"Failed to write capture {path}: {str(e)}")
            if partial.exists():
                partial.unlink()
            raise CaptureError(f"Cannot write capture file {path}: {str(e)}") from e

        logger.info(f"Captured {region} to {path}")
        return path
