#!/usr/bin/env python3
"""
MSS (Screenshot) Low-Level Module

This module provides low-level wrapper functions for the MSS library,
focusing on direct capture operations without additional processing.
Only the primary display is used.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- Region dictionary {"left": 10, "top": 10, "width": 100, "height": 100}

Expected output:
- PIL Image of the region and primary monitor information
"""

from typing import Dict, Tuple

import mss
import mss.exception
from PIL import Image
from loguru import logger

from skrins.core.constants import CAPTURE_SETTINGS
from skrins.core.exceptions import CaptureError


def get_primary_monitor() -> Dict[str, int]:
    """
    Get the geometry of the primary monitor.

    Returns:
        Dict[str, int]: Monitor dictionary with keys top, left, width, height

    Raises:
        CaptureError: If no display can be queried
    """
    try:
        with mss.mss() as sct:
            monitor_num = CAPTURE_SETTINGS["PRIMARY_MONITOR"]
            if monitor_num >= len(sct.monitors):
                raise CaptureError("No primary monitor found")
            return dict(sct.monitors[monitor_num])
    except mss.exception.ScreenShotError as e:
        logger.error(f"Failed to query monitors: {str(e)}")
        raise CaptureError(f"Cannot access display: {str(e)}") from e


def get_screen_size() -> Tuple[int, int]:
    """Return (width, height) of the primary monitor."""
    monitor = get_primary_monitor()
    return monitor["width"], monitor["height"]


def grab_region(region: Dict[str, int]) -> Image.Image:
    """
    Capture screenshot of a specific region.

    Args:
        region: Dictionary with keys: top, left, width, height

    Returns:
        Image.Image: RGB image of the region

    Raises:
        CaptureError: If the framebuffer cannot be read
    """
    required_keys = ["top", "left", "width", "height"]
    missing = [key for key in required_keys if key not in region]
    if missing:
        raise CaptureError(f"Region missing required keys: {missing}")

    try:
        with mss.mss() as sct:
            sct_img = sct.grab(region)
            # Convert to PIL Image
            return Image.frombytes("RGB", sct_img.size, sct_img.bgra, "raw", "BGRX")
    except mss.exception.ScreenShotError as e:
        logger.error(f"Failed to capture region {region}: {str(e)}")
        raise CaptureError(f"Screen capture failed: {str(e)}") from e
