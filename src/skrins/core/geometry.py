#!/usr/bin/env python3
"""
Screen Geometry Module

This module defines the points and rectangles used for region selection.
Pointer positions arrive in a bottom-left-origin space; the capture backend
expects top-left-origin pixel coordinates. to_capture_space and
from_capture_space convert between the two and always return normalized
rectangles.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- to_capture_space(CaptureRectangle(Point(100, 200), Point(300, 400)), 1080)

Expected output:
- CaptureRectangle(min=Point(x=100, y=680), max=Point(x=300, y=880))
"""

from dataclasses import dataclass
from typing import Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Point:
    x: Number
    y: Number


@dataclass(frozen=True)
class CaptureRectangle:
    """Axis-aligned rectangle given by two corners."""
    min: Point
    max: Point

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "CaptureRectangle":
        """Bounding box of two points, in any drag direction."""
        return cls(
            Point(min(a.x, b.x), min(a.y, b.y)),
            Point(max(a.x, b.x), max(a.y, b.y)),
        )

    def normalized(self) -> "CaptureRectangle":
        return CaptureRectangle.from_points(self.min, self.max)

    @property
    def width(self) -> Number:
        return self.max.x - self.min.x

    @property
    def height(self) -> Number:
        return self.max.y - self.min.y

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_region(self) -> Dict[str, int]:
        """mss-compatible region dictionary (top-left space)."""
        return {
            "left": int(self.min.x),
            "top": int(self.min.y),
            "width": int(self.width),
            "height": int(self.height),
        }


def _reflect(y: Number, screen_height: int, y_offset: int) -> int:
    return int(screen_height) - int(y) + y_offset


def to_capture_space(rect: CaptureRectangle, screen_height: int, y_offset: int = 0) -> CaptureRectangle:
    """
    Convert a bottom-left-origin rectangle to top-left-origin pixels.

    Coordinates are truncated to integers, each Y is reflected as
    screen_height - y and y_offset is added to both Y bounds. Reflection
    swaps which corner is on top, so the result is normalized.

    Args:
        rect: Rectangle in bottom-left-origin coordinates
        screen_height: Height of the primary display in pixels
        y_offset: Vertical inset added after reflection

    Returns:
        CaptureRectangle: Normalized rectangle in top-left-origin pixels
    """
    converted = CaptureRectangle(
        Point(int(rect.min.x), _reflect(rect.min.y, screen_height, y_offset)),
        Point(int(rect.max.x), _reflect(rect.max.y, screen_height, y_offset)),
    )
    return converted.normalized()


def from_capture_space(rect: CaptureRectangle, screen_height: int, y_offset: int = 0) -> CaptureRectangle:
    """Inverse of to_capture_space for integer rectangles."""
    converted = CaptureRectangle(
        Point(int(rect.min.x), int(screen_height) + y_offset - int(rect.min.y)),
        Point(int(rect.max.x), int(screen_height) + y_offset - int(rect.max.y)),
    )
    return converted.normalized()
