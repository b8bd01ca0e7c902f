#!/usr/bin/env python3
"""
Unit tests for core/geometry.py
"""

import os
import sys
import unittest

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from skrins.core.geometry import (
    CaptureRectangle,
    Point,
    from_capture_space,
    to_capture_space,
)


class TestGeometry(unittest.TestCase):
    """Test cases for coordinate conversion"""

    def test_from_points_any_direction(self):
        """Bounding box does not depend on drag direction"""
        expected = CaptureRectangle(Point(100, 200), Point(300, 400))
        self.assertEqual(CaptureRectangle.from_points(Point(100, 200), Point(300, 400)), expected)
        self.assertEqual(CaptureRectangle.from_points(Point(300, 400), Point(100, 200)), expected)
        self.assertEqual(CaptureRectangle.from_points(Point(100, 400), Point(300, 200)), expected)
        self.assertEqual(CaptureRectangle.from_points(Point(300, 200), Point(100, 400)), expected)

    def test_to_capture_space_reflects_y(self):
        """Y is reflected against the screen height and the result is normalized"""
        rect = CaptureRectangle(Point(100, 200), Point(300, 400))
        result = to_capture_space(rect, 1080)

        self.assertEqual(result.min, Point(100, 680))
        self.assertEqual(result.max, Point(300, 880))
        self.assertEqual(result.width, 200)
        self.assertEqual(result.height, 200)

    def test_to_capture_space_offset(self):
        """The offset shifts both Y bounds"""
        rect = CaptureRectangle(Point(100, 200), Point(300, 400))
        result = to_capture_space(rect, 1080, 24)

        self.assertEqual(result.min, Point(100, 704))
        self.assertEqual(result.max, Point(300, 904))

    def test_to_capture_space_truncates(self):
        """Fractional coordinates are truncated to integers"""
        rect = CaptureRectangle(Point(10.7, 20.9), Point(30.2, 40.5))
        result = to_capture_space(rect, 100)

        self.assertEqual(result.min, Point(10, 60))
        self.assertEqual(result.max, Point(30, 80))
        self.assertIsInstance(result.min.x, int)

    def test_round_trip(self):
        """Converting back recovers the original integer rectangle"""
        for offset in (0, 24, -5):
            for rect in (
                CaptureRectangle(Point(0, 0), Point(1920, 1080)),
                CaptureRectangle(Point(100, 200), Point(300, 400)),
                CaptureRectangle(Point(50, 50), Point(50, 50)),
            ):
                converted = to_capture_space(rect, 1080, offset)
                self.assertEqual(from_capture_space(converted, 1080, offset), rect)

    def test_empty_rectangle(self):
        """Zero width or height is empty"""
        self.assertTrue(CaptureRectangle(Point(5, 5), Point(5, 10)).is_empty)
        self.assertTrue(CaptureRectangle(Point(5, 5), Point(10, 5)).is_empty)
        self.assertFalse(CaptureRectangle(Point(5, 5), Point(6, 6)).is_empty)

    def test_as_region(self):
        """Region dictionary uses mss keys"""
        region = CaptureRectangle(Point(100, 680), Point(300, 880)).as_region()
        self.assertEqual(region, {"left": 100, "top": 680, "width": 200, "height": 200})


if __name__ == "__main__":
    unittest.main()
