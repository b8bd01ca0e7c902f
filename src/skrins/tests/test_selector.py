#!/usr/bin/env python3
"""
Unit tests for core/selector.py
"""

import os
import sys
import unittest

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from skrins.core.geometry import CaptureRectangle, Point
from skrins.core.selector import PointerSample, RegionSelector, SelectionState


def press(x, y):
    return PointerSample(Point(x, y), primary_pressed=True)


def release(x, y):
    return PointerSample(Point(x, y), primary_released=True)


def idle(x, y):
    return PointerSample(Point(x, y))


class TestRegionSelector(unittest.TestCase):
    """Test cases for the drag gesture state machine"""

    def setUp(self):
        self.selector = RegionSelector(screen_height=1080, y_offset=0)

    def test_starts_idle(self):
        """No anchor or preview before the first press"""
        self.assertEqual(self.selector.state, SelectionState.IDLE)
        self.assertIsNone(self.selector.preview)
        self.assertIsNone(self.selector.result())

    def test_idle_without_press(self):
        """Pointer movement alone does nothing"""
        self.selector.feed(idle(10, 10))
        self.assertEqual(self.selector.state, SelectionState.IDLE)
        self.assertIsNone(self.selector.anchor)

    def test_release_while_idle_is_ignored(self):
        """A release without a prior press does not commit"""
        self.selector.feed(release(10, 10))
        self.assertEqual(self.selector.state, SelectionState.IDLE)
        self.assertIsNone(self.selector.result())

    def test_drag_and_commit(self):
        """Press, drag and release commits the bounding box"""
        self.selector.feed(press(100, 400))
        self.assertEqual(self.selector.state, SelectionState.DRAGGING)

        self.selector.feed(press(250, 300))
        self.assertEqual(
            self.selector.preview,
            CaptureRectangle(Point(100, 300), Point(250, 400)),
        )

        state = self.selector.feed(release(300, 200))
        self.assertEqual(state, SelectionState.COMMITTED)
        self.assertTrue(self.selector.finished)

        result = self.selector.result()
        self.assertEqual(result.min, Point(100, 680))
        self.assertEqual(result.max, Point(300, 880))

    def test_drag_direction_does_not_matter(self):
        """Every drag direction between two corners gives the same result"""
        corners = [((100, 200), (300, 400)), ((300, 400), (100, 200)),
                   ((100, 400), (300, 200)), ((300, 200), (100, 400))]
        results = []
        for start, end in corners:
            selector = RegionSelector(screen_height=1080)
            selector.feed(press(*start))
            selector.feed(release(*end))
            results.append(selector.result())

        self.assertTrue(all(r == results[0] for r in results))

    def test_anchor_set_once(self):
        """Later samples move the cursor, never the anchor"""
        self.selector.feed(press(10, 10))
        self.selector.feed(press(50, 60))
        self.selector.feed(press(70, 80))

        self.assertEqual(self.selector.anchor, Point(10, 10))
        self.assertEqual(self.selector.cursor, Point(70, 80))

    def test_zero_area_selection(self):
        """Click without movement commits an empty rectangle"""
        self.selector.feed(press(40, 40))
        self.selector.feed(release(40, 40))

        result = self.selector.result()
        self.assertEqual(self.selector.state, SelectionState.COMMITTED)
        self.assertTrue(result.is_empty)
        self.assertEqual(result.width, 0)

    def test_press_and_release_in_one_frame(self):
        """A quick click inside one frame still commits"""
        sample = PointerSample(Point(40, 40), primary_pressed=True, primary_released=True)
        self.assertEqual(self.selector.feed(sample), SelectionState.COMMITTED)

    def test_cancel_while_dragging(self):
        """Secondary release cancels and clears the preview"""
        self.selector.feed(press(10, 10))
        self.selector.feed(press(50, 50))
        state = self.selector.feed(PointerSample(Point(50, 50), primary_pressed=True, secondary_released=True))

        self.assertEqual(state, SelectionState.CANCELLED)
        self.assertIsNone(self.selector.preview)
        self.assertIsNone(self.selector.result())

    def test_cancel_while_idle(self):
        """Secondary release before any press cancels the session"""
        self.selector.feed(PointerSample(Point(0, 0), secondary_released=True))
        self.assertEqual(self.selector.state, SelectionState.CANCELLED)

    def test_commit_wins_over_cancel(self):
        """Both releases in the same frame commit"""
        self.selector.feed(press(10, 10))
        sample = PointerSample(Point(60, 60), primary_released=True, secondary_released=True)

        self.assertEqual(self.selector.feed(sample), SelectionState.COMMITTED)
        self.assertIsNotNone(self.selector.result())

    def test_terminal_state_ignores_input(self):
        """Samples after commit change nothing"""
        self.selector.feed(press(10, 10))
        self.selector.feed(release(20, 20))
        result = self.selector.result()

        self.selector.feed(press(500, 500))
        self.selector.feed(PointerSample(Point(0, 0), secondary_released=True))

        self.assertEqual(self.selector.state, SelectionState.COMMITTED)
        self.assertEqual(self.selector.result(), result)

    def test_y_offset_applied(self):
        """The inset is added to both Y bounds of the result"""
        selector = RegionSelector(screen_height=1080, y_offset=24)
        selector.feed(press(100, 400))
        selector.feed(release(300, 200))

        result = selector.result()
        self.assertEqual(result.min, Point(100, 704))
        self.assertEqual(result.max, Point(300, 904))


if __name__ == "__main__":
    unittest.main()
