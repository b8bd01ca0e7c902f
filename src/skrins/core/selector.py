#!/usr/bin/env python3
"""
Region Selector

This module turns a pointer drag gesture into a normalized capture rectangle.
It is a pure state machine: the UI feeds it one PointerSample per rendered
frame and reads back the preview rectangle and, once the gesture ends, the
result.

States:
    IDLE -> DRAGGING -> COMMITTED | CANCELLED

- IDLE: waiting for the primary button. A press records the anchor.
- DRAGGING: while the primary button is held the cursor follows the pointer
  and the preview is the bounding box of anchor and cursor. Releasing the
  primary button commits.
- A secondary-button release before the commit cancels the session.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
    selector = RegionSelector(screen_height=1080)
    selector.feed(PointerSample(Point(100, 400), primary_pressed=True))
    selector.feed(PointerSample(Point(300, 200), primary_pressed=True))
    selector.feed(PointerSample(Point(300, 200), primary_released=True))

Expected output:
    selector.state      # SelectionState.COMMITTED
    selector.result()   # CaptureRectangle(min=Point(100, 680), max=Point(300, 880))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from skrins.core.constants import DEFAULT_Y_OFFSET
from skrins.core.geometry import CaptureRectangle, Point, to_capture_space


class SelectionState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


TERMINAL_STATES = (SelectionState.COMMITTED, SelectionState.CANCELLED)


@dataclass(frozen=True)
class PointerSample:
    """Pointer state observed during one frame."""
    position: Point
    primary_pressed: bool = False
    primary_released: bool = False
    secondary_released: bool = False


class RegionSelector:
    """
    One capture session.

    Args:
        screen_height: Height of the primary display, used for Y reflection
        y_offset: Vertical inset added to both Y bounds after reflection
    """

    def __init__(self, screen_height: int, y_offset: int = DEFAULT_Y_OFFSET):
        self.screen_height = screen_height
        self.y_offset = y_offset
        self.state = SelectionState.IDLE
        self.anchor: Optional[Point] = None
        self.cursor: Optional[Point] = None
        self.preview: Optional[CaptureRectangle] = None

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def feed(self, sample: PointerSample) -> SelectionState:
        """Advance the session by one input poll and return the new state."""
        if self.finished:
            return self.state

        if self.state == SelectionState.IDLE:
            if sample.primary_pressed:
                self._start_drag(sample.position)
        if self.state == SelectionState.DRAGGING:
            if sample.primary_pressed or sample.primary_released:
                self._move(sample.position)
            if sample.primary_released:
                self.state = SelectionState.COMMITTED
                logger.debug(f"Selection committed: {self.preview}")
                return self.state

        if sample.secondary_released:
            self.state = SelectionState.CANCELLED
            self.preview = None
            logger.debug("Selection cancelled")

        return self.state

    def _start_drag(self, position: Point) -> None:
        self.anchor = position
        self.cursor = position
        self.preview = CaptureRectangle.from_points(position, position)
        self.state = SelectionState.DRAGGING

    def _move(self, position: Point) -> None:
        self.cursor = position
        self.preview = CaptureRectangle.from_points(self.anchor, position)

    def result(self) -> Optional[CaptureRectangle]:
        """Committed rectangle in top-left capture space, or None."""
        if self.state != SelectionState.COMMITTED or self.preview is None:
            return None
        return to_capture_space(self.preview, self.screen_height, self.y_offset)
