#!/usr/bin/env python3
"""
Selection Overlay

A translucent, undecorated tkinter window covering the primary display. Mouse
bindings only record button transitions; a frame loop polls the pointer
position once per frame, converts it to the selector's bottom-left space and
feeds one PointerSample to the RegionSelector. The window closes as soon as
the selector reaches a terminal state.

This module is part of the UI Layer. It depends on the Core Layer only.

Sample input:
- select_region(1920, 1080)

Expected output:
- CaptureRectangle(min=Point(x=100, y=680), max=Point(x=300, y=880)) after a drag,
  None after a right click or Escape
"""

import tkinter as tk
from typing import Optional

from loguru import logger

from skrins.core.constants import DEFAULT_Y_OFFSET, OVERLAY_SETTINGS
from skrins.core.exceptions import CaptureError
from skrins.core.geometry import CaptureRectangle, Point, to_capture_space
from skrins.core.selector import PointerSample, RegionSelector


class SelectionOverlay:
    """Translucent full-screen window that feeds pointer samples to a RegionSelector."""

    def __init__(self, screen_width: int, screen_height: int, y_offset: int = DEFAULT_Y_OFFSET):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.selector = RegionSelector(screen_height, y_offset)

        # Button transitions since the last frame
        self._primary_down = False
        self._primary_clicked = False
        self._primary_released = False
        self._secondary_released = False

        self.root: Optional[tk.Tk] = None
        self.canvas: Optional[tk.Canvas] = None
        self._outline = None

    def _build(self) -> None:
        try:
            root = tk.Tk()
        except tk.TclError as e:
            raise CaptureError(f"Cannot create selection window: {str(e)}") from e

        root.overrideredirect(True)
        root.geometry(f"{self.screen_width}x{self.screen_height}+0+0")
        root.attributes("-topmost", True)
        try:
            root.attributes("-alpha", OVERLAY_SETTINGS["ALPHA"])
        except tk.TclError:
            logger.debug("Window manager does not support transparency")
        root.configure(cursor="crosshair", background=OVERLAY_SETTINGS["BACKGROUND"])

        canvas = tk.Canvas(
            root,
            width=self.screen_width,
            height=self.screen_height,
            highlightthickness=0,
            background=OVERLAY_SETTINGS["BACKGROUND"],
        )
        canvas.pack(fill=tk.BOTH, expand=True)

        root.bind("<ButtonPress-1>", self._on_primary_press)
        root.bind("<ButtonRelease-1>", self._on_primary_release)
        root.bind("<ButtonRelease-3>", self._on_secondary_release)
        root.bind("<Escape>", self._on_secondary_release)

        self.root = root
        self.canvas = canvas

    def _on_primary_press(self, event) -> None:
        self._primary_down = True
        self._primary_clicked = True

    def _on_primary_release(self, event) -> None:
        self._primary_down = False
        self._primary_released = True

    def _on_secondary_release(self, event) -> None:
        self._secondary_released = True

    def _pointer(self) -> Point:
        x, y = self.root.winfo_pointerxy()
        # Tk reports top-left-origin screen coordinates
        return Point(x, self.screen_height - y)

    def _tick(self) -> None:
        sample = PointerSample(
            position=self._pointer(),
            primary_pressed=self._primary_down or self._primary_clicked,
            primary_released=self._primary_released,
            secondary_released=self._secondary_released,
        )
        self._primary_clicked = False
        self._primary_released = False
        self._secondary_released = False

        self.selector.feed(sample)
        self._draw()

        if self.selector.finished:
            self.root.destroy()
            return
        self.root.after(OVERLAY_SETTINGS["FRAME_INTERVAL_MS"], self._tick)

    def _draw(self) -> None:
        preview = self.selector.preview
        if preview is None:
            return
        # Canvas coordinates are top-left based and have no inset
        box = to_capture_space(preview, self.screen_height, 0)
        coords = (box.min.x, box.min.y, box.max.x, box.max.y)
        if self._outline is None:
            self._outline = self.canvas.create_rectangle(
                *coords,
                outline=OVERLAY_SETTINGS["OUTLINE"],
                width=OVERLAY_SETTINGS["OUTLINE_WIDTH"],
            )
        else:
            self.canvas.coords(self._outline, *coords)

    def run(self) -> Optional[CaptureRectangle]:
        """Show the overlay until the user commits or cancels."""
        self._build()
        self.root.focus_force()
        self.root.after(OVERLAY_SETTINGS["FRAME_INTERVAL_MS"], self._tick)
        self.root.mainloop()

        result = self.selector.result()
        if result is None:
            logger.info("Selection cancelled")
        else:
            logger.info(f"Selected {result.as_region()}")
        return result


def select_region(screen_width: int, screen_height: int, y_offset: int = DEFAULT_Y_OFFSET) -> Optional[CaptureRectangle]:
    """
    Run one interactive selection.

    Args:
        screen_width: Width of the primary display in pixels
        screen_height: Height of the primary display in pixels
        y_offset: Vertical inset applied to the committed rectangle

    Returns:
        Optional[CaptureRectangle]: Capture-space rectangle, or None when cancelled
    """
    return SelectionOverlay(screen_width, screen_height, y_offset).run()
