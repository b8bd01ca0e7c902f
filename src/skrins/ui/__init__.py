"""
UI Layer for Skrins: the interactive selection overlay.
"""

from skrins.ui.overlay import SelectionOverlay, select_region

__all__ = ["SelectionOverlay", "select_region"]
