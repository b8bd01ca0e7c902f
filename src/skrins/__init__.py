"""
Skrins

Select a region of the screen, capture it to a PNG file and share it: every
file that lands in the capture directory is uploaded over SFTP, and the public
link is copied to the clipboard, announced in a notification and opened in
the browser.

This package uses a layered architecture:

1. Core Layer: selection geometry, capture, watcher and upload pipeline
2. UI Layer: the tkinter selection overlay
3. Presentation Layer: CLI interface with rich formatting

Usage:
    # Direct API usage (Core Layer)
    from skrins.core import load_config, UploadPipeline
    config = load_config(capture_dir="~/Pictures/skrins")

    # CLI usage (Presentation Layer)
    # python -m skrins --path ~/Pictures/skrins run
"""

from skrins.core import (
    CaptureRectangle,
    DirectoryWatcher,
    FrameCapturer,
    RegionSelector,
    SkrinsConfig,
    UploadPipeline,
    load_config,
)

__version__ = "1.0.0"

__all__ = [
    'CaptureRectangle',
    'DirectoryWatcher',
    'FrameCapturer',
    'RegionSelector',
    'SkrinsConfig',
    'UploadPipeline',
    'load_config',
    '__version__',
]
