"""
Core Layer for Skrins

This package contains the core logic: region selection, frame capture,
directory watching and the watch-transcode-upload pipeline.

The core layer is designed to be:
1. Independent of UI or CLI concerns
2. Fully testable in isolation (collaborators are injected)
3. Configured through one immutable SkrinsConfig

Usage:
    from skrins.core import load_config, UploadPipeline, SFTPTransferClient, FfmpegTranscoder
    config = load_config(capture_dir="~/Pictures/skrins")
    pipeline = UploadPipeline(config, SFTPTransferClient(config.require_remote()), FfmpegTranscoder())
    pipeline.run_pass()
"""

from skrins.core.constants import (
    ALLOWED_EXTENSIONS,
    APP_NAME,
    DEFAULT_Y_OFFSET,
    TRANSCODE_POLICY,
)
from skrins.core.exceptions import (
    CaptureError,
    ConfigError,
    SkrinsError,
    TransferError,
    WatchError,
)
from skrins.core.config import RemoteTarget, SkrinsConfig, load_config
from skrins.core.geometry import CaptureRectangle, Point, from_capture_space, to_capture_space
from skrins.core.selector import PointerSample, RegionSelector, SelectionState
from skrins.core.capture import FrameCapturer, clip_to_monitor
from skrins.core.transcode import FfmpegTranscoder
from skrins.core.transfer import SFTPTransferClient
from skrins.core.side_effects import (
    PlyerNotifier,
    PyperclipClipboard,
    WebBrowserLauncher,
    fire_upload_effects,
)
from skrins.core.pipeline import ItemOutcome, ItemStatus, PassReport, UploadPipeline
from skrins.core.watcher import DirectoryWatcher

__all__ = [
    # Constants
    'ALLOWED_EXTENSIONS',
    'APP_NAME',
    'DEFAULT_Y_OFFSET',
    'TRANSCODE_POLICY',

    # Errors
    'SkrinsError',
    'ConfigError',
    'CaptureError',
    'WatchError',
    'TransferError',

    # Configuration
    'RemoteTarget',
    'SkrinsConfig',
    'load_config',

    # Selection
    'Point',
    'CaptureRectangle',
    'to_capture_space',
    'from_capture_space',
    'PointerSample',
    'RegionSelector',
    'SelectionState',

    # Capture
    'FrameCapturer',
    'clip_to_monitor',

    # Upload
    'FfmpegTranscoder',
    'SFTPTransferClient',
    'PyperclipClipboard',
    'PlyerNotifier',
    'WebBrowserLauncher',
    'fire_upload_effects',
    'ItemOutcome',
    'ItemStatus',
    'PassReport',
    'UploadPipeline',
    'DirectoryWatcher',
]
