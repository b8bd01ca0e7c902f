"""
Exception hierarchy for Skrins.

Fatal errors (ConfigError, CaptureError, WatchError) end the current command.
TransferError is a per-item failure: the upload pipeline logs it and leaves
the file in place for the next pass.
"""


class SkrinsError(Exception):
    """Base class for all Skrins errors."""


class ConfigError(SkrinsError):
    """Configuration is missing or invalid."""


class CaptureError(SkrinsError):
    """The screen could not be read or the capture could not be written."""


class WatchError(SkrinsError):
    """The capture store could not be watched."""


class TransferError(SkrinsError):
    """A file could not be copied to the remote host."""

    def __init__(self, message: str, remote_path: str = ""):
        super().__init__(message)
        self.remote_path = remote_path
