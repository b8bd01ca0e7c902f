#!/usr/bin/env python3
"""
Video Transcoding Module

This module converts container formats that should not be uploaded as-is
(see TRANSCODE_POLICY) into a standard container by running ffmpeg. The
contract is boolean: True means the output file exists, False means the
input must be left alone.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- FfmpegTranscoder().transcode(Path("captures/clip.mov"), Path("captures/out.mp4"))

Expected output:
- True, with captures/out.mp4 written
"""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from loguru import logger

from skrins.core.constants import LOG_MAX_STR_LEN
from skrins.utils.logging import truncate_large_value


class FfmpegTranscoder:
    """
    Runs ffmpeg as a subprocess to convert one file.

    Args:
        ffmpeg_path: Explicit ffmpeg binary; falls back to PATH when None
        timeout: Seconds before a conversion is killed; None waits forever
    """

    def __init__(self, ffmpeg_path: Optional[str] = None, timeout: Optional[float] = None):
        self.ffmpeg_path = ffmpeg_path
        self.timeout = timeout

    def resolve_binary(self) -> Optional[str]:
        """Configured ffmpeg binary, or the one found on PATH."""
        if self.ffmpeg_path:
            return self.ffmpeg_path
        return shutil.which("ffmpeg")

    def build_command(self, binary: str, input_path: Path, output_path: Path) -> List[str]:
        # -n: never overwrite an output that has not been uploaded yet
        return [binary, "-hide_banner", "-n", "-i", str(input_path), str(output_path)]

    def transcode(self, input_path: Path, output_path: Path) -> bool:
        """
        Convert input_path into output_path.

        Args:
            input_path: Source file in the capture store
            output_path: Destination; an existing file is never overwritten

        Returns:
            bool: True if ffmpeg succeeded and the output exists
        """
        binary = self.resolve_binary()
        if binary is None:
            logger.error("ffmpeg not found on PATH, cannot transcode")
            return False

        cmd = self.build_command(binary, input_path, output_path)
        logger.info(f"Transcoding {input_path.name} -> {output_path.name}")
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"ffmpeg timed out after {self.timeout}s on {input_path}")
            return False
        except OSError as e:
            logger.error(f"Failed to run ffmpeg: {str(e)}")
            return False

        logger.debug(f"[ffmpeg stderr] {truncate_large_value(result.stderr, LOG_MAX_STR_LEN)}")
        logger.debug(f"[ffmpeg stdout] {truncate_large_value(result.stdout, LOG_MAX_STR_LEN)}")

        if result.returncode != 0:
            logger.error(f"ffmpeg exited with status {result.returncode} for {input_path}")
            return False

        if not output_path.exists():
            logger.error(f"ffmpeg reported success but {output_path} is missing")
            return False

        return True
