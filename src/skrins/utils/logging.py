"""
Logging utilities for Skrins
"""

import os
import sys
from typing import Optional

from loguru import logger

VALID_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def truncate_large_value(value, max_str_len=100):
    """
    Truncates large string values for logging purposes.

    Args:
        value: The string value to truncate
        max_str_len: Maximum string length to allow

    Returns:
        Truncated string
    """
    if isinstance(value, str):
        if len(value) > max_str_len:
            truncated = value[:max_str_len]
            return f"{truncated}... [truncated, {len(value)} chars total]"
    return value


def setup_logger(level: str = "INFO", log_file: Optional[str] = None):
    """
    Setup the logger with proper configuration.

    Args:
        level: Logging level
        log_file: Optional path to a rotating log file
    """
    level = level.upper()
    if level not in VALID_LEVELS:
        print(f"Warning: Invalid log level '{level}'. Defaulting to INFO.", file=sys.stderr)
        level = "INFO"

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="{time:HH:mm:ss} | {level: <7} | {message}",
        backtrace=False,
        diagnose=False,
    )

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        )

    return logger
