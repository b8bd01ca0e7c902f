"""
Shared utilities for Skrins
"""

from skrins.utils.logging import setup_logger, truncate_large_value

__all__ = ["setup_logger", "truncate_large_value"]
