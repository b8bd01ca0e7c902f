#!/usr/bin/env python3
"""
Validators for Skrins CLI

Typer callbacks that check option values before any command runs.

This module is part of the Presentation Layer and should only depend on
Core Layer components.

Sample input:
- CLI parameter values

Expected output:
- Validated and processed parameter values
- Friendly error messages
"""

import os
from typing import Optional

import typer

from skrins.cli.formatters import print_error
from skrins.utils.logging import VALID_LEVELS


def validate_capture_dir(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    """
    Typer callback for the capture directory option.

    Args:
        ctx: Typer context
        value: Directory from CLI or environment

    Returns:
        Optional[str]: Expanded directory path
    """
    if value is None:
        return None

    path = os.path.expanduser(value)
    if not os.path.isdir(path):
        print_error(f"Capture directory does not exist: {path}")
        raise typer.Exit(1)
    return path


def validate_private_key(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    """Typer callback ensuring the private key file is readable."""
    if value is None:
        return None

    path = os.path.expanduser(value)
    if not os.path.isfile(path) or not os.access(path, os.R_OK):
        print_error(f"Private key not readable: {path}")
        raise typer.Exit(1)
    return path


def validate_remote_host(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    """Typer callback for host[:port]."""
    if value is None:
        return None

    host, sep, port = value.rpartition(":")
    if sep and (not host or not port.isdigit() or not 0 < int(port) < 65536):
        print_error(f"Invalid remote host: {value}. Expected host or host:port")
        raise typer.Exit(1)
    return value


def validate_log_level(ctx: typer.Context, value: str) -> str:
    level = value.upper()
    if level not in VALID_LEVELS:
        print_error(f"Invalid log level: {value}. Must be one of {', '.join(VALID_LEVELS)}")
        raise typer.Exit(1)
    return level
