#!/usr/bin/env python3
"""
Formatters for Skrins CLI

This module provides rich formatting utilities for the CLI presentation layer.
It includes tables and panels for captures, upload passes and configuration.

This module is part of the Presentation Layer and should only depend on
Core Layer components.

Sample input:
- Capture file path
- PassReport from a pipeline pass
- Error messages

Expected output:
- Rich formatted tables and panels
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from skrins.core.config import SkrinsConfig
from skrins.core.pipeline import ItemStatus, PassReport


# Initialize console
console = Console()


# Color scheme
COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "path": "cyan",
    "highlight": "magenta",
    "dim": "grey70",
}

STATUS_COLORS = {
    ItemStatus.UPLOADED: COLORS["success"],
    ItemStatus.TRANSCODED: COLORS["info"],
    ItemStatus.SKIPPED: COLORS["dim"],
    ItemStatus.FAILED: COLORS["error"],
    ItemStatus.BUSY: COLORS["warning"],
}


def print_capture_result(path: Path) -> None:
    """
    Format and print a capture result to the console.

    Args:
        path: Capture file written to the capture store
    """
    file_info = Text()
    file_info.append("Filename: ", style=COLORS["dim"])
    file_info.append(f"{path.name}\n", style=COLORS["path"])
    file_info.append("Directory: ", style=COLORS["dim"])
    file_info.append(f"{path.parent}", style=COLORS["path"])

    if os.path.exists(path):
        size_kb = os.path.getsize(path) / 1024
        file_info.append("\nSize: ", style=COLORS["dim"])
        file_info.append(f"{size_kb:.1f} KB", style=COLORS["info"])

    panel = Panel(
        file_info,
        title="[bold green]Screenshot Captured Successfully",
        border_style=COLORS["success"],
        padding=(1, 2)
    )

    console.print(panel)


def print_pass_report(report: PassReport) -> None:
    """
    Format and print the outcome of one upload pass as a table.

    Args:
        report: Report returned by UploadPipeline.run_pass
    """
    if report.error:
        print_error(report.error, title="Pass Failed")
        return

    if not report.outcomes:
        print_info("Capture store is empty")
        return

    table = Table(title="Upload Pass", show_lines=False)
    table.add_column("File", style=COLORS["path"])
    table.add_column("Status")
    table.add_column("Result")

    for outcome in report.outcomes:
        color = STATUS_COLORS.get(outcome.status, COLORS["dim"])
        result = outcome.url or outcome.error or outcome.destination or ""
        table.add_row(outcome.path.name, Text(outcome.status.value, style=color), result)

    console.print(table)


def print_config(config: SkrinsConfig) -> None:
    """Print the effective configuration."""
    table = Table(title="Skrins Configuration", show_header=False)
    table.add_column("Option", style=COLORS["dim"])
    table.add_column("Value", style=COLORS["path"])

    table.add_row("Capture directory", str(config.capture_dir))
    table.add_row("Y offset", str(config.y_offset))
    table.add_row("ffmpeg", config.ffmpeg_path or "(PATH lookup)")
    table.add_row("Transcode output", config.transcode_output_name)

    remote = config.remote
    if remote is None:
        table.add_row("Remote", Text("not configured", style=COLORS["warning"]))
    else:
        table.add_row("Remote host", f"{remote.hostname}:{remote.port}")
        table.add_row("Remote user", remote.user)
        table.add_row("Private key", str(remote.private_key_path))
        table.add_row("Remote path", remote.remote_dir)
        table.add_row("Base URL", remote.base_url)
        table.add_row("Connect timeout", f"{remote.connect_timeout:g}s")

    console.print(table)


def print_error(message: str, title: str = "Error") -> None:
    """
    Format and print error message to the console.

    Args:
        message: Error message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["error"]),
        title=f"[bold {COLORS['error']}]{title}",
        border_style=COLORS["error"],
        padding=(1, 2)
    )

    console.print(panel)


def print_warning(message: str, title: str = "Warning") -> None:
    panel = Panel(
        Text(message, style=COLORS["warning"]),
        title=f"[bold {COLORS['warning']}]{title}",
        border_style=COLORS["warning"],
        padding=(1, 2)
    )

    console.print(panel)


def print_info(message: str, title: str = "Info") -> None:
    panel = Panel(
        Text(message, style=COLORS["info"]),
        title=f"[bold {COLORS['info']}]{title}",
        border_style=COLORS["info"],
        padding=(1, 2)
    )

    console.print(panel)


def print_json(data: Dict[str, Any], title: str = "JSON Output") -> None:
    """
    Format and print JSON data to the console.

    Args:
        data: JSON data
        title: Panel title
    """
    json_str = json.dumps(data, indent=2, default=str)
    syntax = Syntax(json_str, "json", theme="monokai", line_numbers=True)

    panel = Panel(
        syntax,
        title=f"[bold {COLORS['highlight']}]{title}",
        border_style=COLORS["highlight"],
        padding=(1, 2)
    )

    console.print(panel)


def format_cli_response(success: bool, data: Any = None, error: str = None) -> Dict[str, Any]:
    """Wrap a command result in the JSON envelope used by --json."""
    response: Dict[str, Any] = {"success": success}
    if success and data is not None:
        response["data"] = data
    elif not success and error is not None:
        response["error"] = error
    return response
