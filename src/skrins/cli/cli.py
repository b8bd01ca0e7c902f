#!/usr/bin/env python3
"""
Command Line Interface for Skrins

This module provides the CLI using Typer and Rich. It wires the core
components together: the selection overlay and frame capturer on the main
thread, the directory watcher and upload pipeline on background threads.

This module is part of the Presentation Layer.

Sample input:
    skrins --path ~/Pictures/skrins --remote example.com:2003 -u deploy \\
        -k ~/.ssh/id_ed25519 -d /var/www/i --url https://i.example.com run

Expected output:
- A selection overlay; the captured region is uploaded and its URL copied,
  announced and opened. Uploading continues until Ctrl-C.
"""

import time
from pathlib import Path
from typing import Optional, Tuple

import typer
from loguru import logger

from skrins.core.capture import FrameCapturer
from skrins.core.config import SkrinsConfig, load_config
from skrins.core.constants import OVERLAY_SETTINGS, TRANSFER_SETTINGS
from skrins.core.exceptions import ConfigError, SkrinsError
from skrins.core.geometry import CaptureRectangle
from skrins.core.mss import get_screen_size
from skrins.core.pipeline import ItemStatus, UploadPipeline
from skrins.core.side_effects import PlyerNotifier, PyperclipClipboard, WebBrowserLauncher
from skrins.core.transcode import FfmpegTranscoder
from skrins.core.transfer import SFTPTransferClient
from skrins.core.watcher import DirectoryWatcher
from skrins.cli.formatters import (
    format_cli_response,
    print_capture_result,
    print_config,
    print_error,
    print_info,
    print_json,
    print_pass_report,
    print_warning,
)
from skrins.cli.validators import (
    validate_capture_dir,
    validate_log_level,
    validate_private_key,
    validate_remote_host,
)
from skrins.utils.logging import setup_logger


app = typer.Typer(
    help="Skrins - select a screen region, capture it and share a link",
    rich_markup_mode="rich",
    add_completion=False
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "INFO",
        "--log-level", "-l",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR).",
        envvar="LOG_LEVEL",
        callback=validate_log_level,
    ),
    log_file: Optional[str] = typer.Option(
        None, "--log-file", help="Also write logs to this file (rotated at 10 MB)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    path: Optional[str] = typer.Option(
        None, "--path", "-p",
        help="Directory where screenshots are saved locally [env: SKRINS_CAPTURE_DIR]",
        callback=validate_capture_dir,
    ),
    remote: Optional[str] = typer.Option(
        None, "--remote", "-r",
        help="Remote host, e.g. example.com:2003 or 43.56.122.31:22 [env: SKRINS_REMOTE_HOST]",
        callback=validate_remote_host,
    ),
    remote_user: Optional[str] = typer.Option(
        None, "--remote-user", "-u", help="Username on remote host [env: SKRINS_REMOTE_USER]"
    ),
    private_key: Optional[str] = typer.Option(
        None, "--private-key", "-k",
        help="Private key path [env: SKRINS_PRIVATE_KEY]",
        callback=validate_private_key,
    ),
    remote_path: Optional[str] = typer.Option(
        None, "--remote-path", "-d", help="Path on the remote host [env: SKRINS_REMOTE_PATH]"
    ),
    url: Optional[str] = typer.Option(
        None, "--url",
        help="Base URL that points to the remote path, e.g. https://i.example.com/ [env: SKRINS_BASE_URL]",
    ),
    y_offset: Optional[int] = typer.Option(
        None, "--y-offset", help="Vertical inset added to the selection [env: SKRINS_Y_OFFSET]"
    ),
    ffmpeg: Optional[str] = typer.Option(
        None, "--ffmpeg", help="ffmpeg binary used for transcoding [env: SKRINS_FFMPEG]"
    ),
):
    """
    Skrins - captures screen regions and uploads them over SFTP

    Files appearing in the capture directory are uploaded to the remote path;
    the resulting link is copied to the clipboard, shown in a notification
    and opened in the browser.
    """
    setup_logger(log_level, log_file)

    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output

    try:
        ctx.obj["config"] = load_config(
            capture_dir=path,
            remote_host=remote,
            remote_user=remote_user,
            private_key=private_key,
            remote_path=remote_path,
            base_url=url,
            y_offset=y_offset,
            ffmpeg_path=ffmpeg,
        )
    except ConfigError as e:
        _fail(ctx, str(e), title="Configuration Error")


def _fail(ctx: typer.Context, message: str, title: str = "Error") -> None:
    if ctx.obj and ctx.obj.get("json_output"):
        print_json(format_cli_response(False, error=message))
    else:
        print_error(message, title=title)
    raise typer.Exit(1)


def build_pipeline(config: SkrinsConfig) -> UploadPipeline:
    """Upload pipeline wired to the real SFTP client, ffmpeg and desktop collaborators."""
    remote = config.require_remote()
    return UploadPipeline(
        config,
        transfer=SFTPTransferClient(remote),
        transcoder=FfmpegTranscoder(config.ffmpeg_path),
        clipboard=PyperclipClipboard(),
        notifier=PlyerNotifier(config.app_name),
        browser=WebBrowserLauncher(),
    )


def start_background_upload(config: SkrinsConfig) -> Tuple[UploadPipeline, DirectoryWatcher]:
    """Start the pipeline worker and the watcher; queue one pass for files already waiting."""
    pipeline = build_pipeline(config)
    watcher = DirectoryWatcher(config.capture_dir, pipeline.trigger)
    pipeline.start()
    try:
        watcher.start()
    except SkrinsError:
        pipeline.stop()
        raise
    pipeline.trigger()
    return pipeline, watcher


def select_region(width: int, height: int, y_offset: int) -> Optional[CaptureRectangle]:
    # Imported here so headless commands never load tkinter
    from skrins.ui.overlay import select_region as run_overlay

    return run_overlay(width, height, y_offset)


def interactive_capture(config: SkrinsConfig) -> Optional[Path]:
    """Let the user select a region and capture it. Returns None when cancelled."""
    width, height = get_screen_size()
    rect = select_region(width, height, config.y_offset)
    if rect is None:
        return None

    time.sleep(OVERLAY_SETTINGS["CLOSE_DELAY_S"])
    return FrameCapturer(config.capture_dir).capture(rect)


def wait_until_interrupted(pipeline: UploadPipeline, watcher: DirectoryWatcher) -> bool:
    """
    Block until Ctrl-C or until the watcher dies, then shut both down.

    Shutdown waits at most SHUTDOWN_TIMEOUT seconds for a pass in progress.

    Returns:
        bool: True when stopped by the user, False when the watcher died
    """
    interrupted = False
    try:
        while watcher.running:
            time.sleep(0.5)
        logger.error("Watcher stopped unexpectedly")
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        interrupted = True
    finally:
        watcher.stop(TRANSFER_SETTINGS["SHUTDOWN_TIMEOUT"])
        pipeline.stop(TRANSFER_SETTINGS["SHUTDOWN_TIMEOUT"])
    return interrupted


@app.command("run")
def run_command(ctx: typer.Context):
    """
    Capture a region, then keep uploading new files until Ctrl-C.
    """
    config: SkrinsConfig = ctx.obj["config"]
    json_output = ctx.obj.get("json_output", False)

    try:
        pipeline, watcher = start_background_upload(config)
    except SkrinsError as e:
        _fail(ctx, str(e))

    try:
        path = interactive_capture(config)
    except SkrinsError as e:
        watcher.stop(TRANSFER_SETTINGS["SHUTDOWN_TIMEOUT"])
        pipeline.stop(TRANSFER_SETTINGS["SHUTDOWN_TIMEOUT"])
        _fail(ctx, str(e), title="Capture Failed")

    if json_output:
        print_json(format_cli_response(True, data={"file": str(path) if path else None}))
    elif path is None:
        print_info("Selection cancelled")
    else:
        print_capture_result(path)

    if not wait_until_interrupted(pipeline, watcher):
        raise typer.Exit(1)


@app.command("capture")
def capture_command(ctx: typer.Context):
    """
    Select a region and save it to the capture directory (no upload).
    """
    config: SkrinsConfig = ctx.obj["config"]
    json_output = ctx.obj.get("json_output", False)

    try:
        path = interactive_capture(config)
    except SkrinsError as e:
        logger.error(f"Capture command failed: {str(e)}")
        _fail(ctx, str(e), title="Capture Failed")

    if json_output:
        print_json(format_cli_response(True, data={"file": str(path) if path else None}))
    elif path is None:
        print_info("Selection cancelled")
    else:
        print_capture_result(path)


@app.command("watch")
def watch_command(ctx: typer.Context):
    """
    Upload files appearing in the capture directory until Ctrl-C.
    """
    config: SkrinsConfig = ctx.obj["config"]

    try:
        pipeline, watcher = start_background_upload(config)
    except SkrinsError as e:
        _fail(ctx, str(e))

    if not ctx.obj.get("json_output", False):
        print_info(f"Watching {config.capture_dir} - press Ctrl-C to stop")
    if not wait_until_interrupted(pipeline, watcher):
        raise typer.Exit(1)


@app.command("upload")
def upload_command(ctx: typer.Context):
    """
    Run one upload pass over the capture directory now.
    """
    config: SkrinsConfig = ctx.obj["config"]

    try:
        pipeline = build_pipeline(config)
    except SkrinsError as e:
        _fail(ctx, str(e))

    report = pipeline.run_pass()

    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(report.error is None, data=report.to_dict(), error=report.error))
    else:
        print_pass_report(report)
        failed = report.by_status(ItemStatus.FAILED)
        if failed:
            print_warning(f"{len(failed)} file(s) failed and stay in the capture store for the next pass")

    if report.error:
        raise typer.Exit(1)


@app.command("config")
def config_command(ctx: typer.Context):
    """
    Show the effective configuration.
    """
    config: SkrinsConfig = ctx.obj["config"]

    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(True, data=config.model_dump(mode="json")))
    else:
        print_config(config)


if __name__ == "__main__":
    app()
