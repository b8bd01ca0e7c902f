#!/usr/bin/env python3
"""
Post-upload Side Effects

This module announces an uploaded URL: it is copied to the clipboard, shown
in a desktop notification and opened in the default browser.

All of these are best-effort. Failures are logged and never reach the upload
pipeline, and nothing is retried.

This module is part of the Core Layer and should have no dependencies on
Presentation or UI layers.

Sample input:
- fire_upload_effects("https://i.example.com/3f2a.png", PyperclipClipboard(),
                      PlyerNotifier(), WebBrowserLauncher())

Expected output:
- URL on the clipboard, a "Screenshot uploaded!" notification and a browser tab
"""

import webbrowser
from typing import Optional, Protocol

import pyperclip
from loguru import logger
from plyer import notification

from skrins.core.constants import APP_NAME, NOTIFICATION_TITLE


class Clipboard(Protocol):
    def write(self, text: str) -> bool: ...


class Notifier(Protocol):
    def push(self, title: str, body: str) -> None: ...


class BrowserLauncher(Protocol):
    def open(self, url: str) -> bool: ...


class PyperclipClipboard:
    """System clipboard through pyperclip."""

    def write(self, text: str) -> bool:
        """
        Copy text to the clipboard.

        Returns:
            bool: False if no clipboard mechanism is available
        """
        try:
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            logger.warning(f"Failed to copy to clipboard: {str(e)}")
            return False


class PlyerNotifier:
    """
    Desktop notifications through plyer.

    Args:
        app_name: Application name shown by the notification daemon
        timeout: Seconds the notification stays visible
    """

    def __init__(self, app_name: str = APP_NAME, timeout: int = 5):
        self.app_name = app_name
        self.timeout = timeout

    def push(self, title: str, body: str) -> None:
        notification.notify(
            title=title,
            message=body,
            app_name=self.app_name,
            timeout=self.timeout,
        )


class WebBrowserLauncher:
    """Opens URLs with the default browser registered in webbrowser."""

    def open(self, url: str) -> bool:
        opened = webbrowser.open(url)
        if not opened:
            logger.warning(f"No browser could open {url}")
        return opened


def fire_upload_effects(
    url: str,
    clipboard: Optional[Clipboard],
    notifier: Optional[Notifier],
    browser: Optional[BrowserLauncher],
) -> None:
    """
    Announce an uploaded URL through every configured collaborator.

    Args:
        url: Public URL of the uploaded file
        clipboard, notifier, browser: Collaborators to use; None skips that effect
    """
    if clipboard is not None:
        try:
            clipboard.write(url)
        except Exception as e:
            logger.warning(f"Clipboard write failed: {str(e)}")

    if notifier is not None:
        try:
            notifier.push(NOTIFICATION_TITLE, url)
        except Exception as e:
            logger.warning(f"Failed to show notification: {str(e)}")

    if browser is not None:
        try:
            browser.open(url)
        except Exception as e:
            logger.warning(f"Failed to open browser: {str(e)}")
