"""macOS-specific helpers."""

from __future__ import annotations

import logging
import platform
from typing import Optional


def set_process_name(name: str, logger: Optional[logging.Logger] = None) -> bool:
    """Set the current process name on macOS when PyObjC is available."""
    if platform.system() != "Darwin":
        return False

    try:
        from Foundation import NSProcessInfo  # type: ignore
    except ImportError:
        if logger:
            logger.debug("PyObjC not installed; cannot set process name")
        return False

    try:
        process_info = NSProcessInfo.processInfo()
        if process_info.processName() == name:
            return True
        process_info.setProcessName_(name)
        return True
    except Exception as exc:  # pragma: no cover - PyObjC bridge errors
        if logger:
            logger.warning("Failed to set process name: %s", exc)
        return False


class LinkOpener:
    """Opens URLs on the host platform.

    The base implementation has no platform handler and reports every URL
    as unsupported.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def can_open(self, url: str) -> bool:
        return False

    def open(self, url: str) -> bool:
        self.logger.debug(f"No URL handler available for {url}")
        return False


class WorkspaceLinkOpener(LinkOpener):
    """Open URLs through AppKit's NSWorkspace."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self._workspace = None
        self._NSURL = None

    def _ensure_appkit(self) -> bool:
        if self._workspace is not None:
            return True
        if platform.system() != "Darwin":
            return False
        try:
            from AppKit import NSWorkspace  # type: ignore
            from Foundation import NSURL  # type: ignore
        except ImportError as exc:
            self.logger.debug(f"AppKit not available: {exc}")
            return False

        self._workspace = NSWorkspace.sharedWorkspace()
        self._NSURL = NSURL
        return True

    def _ns_url(self, url: str):
        return self._NSURL.URLWithString_(url)

    def can_open(self, url: str) -> bool:
        if not self._ensure_appkit():
            return False
        ns_url = self._ns_url(url)
        if ns_url is None:
            return False
        return self._workspace.URLForApplicationToOpenURL_(ns_url) is not None

    def open(self, url: str) -> bool:
        if not self._ensure_appkit():
            return super().open(url)
        ns_url = self._ns_url(url)
        if ns_url is None:
            self.logger.warning(f"Malformed URL: {url}")
            return False
        return bool(self._workspace.openURL_(ns_url))


def default_link_opener(logger: Optional[logging.Logger] = None) -> LinkOpener:
    """Return the URL opener for the running platform."""
    if platform.system() == "Darwin":
        return WorkspaceLinkOpener(logger)
    return LinkOpener(logger)
