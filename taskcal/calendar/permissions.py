"""Calendar permission gate."""

from typing import Optional
import logging

from ..core.models import DevicePlatform, PermissionState, PermissionStatus
from ..utils.macos import LinkOpener
from ..utils.prompts import Alerter
from .gateway import CalendarGateway


SETTINGS_URLS = {
    DevicePlatform.MACOS: "x-apple.systempreferences:com.apple.preference.security?Privacy_Calendars",
    DevicePlatform.IOS: "app-settings:",
    DevicePlatform.ANDROID: "app-settings:",
}

PERMISSION_TITLE = "Calendar permission needed"
PERMISSION_MESSAGE = "Enable calendar access to sync tasks with your calendar."


class PermissionGate:
    """Checks, and if needed requests, calendar access before each operation.

    ``ensure_permission`` never raises. A denied or unavailable calendar
    produces a settings prompt and a ``False`` result.
    """

    def __init__(self, gateway: Optional[CalendarGateway], alerter: Alerter,
                 link_opener: Optional[LinkOpener] = None,
                 platform: DevicePlatform = DevicePlatform.MACOS,
                 logger: Optional[logging.Logger] = None):
        self.gateway = gateway
        self.alerter = alerter
        self.link_opener = link_opener or LinkOpener()
        self.platform = platform
        self.logger = logger or logging.getLogger(__name__)
        self.state = PermissionState.UNCHECKED

    def _binding_available(self) -> bool:
        if self.gateway is None:
            return False
        return all(
            callable(getattr(self.gateway, name, None))
            for name in ("check_permission", "request_permission")
        )

    def _open_settings(self) -> None:
        url = SETTINGS_URLS.get(self.platform)
        if url and not self.link_opener.open(url):
            self.logger.warning(f"Could not open system settings ({url})")

    def _prompt_for_settings(self) -> None:
        try:
            self.alerter.offer_settings(PERMISSION_TITLE, PERMISSION_MESSAGE, self._open_settings)
        except Exception as exc:
            self.logger.warning(f"Failed to show permission prompt: {exc}")

    def _deny(self) -> bool:
        self.state = PermissionState.DENIED
        self._prompt_for_settings()
        return False

    def ensure_permission(self) -> bool:
        """Return True when calendar access is authorized."""
        if not self._binding_available():
            self.logger.warning("Calendar binding is unavailable or not linked")
            return self._deny()

        self.state = PermissionState.CHECKING
        try:
            status = PermissionStatus.from_value(self.gateway.check_permission())
            if status is PermissionStatus.AUTHORIZED:
                self.state = PermissionState.AUTHORIZED
                return True

            requested = PermissionStatus.from_value(self.gateway.request_permission())
            if requested is PermissionStatus.AUTHORIZED:
                self.state = PermissionState.AUTHORIZED
                return True

            self.logger.warning(f"Calendar access not granted (status: {requested.value})")
        except Exception as exc:
            self.logger.warning(f"Calendar permission check failed: {exc}")

        return self._deny()
