"""Open a linked event in the platform calendar app."""

from datetime import date, datetime, timezone
from typing import Callable, Optional, Union
import logging

from ..core.exceptions import DeepLinkError
from ..core.models import DevicePlatform
from ..utils.date import coerce_datetime
from ..utils.macos import LinkOpener
from ..utils.prompts import Alerter
from .gateway import CalendarGateway
from .permissions import PermissionGate

# calshow: takes seconds since the Apple reference date
APPLE_REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)

FALLBACK_MESSAGE = "Event saved. Please open your calendar app to view it."


def build_deep_link(instant: datetime, platform: DevicePlatform) -> str:
    """
    Build a URL that opens the platform calendar near an instant.

    Args:
        instant: Aware datetime to jump to
        platform: Target platform

    Returns:
        ``calshow:`` URL on Apple platforms, Android calendar content URL otherwise
    """
    if instant.tzinfo is None:
        instant = instant.astimezone()

    if platform.is_apple:
        seconds = int((instant - APPLE_REFERENCE_DATE).total_seconds())
        return f"calshow:{seconds}"

    if platform is DevicePlatform.ANDROID:
        millis = int(instant.timestamp() * 1000)
        return f"content://com.android.calendar/time/{millis}"

    raise DeepLinkError(f"No calendar deep link for platform {platform.value}")


class EventOpener:
    """Locates a linked event and opens the calendar app at its time."""

    def __init__(self, gateway: CalendarGateway, permission_gate: PermissionGate,
                 alerter: Alerter, link_opener: LinkOpener,
                 platform: DevicePlatform = DevicePlatform.MACOS,
                 clock: Optional[Callable[[], datetime]] = None,
                 logger: Optional[logging.Logger] = None):
        self.gateway = gateway
        self.permission_gate = permission_gate
        self.alerter = alerter
        self.link_opener = link_opener
        self.platform = platform
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.logger = logger or logging.getLogger(__name__)

    def _target_instant(self, event_id: str,
                        fallback_date: Union[datetime, date, str, None]) -> datetime:
        event = self.gateway.find_event_by_id(event_id)
        if event is not None and event.start_time is not None:
            return event.start_time

        if event is None:
            self.logger.debug(f"Event {event_id} not found; using fallback date")

        fallback = coerce_datetime(fallback_date)
        if fallback is not None:
            return fallback
        return self.clock()

    def open_linked_event(self, event_id: str,
                          fallback_date: Union[datetime, date, str, None] = None) -> None:
        """
        Jump to an event in the calendar app.

        Falls back to a message telling the user where to find the event when
        the link cannot be opened; never raises.

        Args:
            event_id: Host event identifier
            fallback_date: Instant to open when the event has no start time
        """
        if not self.permission_gate.ensure_permission():
            return

        try:
            instant = self._target_instant(event_id, fallback_date)
            url = build_deep_link(instant, self.platform)
            self.logger.debug(f"Opening calendar deep link {url}")

            if self.link_opener.can_open(url) and self.link_opener.open(url):
                return

            self.logger.info(f"Calendar deep link not supported: {url}")
        except Exception as exc:
            self.logger.warning(f"Failed to open event {event_id}: {exc}")

        try:
            self.alerter.alert("Calendar", FALLBACK_MESSAGE)
        except Exception as exc:
            self.logger.warning(f"Failed to show calendar fallback message: {exc}")
