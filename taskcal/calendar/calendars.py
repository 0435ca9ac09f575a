"""Discover the calendars a task can be synced into."""

from typing import List, Optional
import logging

from ..core.models import CalendarInfo, DevicePlatform
from .gateway import CalendarGateway
from .permissions import PermissionGate


def is_supported_on_platform(source: Optional[str], platform: DevicePlatform) -> bool:
    """Hide Google calendars on Apple platforms and iCloud calendars on Android."""
    source_lower = (source or "").lower()
    if platform.is_apple:
        return "google" not in source_lower
    return "icloud" not in source_lower and "apple" not in source_lower


def calendar_kind(calendar: CalendarInfo) -> str:
    """Classify a calendar as ``google``, ``icloud`` or ``local`` for display."""
    source = (calendar.source or "").lower()
    title = (calendar.title or "").lower()
    if "google" in source or "google" in title:
        return "google"
    if "icloud" in source or "apple" in source or "icloud" in title:
        return "icloud"
    return "local"


def list_writable_calendars(gateway: CalendarGateway, permission_gate: PermissionGate,
                            platform: DevicePlatform,
                            logger: Optional[logging.Logger] = None) -> List[CalendarInfo]:
    """
    List calendars that accept new events on this platform.

    Returns:
        Writable, platform-appropriate calendars; empty when access is denied
        or the lookup fails
    """
    logger = logger or logging.getLogger(__name__)

    if not permission_gate.ensure_permission():
        return []

    try:
        calendars = gateway.find_calendars()
    except Exception as exc:
        logger.warning(f"Failed to fetch calendars: {exc}")
        return []

    writable = [
        cal for cal in calendars
        if cal.allows_modifications and is_supported_on_platform(cal.source, platform)
    ]
    logger.debug(f"{len(writable)} of {len(calendars)} calendars are writable on {platform.value}")
    return writable
