"""Calendars command - list calendars that can receive task events."""

from typing import Optional
import logging

from ..calendar.calendars import calendar_kind
from ..calendar.service import CalendarSyncService
from ..core.config import CalendarSyncConfig
from ..core.models import PermissionState


class CalendarsCommand:
    """Command for listing writable calendars."""

    def __init__(self, config: CalendarSyncConfig, verbose: bool = False,
                 service: Optional[CalendarSyncService] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self.service = service or CalendarSyncService(config)

    def run(self) -> bool:
        """Run the calendars command."""
        calendars = self.service.list_writable_calendars()

        if self.service.permission_gate.state is PermissionState.DENIED:
            return False

        if not calendars:
            print("No writable calendars found.")
            return True

        print(f"\n📅 Writable calendars ({len(calendars)}):")
        for cal in calendars:
            print(f"  • {cal.title} [{calendar_kind(cal)}]")
            print(f"    ID: {cal.identifier}")
            if self.verbose and cal.source:
                print(f"    Source: {cal.source}")

        print("\n💡 Set a task's calendarProvider to one of these IDs to choose its calendar.")
        return True
