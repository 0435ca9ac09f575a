"""Entry point that wires the calendar sync components together."""

from datetime import date, datetime
from typing import Callable, List, Optional, Union
import logging

from ..core.config import CalendarSyncConfig
from ..core.models import CalendarInfo, LinkedEvents, RecurrenceSpec, Task
from ..utils.macos import LinkOpener, default_link_opener
from ..utils.prompts import Alerter, ConsoleAlerter
from .calendars import list_writable_calendars
from .events import EventOrchestrator
from .gateway import CalendarGateway, EventKitCalendarGateway
from .notes import compose_notes
from .opener import EventOpener
from .permissions import PermissionGate
from .recurrence import build_recurrence
from .removal import BatchRemover, RemovalReport
from .timing import TimeResolver


class CalendarSyncService:
    """Create, remove and open the calendar events of tasks.

    Public methods mirror what a task screen needs: create events when a task
    is saved with calendar sync on, re-create them on edit, remove them on
    delete or when sync is turned off, and open them from the task view.
    """

    def __init__(self, config: Optional[CalendarSyncConfig] = None,
                 gateway: Optional[CalendarGateway] = None,
                 alerter: Optional[Alerter] = None,
                 link_opener: Optional[LinkOpener] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = config or CalendarSyncConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.gateway = gateway if gateway is not None else EventKitCalendarGateway(logger=logger)
        self.alerter = alerter or ConsoleAlerter(logger=logger)
        self.link_opener = link_opener or default_link_opener(logger)

        self.permission_gate = PermissionGate(
            self.gateway, self.alerter, self.link_opener,
            platform=self.config.platform, logger=logger,
        )
        self.time_resolver = TimeResolver(
            default_start=self.config.start_time, clock=clock, logger=logger,
        )
        self.orchestrator = EventOrchestrator(
            self.gateway, self.permission_gate, self.alerter, self.config,
            time_resolver=self.time_resolver, logger=logger,
        )
        self.remover = BatchRemover(self.gateway, self.permission_gate, logger=logger)
        self.opener = EventOpener(
            self.gateway, self.permission_gate, self.alerter, self.link_opener,
            platform=self.config.platform, clock=self.time_resolver.now, logger=logger,
        )

    # Component shortcuts
    def ensure_permission(self) -> bool:
        return self.permission_gate.ensure_permission()

    def build_recurrence(self, task: Task) -> RecurrenceSpec:
        return build_recurrence(task)

    def compose_notes(self, task: Task, occurrence_label: Optional[str] = None,
                      companion_name: Optional[str] = None,
                      assigned_to_name: Optional[str] = None) -> str:
        return compose_notes(task, occurrence_label, companion_name, assigned_to_name,
                             attribution=self.config.attribution)

    def create_event_for_task(self, task: Task, companion_name: Optional[str] = None,
                              assigned_to_name: Optional[str] = None) -> Optional[str]:
        return self.orchestrator.create_event_for_task(task, companion_name, assigned_to_name)

    def remove_linked_events(self, linked: Union[str, LinkedEvents, None]) -> None:
        self.remover.remove_linked_events(linked)

    @property
    def last_removal(self) -> RemovalReport:
        return self.remover.last_report

    def open_linked_event(self, event_id: str,
                          fallback_date: Union[datetime, date, str, None] = None) -> None:
        self.opener.open_linked_event(event_id, fallback_date)

    def list_writable_calendars(self) -> List[CalendarInfo]:
        return list_writable_calendars(
            self.gateway, self.permission_gate, self.config.platform, logger=self.logger,
        )

    # Task lifecycle flows
    def resync_task(self, task: Task, companion_name: Optional[str] = None,
                    assigned_to_name: Optional[str] = None) -> Optional[str]:
        """
        Bring a saved task's calendar events in line with its current state.

        Previously linked events are removed first. New events are created only
        when calendar sync is enabled on the task. If the removal was skipped
        for lack of permission nothing else happens and the existing field is
        returned unchanged.

        Returns:
            New linked-event field, or None when nothing is linked anymore
        """
        if task.calendar_event_id:
            self.logger.info(f"Removing previous calendar events for task {task.id}")
            self.remove_linked_events(task.calendar_event_id)
            if self.last_removal.skipped_permission:
                self.logger.warning(f"Keeping linked events of task {task.id}; they were not removed")
                return task.calendar_event_id

        if not task.sync_with_calendar:
            return None

        return self.create_event_for_task(task, companion_name, assigned_to_name)

    def unsync_task(self, task: Task) -> None:
        """Remove every calendar event linked to a task being deleted or unsynced."""
        if task.calendar_event_id:
            self.remove_linked_events(task.calendar_event_id)
