"""Create calendar events for tasks.

A task becomes either one event or, for medication tasks with a dosage
schedule, one event per dosage. The host IDs of everything created are
returned as a ``LinkedEvents`` list for the caller to persist.
"""

from typing import List, Optional
import logging

from ..core.config import CalendarSyncConfig
from ..core.exceptions import CalendarError, InvalidOccurrenceTimeError
from ..core.models import (
    Alarm,
    CalendarTarget,
    EventDetails,
    LinkedEvents,
    OccurrencePlan,
    RecurrenceSpec,
    Task,
)
from ..utils.date import to_utc_iso
from ..utils.prompts import Alerter
from .gateway import CalendarGateway
from .notes import compose_notes
from .permissions import PermissionGate
from .recurrence import build_recurrence
from .timing import TimeResolver


class EventOrchestrator:
    """Turns a task into host calendar writes."""

    def __init__(self, gateway: CalendarGateway, permission_gate: PermissionGate,
                 alerter: Alerter, config: Optional[CalendarSyncConfig] = None,
                 time_resolver: Optional[TimeResolver] = None,
                 logger: Optional[logging.Logger] = None):
        self.gateway = gateway
        self.permission_gate = permission_gate
        self.alerter = alerter
        self.config = config or CalendarSyncConfig()
        self.time_resolver = time_resolver or TimeResolver(default_start=self.config.start_time)
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def calendar_target(self, task: Task) -> CalendarTarget:
        return CalendarTarget.from_provider(task.calendar_provider, self.config.placeholder_sentinels)

    def build_alarms(self, task: Task) -> Optional[List[Alarm]]:
        """Alarms for a task: its own lead time, else the default when reminders are on."""
        if task.reminder_offset_minutes is not None:
            return [Alarm(offset_minutes=-abs(task.reminder_offset_minutes))]
        if task.reminders_enabled:
            return [Alarm(offset_minutes=-self.config.default_reminder_minutes)]
        return None

    def expands_dosages(self, task: Task) -> bool:
        medication = task.medication
        return medication is not None and bool(medication.dosages)

    def _title(self, task: Task) -> str:
        return (task.title or "").strip() or self.config.default_title

    def _details(self, window, notes: str, alarms: Optional[List[Alarm]],
                 recurrence: RecurrenceSpec, target: CalendarTarget) -> EventDetails:
        return EventDetails(
            start_date=window.start,
            end_date=window.end,
            notes=notes,
            all_day=False,
            alarms=alarms,
            recurrence=recurrence.recurrence,
            recurrence_rule=recurrence.rule,
            calendar_id=target.calendar_id,
        )

    def plan_occurrences(self, task: Task, companion_name: Optional[str] = None,
                         assigned_to_name: Optional[str] = None) -> List[OccurrencePlan]:
        """
        Build the writes a task maps to without touching the calendar.

        Dosages with unreadable times are left out of the plan.

        Raises:
            InvalidOccurrenceTimeError: if a single-event task has an unreadable time
        """
        target = self.calendar_target(task)
        alarms = self.build_alarms(task)
        recurrence = build_recurrence(task)
        title = self._title(task)

        if not self.expands_dosages(task):
            window = self.time_resolver.resolve_window(task)
            notes = compose_notes(
                task,
                companion_name=companion_name,
                assigned_to_name=assigned_to_name,
                attribution=self.config.attribution,
            )
            return [OccurrencePlan(title=title, details=self._details(window, notes, alarms, recurrence, target))]

        base_date = self.time_resolver.base_date(task)
        plans = []
        for dosage in task.medication.dosages:
            window = self.time_resolver.resolve_window(dosage, base_date)
            if window is None:
                continue
            notes = compose_notes(
                task,
                occurrence_label=dosage.label,
                companion_name=companion_name,
                assigned_to_name=assigned_to_name,
                attribution=self.config.attribution,
            )
            plans.append(OccurrencePlan(
                title=f"{title} - {dosage.label}",
                details=self._details(window, notes, alarms, recurrence, target),
                dosage_label=dosage.label,
            ))
        return plans

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def _save(self, plan: OccurrencePlan) -> str:
        details = plan.details
        self.logger.debug(
            f"Saving event '{plan.title}': start={to_utc_iso(details.start_date)}, "
            f"end={to_utc_iso(details.end_date)}, calendar={details.calendar_id}, "
            f"alarms={len(details.alarms or [])}, "
            f"recurrence={details.recurrence.value if details.recurrence else None}, "
            f"rule={details.recurrence_rule.to_dict() if details.recurrence_rule else None}"
        )
        return self.gateway.save_event(plan.title, details)

    def _create_single_event(self, task: Task, companion_name: Optional[str],
                             assigned_to_name: Optional[str]) -> Optional[LinkedEvents]:
        try:
            plan = self.plan_occurrences(task, companion_name, assigned_to_name)[0]
            event_id = self._save(plan)
        except InvalidOccurrenceTimeError as exc:
            self.logger.error(f"Cannot schedule task {task.id}: {exc}")
            self.alerter.alert("Calendar", "Unable to read the date or time of this task.")
            return None
        except CalendarError as exc:
            self.logger.error(f"Failed to create event for task {task.id}: {exc}")
            self.alerter.alert("Calendar", "Unable to add this task to your calendar.")
            return None

        if not event_id:
            self.logger.error(f"Calendar returned no event ID for task {task.id}")
            self.alerter.alert("Calendar", "Unable to add this task to your calendar.")
            return None

        self.logger.info(f"Event created for task {task.id}: {event_id}")
        return LinkedEvents([event_id])

    def _create_dosage_events(self, task: Task, companion_name: Optional[str],
                              assigned_to_name: Optional[str]) -> Optional[LinkedEvents]:
        total = len(task.medication.dosages)
        plans = self.plan_occurrences(task, companion_name, assigned_to_name)

        event_ids: List[str] = []
        # Strictly sequential writes
        for plan in plans:
            try:
                event_id = self._save(plan)
            except Exception as exc:
                self.logger.warning(
                    f"Failed to create dosage event '{plan.dosage_label}' for task {task.id}: {exc}"
                )
                continue

            if not event_id:
                self.logger.warning(f"No event ID returned for dosage '{plan.dosage_label}'")
                continue

            self.logger.debug(f"Dosage event created: {event_id}")
            event_ids.append(event_id)

        if not event_ids:
            self.logger.warning(f"No dosage events created for task {task.id}")
            return None

        skipped = total - len(event_ids)
        if skipped and self.config.alert_on_partial_failure:
            self.alerter.alert(
                "Calendar",
                f"{skipped} of {total} dosage reminders could not be added to your calendar.",
            )

        linked = LinkedEvents(event_ids)
        self.logger.info(
            f"Created {len(linked)} of {total} dosage events for task {task.id}: {linked.to_field()}"
        )
        return linked

    def create_events(self, task: Task, companion_name: Optional[str] = None,
                      assigned_to_name: Optional[str] = None) -> Optional[LinkedEvents]:
        """
        Write the calendar events for a task.

        Returns:
            LinkedEvents of everything created, or None when nothing was written
        """
        try:
            target = self.calendar_target(task)
            self.logger.info(
                f"Creating calendar events for task {task.id} "
                f"(target={target.kind.value}, companion={companion_name}, assigned_to={assigned_to_name})"
            )

            if not self.permission_gate.ensure_permission():
                self.logger.warning("Calendar permission denied; no events created")
                return None

            if self.expands_dosages(task):
                self.logger.info(f"Creating one event per dosage for task {task.id}")
                return self._create_dosage_events(task, companion_name, assigned_to_name)

            return self._create_single_event(task, companion_name, assigned_to_name)

        except Exception as exc:
            self.logger.error(f"Unexpected failure creating events for task {task.id}: {exc}")
            self.alerter.alert("Calendar", "Unable to add this task to your calendar.")
            return None

    def create_event_for_task(self, task: Task, companion_name: Optional[str] = None,
                              assigned_to_name: Optional[str] = None) -> Optional[str]:
        """Create events and return the comma-joined linked-event field."""
        linked = self.create_events(task, companion_name, assigned_to_name)
        return linked.to_field() if linked else None
