"""Remove the calendar events linked to a task."""

from dataclasses import dataclass, field
from typing import List, Optional, Union
import logging

from ..core.models import LinkedEvents
from .gateway import CalendarGateway
from .permissions import PermissionGate


@dataclass
class RemovalReport:
    """Outcome of the last removal batch."""

    removed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped_permission: bool = False

    @property
    def attempted(self) -> int:
        return len(self.removed) + len(self.failed)


class BatchRemover:
    """Deletes linked events one by one, tolerating per-event failures."""

    def __init__(self, gateway: CalendarGateway, permission_gate: PermissionGate,
                 logger: Optional[logging.Logger] = None):
        self.gateway = gateway
        self.permission_gate = permission_gate
        self.logger = logger or logging.getLogger(__name__)
        self.last_report = RemovalReport()

    def remove_linked_events(self, linked: Union[str, LinkedEvents, None]) -> None:
        """
        Delete every event referenced by a linked-event field.

        Already-removed or foreign IDs are logged and skipped; this never
        raises to the caller.

        Args:
            linked: Comma-joined field value or LinkedEvents
        """
        report = RemovalReport()
        self.last_report = report

        try:
            event_ids = LinkedEvents.parse(linked)
            if not event_ids:
                self.logger.debug("No event IDs to remove")
                return

            if not self.permission_gate.ensure_permission():
                self.logger.warning("Calendar permission denied; linked events were not removed")
                report.skipped_permission = True
                return

            self.logger.info(f"Removing {len(event_ids)} calendar event(s): {event_ids.ids}")

            # Sequential deletes; every ID is attempted once
            for event_id in event_ids:
                try:
                    self.gateway.remove_event(event_id)
                except Exception as exc:
                    self.logger.warning(f"Failed to remove event {event_id}: {exc}")
                    report.failed.append(event_id)
                    continue
                self.logger.debug(f"Removed event: {event_id}")
                report.removed.append(event_id)

        except Exception as exc:
            self.logger.error(f"Failed to remove calendar events: {exc}")
