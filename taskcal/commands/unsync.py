"""Unsync command - remove the calendar events linked to a task."""

from typing import Optional
import logging

from ..calendar.service import CalendarSyncService
from ..core.config import CalendarSyncConfig
from ..tasks.store import TaskFile


class UnsyncCommand:
    """Command for removing a task's linked calendar events."""

    def __init__(self, config: CalendarSyncConfig, verbose: bool = False,
                 service: Optional[CalendarSyncService] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self.service = service or CalendarSyncService(config)
        self.store = TaskFile(config.tasks_path)

    def run(self, task_id: str) -> bool:
        """Run the unsync command."""
        task = self.store.get_task(task_id)
        if task is None:
            print(f"Task not found: {task_id}")
            return False

        if not task.linked_events:
            print(f"Task {task_id} has no linked calendar events.")
            return True

        self.service.unsync_task(task)
        report = self.service.last_removal

        if report.skipped_permission:
            print("Calendar access is required to remove events; nothing was changed.")
            return False

        print(f"Removed {len(report.removed)} of {report.attempted} linked event(s).")
        for event_id in report.failed:
            print(f"   ⚠️  Could not remove {event_id} (it may already be gone)")

        return self.store.set_linked_events(task.id, None)
