"""Open command - jump to a task's event in the calendar app."""

from typing import Optional
import logging

from ..calendar.service import CalendarSyncService
from ..core.config import CalendarSyncConfig
from ..tasks.store import TaskFile


class OpenCommand:
    """Command for opening the first linked event of a task."""

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
        """Run the open command."""
        task = self.store.get_task(task_id)
        if task is None:
            print(f"Task not found: {task_id}")
            return False

        event_id = task.linked_events.first
        if not event_id:
            print(f"Task {task_id} is not linked to a calendar event. Run 'taskcal sync --apply' first.")
            return False

        self.logger.debug(f"Opening event {event_id} for task {task_id}")
        self.service.open_linked_event(event_id, fallback_date=task.due_at or task.date)
        return True
