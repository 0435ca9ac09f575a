"""
JSON task file used by the CLI.

The file holds ``{"tasks": [...]}`` with tasks in the camelCase wire form.
Only ``calendarEventId`` is ever written back.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.models import LinkedEvents, Task
from ..utils.io import safe_read_json, update_json


class TaskFile:
    """Reads tasks from, and records linked events into, a JSON task file."""

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        self.path = path
        self.logger = logger or logging.getLogger(__name__)

    def _raw_tasks(self) -> List[Dict[str, Any]]:
        data = safe_read_json(self.path, default={"tasks": []})
        tasks = data.get("tasks", [])
        if not isinstance(tasks, list):
            self.logger.warning(f"Ignoring malformed task list in {self.path}")
            return []
        return [item for item in tasks if isinstance(item, dict)]

    def load_tasks(self) -> List[Task]:
        """Return every task in the file."""
        tasks = [Task.from_dict(item) for item in self._raw_tasks()]
        self.logger.debug(f"Loaded {len(tasks)} task(s) from {self.path}")
        return tasks

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.load_tasks():
            if task.id == task_id:
                return task
        return None

    def set_linked_events(self, task_id: str, linked: Optional[LinkedEvents]) -> bool:
        """
        Persist the linked-event field of one task.

        Args:
            task_id: Task to update
            linked: Events now linked to the task; None or empty clears the field

        Returns:
            True if the task was found and the file was written
        """
        field_value = linked.to_field() if linked else None
        found = []

        def mutate(data: Dict[str, Any]) -> Dict[str, Any]:
            for item in data.get("tasks", []):
                if isinstance(item, dict) and str(item.get("id", item.get("_id", ""))) == task_id:
                    item["calendarEventId"] = field_value
                    found.append(task_id)
            return data

        written = update_json(self.path, mutate, default={"tasks": []})
        if not found:
            self.logger.warning(f"Task {task_id} not found in {self.path}")
            return False
        if written:
            self.logger.debug(f"Task {task_id} calendarEventId -> {field_value}")
        return written
