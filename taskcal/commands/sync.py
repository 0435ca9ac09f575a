"""Sync command - write tasks into the device calendar."""

import os
from typing import List, Optional
import logging

from ..calendar.service import CalendarSyncService
from ..core.config import CalendarSyncConfig
from ..core.exceptions import InvalidOccurrenceTimeError
from ..core.models import LinkedEvents, Task
from ..tasks.store import TaskFile


class SyncCommand:
    """Command for creating and refreshing the calendar events of tasks.

    Without ``task_id`` only pending work is done: tasks with calendar sync
    on and no linked events get events, and tasks with sync off lose theirs.
    With ``task_id`` the task is fully re-synced (old events removed, new
    ones created).
    """

    def __init__(self, config: CalendarSyncConfig, verbose: bool = False,
                 service: Optional[CalendarSyncService] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self.service = service or CalendarSyncService(config)
        self.store = TaskFile(config.tasks_path)

    def _select_tasks(self, task_id: Optional[str]) -> Optional[List[Task]]:
        if task_id:
            task = self.store.get_task(task_id)
            if task is None:
                print(f"Task not found: {task_id}")
                return None
            return [task]

        return [
            task for task in self.store.load_tasks()
            if (task.sync_with_calendar and not task.calendar_event_id)
            or (not task.sync_with_calendar and task.calendar_event_id)
        ]

    def _preview(self, task: Task, companion_name: Optional[str],
                 assigned_to_name: Optional[str], resync: bool) -> bool:
        linked = task.linked_events
        if linked and (resync or not task.sync_with_calendar):
            print(f"   Would remove {len(linked)} linked event(s): {', '.join(linked)}")

        if not task.sync_with_calendar:
            return True

        try:
            plans = self.service.orchestrator.plan_occurrences(task, companion_name, assigned_to_name)
        except InvalidOccurrenceTimeError as exc:
            print(f"   ⚠️  Cannot schedule: {exc}")
            return False

        if not plans:
            print("   ⚠️  No dosage has a readable time; nothing would be created")
            return False

        for plan in plans:
            details = plan.details
            start = details.start_date.strftime("%Y-%m-%d %H:%M")
            repeat = f" (repeats {details.recurrence.value})" if details.recurrence else ""
            print(f"   • {start}: {plan.title}{repeat}")
            if self.verbose:
                for line in details.notes.splitlines():
                    print(f"       {line}")
        return True

    def _apply(self, task: Task, companion_name: Optional[str],
               assigned_to_name: Optional[str], resync: bool) -> bool:
        if resync:
            new_field = self.service.resync_task(task, companion_name, assigned_to_name)
            if task.calendar_event_id and self.service.last_removal.skipped_permission:
                print("   ❌ Calendar permission denied; linked events were left in place")
                return False
        elif task.sync_with_calendar:
            new_field = self.service.create_event_for_task(task, companion_name, assigned_to_name)
        else:
            self.service.unsync_task(task)
            if self.service.last_removal.skipped_permission:
                return False
            new_field = None

        if task.sync_with_calendar and not new_field:
            print("   ❌ No calendar events were created")
            self.store.set_linked_events(task.id, None)
            return False

        linked = LinkedEvents.parse(new_field)
        if not self.store.set_linked_events(task.id, linked):
            print(f"   ❌ Could not save linked events to {self.store.path}")
            return False

        if linked:
            print(f"   ✅ Linked {len(linked)} event(s)")
        else:
            print("   ✅ Calendar events removed")
        return True

    def run(self, apply_changes: bool = False, task_id: Optional[str] = None,
            companion_name: Optional[str] = None,
            assigned_to_name: Optional[str] = None) -> bool:
        """Run the sync command."""
        if not os.path.exists(self.store.path):
            print(f"Task file not found: {self.store.path}")
            return False

        tasks = self._select_tasks(task_id)
        if tasks is None:
            return False
        if not tasks:
            print("All tasks are already in sync with the calendar.")
            return True

        mode = "Applying" if apply_changes else "Previewing (dry run)"
        print(f"\n🔄 {mode} calendar sync for {len(tasks)} task(s)...")
        print("=" * 50)

        all_success = True
        resync = task_id is not None
        for task in tasks:
            print(f"\n📋 {task.title or task.id} [{task.id}]")
            try:
                if apply_changes:
                    ok = self._apply(task, companion_name, assigned_to_name, resync)
                else:
                    ok = self._preview(task, companion_name, assigned_to_name, resync)
            except Exception as exc:
                self.logger.error(f"Sync failed for task {task.id}: {exc}")
                print(f"   ❌ Sync failed: {exc}")
                ok = False
            all_success = all_success and ok

        print("\n" + "=" * 50)
        if not apply_changes:
            print("💡 Run with --apply to write these changes to your calendar.")
        return all_success
