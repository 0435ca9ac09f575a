"""
Tests for the JSON task file (taskcal/tasks/store.py) and its I/O helpers.
"""

import json
import os

from taskcal.core.models import LinkedEvents
from taskcal.tasks.store import TaskFile
from taskcal.utils.io import safe_read_json, update_json
from tests.conftest import create_corrupted_json_file


class TestTaskFile:

    def test_load_tasks(self, tasks_file):
        tasks = TaskFile(tasks_file).load_tasks()

        assert [t.id for t in tasks] == ["task-walk", "task-meds", "task-old"]
        assert tasks[1].medication.medicine_name == "Amoxicillin"

    def test_get_task(self, tasks_file):
        store = TaskFile(tasks_file)
        assert store.get_task("task-old").linked_events.ids == ["evt-old-1", "evt-old-2"]
        assert store.get_task("nope") is None

    def test_set_linked_events_only_touches_field(self, tasks_file):
        store = TaskFile(tasks_file)

        assert store.set_linked_events("task-walk", LinkedEvents(["e1", "e2"]))

        with open(tasks_file) as handle:
            raw = json.load(handle)
        walk = raw["tasks"][0]
        assert walk["calendarEventId"] == "e1,e2"
        assert walk["title"] == "Morning walk"
        assert raw["tasks"][1].get("calendarEventId") is None

    def test_clear_linked_events(self, tasks_file):
        store = TaskFile(tasks_file)

        assert store.set_linked_events("task-old", None)

        assert store.get_task("task-old").calendar_event_id is None

    def test_unknown_task(self, tasks_file):
        assert TaskFile(tasks_file).set_linked_events("nope", LinkedEvents(["e"])) is False

    def test_missing_or_corrupted_file(self, temp_dir):
        path = os.path.join(temp_dir, "tasks.json")
        assert TaskFile(path).load_tasks() == []

        create_corrupted_json_file(path)
        assert TaskFile(path).load_tasks() == []


class TestJsonHelpers:

    def test_update_json_creates_file(self, temp_dir):
        path = os.path.join(temp_dir, "nested", "data.json")

        def mutate(data):
            data["count"] = data.get("count", 0) + 1
            return data

        assert update_json(path, mutate)
        assert update_json(path, mutate)
        assert safe_read_json(path) == {"count": 2}

    def test_update_json_reports_corruption(self, temp_dir):
        path = os.path.join(temp_dir, "data.json")
        create_corrupted_json_file(path)

        assert update_json(path, lambda data: data) is False
