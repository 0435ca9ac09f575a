#!/usr/bin/env python3
"""
Global pytest configuration and fixtures.

This module provides:
- Platform-specific test skipping (macOS/EventKit tests)
- An isolated taskcal home directory per test
- Fake calendar collaborators shared by the engine tests
"""

import json
import os
import platform
import shutil
import sys
import tempfile
from datetime import datetime
from typing import Any, Dict, Generator, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taskcal.core.config import CalendarSyncConfig
from taskcal.core.models import DevicePlatform
from taskcal.core.paths import reset_path_manager
from tests.fake_calendar_gateway import FakeCalendarGateway, FakeLinkOpener, RecordingAlerter

HAS_EVENTKIT = False

try:
    if platform.system() == "Darwin":
        import objc
        import EventKit
        HAS_EVENTKIT = True
except ImportError:
    pass


def pytest_configure(config):
    """Configure pytest environment."""
    config.addinivalue_line("markers", "macos: test requires macOS")
    config.addinivalue_line("markers", "eventkit: test requires EventKit framework")


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to skip platform-specific tests.

    Automatically skip macOS/EventKit tests on non-Darwin platforms.
    """
    skip_macos = pytest.mark.skip(reason="macOS/EventKit tests require Darwin platform")
    skip_eventkit = pytest.mark.skip(reason="Test requires EventKit framework")

    for item in items:
        if "macos" in item.keywords and platform.system() != "Darwin":
            item.add_marker(skip_macos)

        if "eventkit" in item.keywords and not HAS_EVENTKIT:
            item.add_marker(skip_eventkit)


# Common test fixtures

@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = tempfile.mkdtemp(prefix="taskcal_test_")
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_home(temp_dir: str, monkeypatch) -> Generator[str, None, None]:
    """Point TASKCAL_HOME at a scratch directory for every test."""
    home = os.path.join(temp_dir, "home")
    monkeypatch.setenv("TASKCAL_HOME", home)
    reset_path_manager()
    yield home
    reset_path_manager()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed local 'now' used as the clock in engine tests."""
    return datetime(2025, 3, 10, 8, 30).astimezone()


@pytest.fixture
def clock(fixed_now: datetime):
    return lambda: fixed_now


@pytest.fixture
def gateway() -> FakeCalendarGateway:
    return FakeCalendarGateway()


@pytest.fixture
def alerter() -> RecordingAlerter:
    return RecordingAlerter()


@pytest.fixture
def link_opener() -> FakeLinkOpener:
    return FakeLinkOpener()


@pytest.fixture
def config(temp_dir: str) -> CalendarSyncConfig:
    return CalendarSyncConfig(
        platform=DevicePlatform.MACOS,
        tasks_path=os.path.join(temp_dir, "tasks.json"),
    )


@pytest.fixture
def sample_tasks() -> List[Dict[str, Any]]:
    """Task payloads in the camelCase wire form."""
    return [
        {
            "id": "task-walk",
            "title": "Morning walk",
            "date": "2025-03-12",
            "time": "07:15",
            "frequency": "daily",
            "syncWithCalendar": True,
            "calendarProvider": "loading",
            "details": {"taskType": "hygiene", "description": "Short walk"},
        },
        {
            "id": "task-meds",
            "title": "Give meds",
            "date": "2025-03-12",
            "frequency": "daily",
            "syncWithCalendar": True,
            "calendarProvider": "cal-home",
            "reminderEnabled": True,
            "details": {
                "taskType": "give-medication",
                "medicineName": "Amoxicillin",
                "medicineType": "Tablet",
                "endDate": "2025-03-20",
                "dosages": [
                    {"id": "d1", "label": "Morning", "time": "08:00"},
                    {"id": "d2", "label": "Evening", "time": "20:00"},
                ],
            },
        },
        {
            "id": "task-old",
            "title": "Old appointment",
            "date": "2025-03-01",
            "syncWithCalendar": False,
            "calendarEventId": "evt-old-1,evt-old-2",
        },
    ]


@pytest.fixture
def tasks_file(config: CalendarSyncConfig, sample_tasks) -> str:
    """Write the sample tasks to the configured task file."""
    with open(config.tasks_path, "w", encoding="utf-8") as handle:
        json.dump({"tasks": sample_tasks}, handle, indent=2)
    return config.tasks_path


# Helper functions for tests

def create_corrupted_json_file(file_path: str) -> None:
    """Create a corrupted JSON file for testing error handling."""
    with open(file_path, 'w') as f:
        f.write('{"incomplete": "json file without closing brace"')
