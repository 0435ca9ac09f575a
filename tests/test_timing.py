"""
Tests for occurrence timing (taskcal/calendar/timing.py).
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from taskcal.calendar.timing import OCCURRENCE_DURATION, TimeResolver
from taskcal.core.exceptions import InvalidOccurrenceTimeError
from taskcal.core.models import Dosage, Task


def _task(**fields):
    data = {"id": "t", "title": "T"}
    data.update(fields)
    return Task.from_dict(data)


@pytest.fixture
def resolver(clock):
    return TimeResolver(clock=clock)


class TestTaskWindow:

    def test_due_at_wins(self, resolver):
        window = resolver.resolve_window(_task(dueAt="2025-03-12T07:00:00Z", date="2025-01-01", time="10:00"))
        assert window.start == datetime(2025, 3, 12, 7, 0, tzinfo=timezone.utc)
        assert window.end - window.start == OCCURRENCE_DURATION

    def test_date_and_time(self, resolver):
        window = resolver.resolve_window(_task(date="2025-03-12", time="14:45"))
        assert window.start.date() == date(2025, 3, 12)
        assert (window.start.hour, window.start.minute) == (14, 45)
        assert window.start.tzinfo is not None

    def test_date_without_time_uses_default_start(self, resolver):
        window = resolver.resolve_window(_task(date="2025-03-12"))
        assert (window.start.hour, window.start.minute) == (9, 0)

    def test_custom_default_start(self, clock):
        resolver = TimeResolver(default_start=(7, 30), clock=clock)
        window = resolver.resolve_window(_task(date="2025-03-12"))
        assert (window.start.hour, window.start.minute) == (7, 30)

    def test_no_date_uses_now(self, resolver, fixed_now):
        window = resolver.resolve_window(_task())
        assert window.start == fixed_now
        assert window.end == fixed_now + timedelta(minutes=30)

    @pytest.mark.parametrize("fields", [
        {"dueAt": "not a time"},
        {"date": "12/03/2025"},
        {"date": "2025-03-12", "time": "25:00"},
        {"date": "2025-03-12", "time": "noon"},
    ])
    def test_unreadable_values_raise(self, resolver, fields):
        with pytest.raises(InvalidOccurrenceTimeError):
            resolver.resolve_window(_task(**fields))


class TestDosageWindow:

    def test_dosage_on_base_date(self, resolver):
        window = resolver.resolve_window(Dosage("d1", "Morning", "08:00"), date(2025, 3, 12))
        assert window.start.date() == date(2025, 3, 12)
        assert (window.start.hour, window.start.minute) == (8, 0)
        assert window.end - window.start == OCCURRENCE_DURATION

    def test_dosage_with_seconds(self, resolver):
        window = resolver.resolve_window(Dosage("d1", "Morning", "08:05:00"), date(2025, 3, 12))
        assert (window.start.hour, window.start.minute) == (8, 5)

    def test_dosage_defaults_to_today(self, resolver, fixed_now):
        window = resolver.resolve_window(Dosage("d1", "Noon", "12:00"))
        assert window.start.date() == fixed_now.date()

    @pytest.mark.parametrize("value", ["", "abc", "24:00", "7", "12:60"])
    def test_invalid_dosage_time_is_skipped(self, resolver, value):
        assert resolver.resolve_window(Dosage("d1", "Bad", value), date(2025, 3, 12)) is None


class TestBaseDate:

    def test_prefers_task_date(self, resolver):
        assert resolver.base_date(_task(date="2025-03-12", dueAt="2025-04-01T10:00:00Z")) == date(2025, 3, 12)

    def test_falls_back_to_today(self, resolver, fixed_now):
        assert resolver.base_date(_task()) == fixed_now.date()
