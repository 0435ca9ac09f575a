"""
Tests for domain models (taskcal/core/models.py).

Covers the linked-event field, calendar target classification and task
payload parsing.
"""

import pytest

from taskcal.core.models import (
    CalendarTarget,
    DevicePlatform,
    GenericDetails,
    LinkedEvents,
    MedicationDetails,
    ObservationToolDetails,
    PermissionStatus,
    RecurrenceFrequency,
    RecurrenceRule,
    RecurrenceSpec,
    TargetKind,
    Task,
)


class TestLinkedEvents:
    """Linked-event field parsing and serialization."""

    def test_parse_splits_and_trims(self):
        linked = LinkedEvents.parse(" a , b,,c ")
        assert linked.ids == ["a", "b", "c"]
        assert linked.first == "a"
        assert len(linked) == 3

    def test_parse_empty_values(self):
        for value in (None, "", " , ,"):
            linked = LinkedEvents.parse(value)
            assert not linked
            assert linked.to_field() is None
            assert linked.first is None

    def test_to_field_joins_in_order(self):
        assert LinkedEvents(["x1", "x2"]).to_field() == "x1,x2"

    def test_parse_accepts_linked_events(self):
        linked = LinkedEvents(["a"])
        assert LinkedEvents.parse(linked) is linked

    def test_equality(self):
        assert LinkedEvents.parse("a,b") == LinkedEvents(["a", "b"])
        assert LinkedEvents.parse("a,b") != LinkedEvents(["b", "a"])


class TestCalendarTarget:
    """calendarProvider classification."""

    def test_missing_provider_is_unresolved(self):
        assert CalendarTarget.from_provider(None).kind is TargetKind.UNRESOLVED
        assert CalendarTarget.from_provider("   ").kind is TargetKind.UNRESOLVED

    @pytest.mark.parametrize("value", ["google", "GOOGLE", "iCloud"])
    def test_account_placeholders_are_unlinked(self, value):
        target = CalendarTarget.from_provider(value)
        assert target.kind is TargetKind.UNLINKED
        assert target.calendar_id is None

    def test_loading_is_unresolved(self):
        target = CalendarTarget.from_provider("Loading")
        assert target.kind is TargetKind.UNRESOLVED
        assert target.calendar_id is None

    def test_real_identifier_is_explicit(self):
        target = CalendarTarget.from_provider(" cal-123 ")
        assert target.kind is TargetKind.EXPLICIT
        assert target.calendar_id == "cal-123"

    def test_custom_sentinels(self):
        sentinels = {"outlook": "unlinked"}
        assert CalendarTarget.from_provider("Outlook", sentinels).kind is TargetKind.UNLINKED
        assert CalendarTarget.from_provider("google", sentinels).kind is TargetKind.EXPLICIT


class TestTaskFromDict:
    """Task payload parsing."""

    def test_camel_case_payload(self):
        task = Task.from_dict({
            "id": "t1",
            "title": "Walk",
            "dueAt": "2025-03-12T07:00:00Z",
            "reminderOffsetMinutes": "30",
            "syncWithCalendar": True,
            "calendarProvider": "cal-1",
            "calendarEventId": "e1,e2",
            "additionalNote": "Bring water",
        })
        assert task.due_at == "2025-03-12T07:00:00Z"
        assert task.reminder_offset_minutes == 30
        assert task.sync_with_calendar is True
        assert task.linked_events.ids == ["e1", "e2"]
        assert task.additional_note == "Bring water"
        assert isinstance(task.details, GenericDetails)

    def test_snake_case_aliases(self):
        task = Task.from_dict({"id": "t2", "title": "X", "due_at": "2025-01-01", "sync_with_calendar": 1})
        assert task.due_at == "2025-01-01"
        assert task.sync_with_calendar is True

    @pytest.mark.parametrize("raw,expected", [
        ("false", False),
        ("False", False),
        ("0", False),
        ("", False),
        ("true", True),
        (" TRUE ", True),
        ("yes", True),
        (0, False),
        (True, True),
    ])
    def test_string_flags(self, raw, expected):
        task = Task.from_dict({"id": "t", "title": "X", "syncWithCalendar": raw, "reminderEnabled": raw})
        assert task.sync_with_calendar is expected
        assert task.reminder_enabled is expected

    def test_invalid_offset_is_ignored(self):
        task = Task.from_dict({"id": "t3", "title": "X", "reminderOffsetMinutes": "soon"})
        assert task.reminder_offset_minutes is None

    def test_reminder_options_enable_reminders(self):
        task = Task.from_dict({"id": "t4", "title": "X", "reminderOptions": "15-min-prior"})
        assert task.reminders_enabled is True

    def test_medication_details(self):
        task = Task.from_dict({
            "id": "t5",
            "title": "Meds",
            "details": {
                "taskType": "give-medication",
                "medicineName": "Drug",
                "dosages": [{"id": "d1", "label": "AM", "time": "08:00"}, "junk"],
                "endDate": "2025-04-01",
            },
        })
        assert isinstance(task.details, MedicationDetails)
        assert task.medication.medicine_name == "Drug"
        assert [d.label for d in task.medication.dosages] == ["AM"]
        assert task.medication.end_date == "2025-04-01"

    def test_observation_details_by_key(self):
        task = Task.from_dict({"id": "t6", "title": "Obs", "details": {"toolType": "Pain scale"}})
        assert isinstance(task.details, ObservationToolDetails)
        assert task.medication is None


class TestRecurrenceSpec:
    """Recurrence value invariants."""

    def test_rule_requires_simple_tag(self):
        rule = RecurrenceRule(frequency=RecurrenceFrequency.DAILY)
        with pytest.raises(ValueError):
            RecurrenceSpec(recurrence=None, rule=rule)

    def test_to_dict(self):
        from datetime import date

        spec = RecurrenceSpec(
            recurrence=RecurrenceFrequency.WEEKLY,
            rule=RecurrenceRule(RecurrenceFrequency.WEEKLY, 1, date(2025, 5, 1)),
        )
        assert spec.to_dict() == {
            "recurrence": "weekly",
            "recurrenceRule": {"frequency": "weekly", "interval": 1, "endDate": "2025-05-01"},
        }
        assert RecurrenceSpec().is_empty


class TestEnums:
    def test_permission_status_from_value(self):
        assert PermissionStatus.from_value("AUTHORIZED") is PermissionStatus.AUTHORIZED
        assert PermissionStatus.from_value("weird") is PermissionStatus.UNDETERMINED

    def test_platform_from_value(self):
        assert DevicePlatform.from_value("android") is DevicePlatform.ANDROID
        assert DevicePlatform.IOS.is_apple
        assert not DevicePlatform.ANDROID.is_apple
