"""
Domain models for taskcal.

This module contains the data structures shared by the calendar engine:
the task payload consumed from the task store, the derived recurrence and
timing values, and the host calendar records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union
import platform


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among camelCase/snake_case aliases."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(value: Any) -> bool:
    """Read a boolean that may arrive as a JSON bool, a number or a string."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class PermissionStatus(Enum):
    """Calendar authorization status reported by the host."""

    AUTHORIZED = "authorized"
    DENIED = "denied"
    RESTRICTED = "restricted"
    UNDETERMINED = "undetermined"

    @classmethod
    def from_value(cls, raw: Any) -> PermissionStatus:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.UNDETERMINED


class PermissionState(Enum):
    """Lifecycle of a permission check."""

    UNCHECKED = "unchecked"
    CHECKING = "checking"
    AUTHORIZED = "authorized"
    DENIED = "denied"


class DevicePlatform(Enum):
    """Target platform for deep links and calendar filtering."""

    IOS = "ios"
    MACOS = "macos"
    ANDROID = "android"

    @property
    def is_apple(self) -> bool:
        return self in (DevicePlatform.IOS, DevicePlatform.MACOS)

    @classmethod
    def current(cls) -> DevicePlatform:
        if "android" in platform.platform().lower():
            return cls.ANDROID
        # Apple unless running on Android
        return cls.MACOS

    @classmethod
    def from_value(cls, raw: Optional[str]) -> DevicePlatform:
        if not raw:
            return cls.current()
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.current()


class RecurrenceFrequency(Enum):
    """Simple recurrence vocabulary understood by host calendars."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TargetKind(Enum):
    """Variants of the task's calendar provider field."""

    EXPLICIT = "explicit"
    UNRESOLVED = "unresolved"
    UNLINKED = "unlinked"


@dataclass(frozen=True)
class CalendarTarget:
    """Where new events for a task should be written.

    ``calendarProvider`` either holds a real host calendar identifier or a
    placeholder meaning the choice is still loading or that an external
    account is not linked. Only an explicit target is forwarded to the host.
    """

    kind: TargetKind
    value: Optional[str] = None

    @classmethod
    def explicit(cls, calendar_id: str) -> CalendarTarget:
        return cls(TargetKind.EXPLICIT, calendar_id)

    @classmethod
    def unresolved(cls) -> CalendarTarget:
        return cls(TargetKind.UNRESOLVED)

    @classmethod
    def unlinked(cls, account: Optional[str] = None) -> CalendarTarget:
        return cls(TargetKind.UNLINKED, account)

    @classmethod
    def from_provider(cls, provider: Optional[str],
                      sentinels: Optional[Dict[str, str]] = None) -> CalendarTarget:
        """Classify a raw ``calendarProvider`` value.

        Args:
            provider: Raw field value from the task
            sentinels: Map of lower-cased placeholder to ``unresolved``/``unlinked``
        """
        text = _optional_text(provider)
        if text is None:
            return cls.unresolved()

        kind = (sentinels or DEFAULT_PLACEHOLDER_SENTINELS).get(text.lower())
        if kind == TargetKind.UNLINKED.value:
            return cls.unlinked(text.lower())
        if kind == TargetKind.UNRESOLVED.value:
            return cls.unresolved()
        return cls.explicit(text)

    @property
    def calendar_id(self) -> Optional[str]:
        return self.value if self.kind is TargetKind.EXPLICIT else None


DEFAULT_PLACEHOLDER_SENTINELS: Dict[str, str] = {
    "loading": TargetKind.UNRESOLVED.value,
    "google": TargetKind.UNLINKED.value,
    "icloud": TargetKind.UNLINKED.value,
}


class LinkedEvents:
    """Ordered host event IDs linked to one task.

    The task store persists these as a single comma-joined string; that form
    is only produced and consumed at the edges via ``parse``/``to_field``.
    """

    SEPARATOR = ","

    def __init__(self, event_ids: Iterable[str] = ()):
        self._ids: Tuple[str, ...] = tuple(
            str(event_id).strip() for event_id in event_ids
            if event_id is not None and str(event_id).strip()
        )

    @classmethod
    def parse(cls, field_value: Union[str, LinkedEvents, None]) -> LinkedEvents:
        if isinstance(field_value, LinkedEvents):
            return field_value
        if not field_value:
            return cls()
        return cls(str(field_value).split(cls.SEPARATOR))

    def to_field(self) -> Optional[str]:
        if not self._ids:
            return None
        return self.SEPARATOR.join(self._ids)

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    @property
    def first(self) -> Optional[str]:
        return self._ids[0] if self._ids else None

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LinkedEvents):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self) -> str:
        return f"LinkedEvents({list(self._ids)!r})"


@dataclass
class Dosage:
    """One scheduled dose of a medication task."""

    id: str
    label: str
    time: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Dosage:
        return cls(
            id=str(data.get("id", "")),
            label=str(data.get("label") or "Dose"),
            time=str(data.get("time") or ""),
        )


@dataclass
class MedicationDetails:
    """Details of a give-medication task."""

    medicine_name: str
    medicine_type: Optional[str] = None
    dosages: List[Dosage] = field(default_factory=list)
    frequency: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    task_type: str = "give-medication"


@dataclass
class ObservationToolDetails:
    """Details of a take-observational-tool task."""

    tool_type: str
    chronic_condition_type: Optional[str] = None
    task_type: str = "take-observational-tool"


@dataclass
class GenericDetails:
    """Details of hygiene, dietary and custom tasks."""

    task_type: Optional[str] = None
    description: Optional[str] = None


TaskDetails = Union[MedicationDetails, ObservationToolDetails, GenericDetails]


def parse_details(data: Optional[Dict[str, Any]]) -> TaskDetails:
    """Select the details variant for a raw task ``details`` payload."""
    if not data:
        return GenericDetails()

    task_type = data.get("taskType") or data.get("task_type")

    if task_type == "give-medication" or "medicineName" in data or "medicine_name" in data:
        return MedicationDetails(
            medicine_name=str(_first(data, "medicineName", "medicine_name", default="")),
            medicine_type=_optional_text(_first(data, "medicineType", "medicine_type")),
            dosages=[Dosage.from_dict(d) for d in data.get("dosages") or [] if isinstance(d, dict)],
            frequency=_optional_text(data.get("frequency")),
            start_date=_optional_text(_first(data, "startDate", "start_date")),
            end_date=_optional_text(_first(data, "endDate", "end_date")),
        )

    if task_type == "take-observational-tool" or "toolType" in data or "tool_type" in data:
        return ObservationToolDetails(
            tool_type=str(_first(data, "toolType", "tool_type", default="")),
            chronic_condition_type=_optional_text(
                _first(data, "chronicConditionType", "chronic_condition_type")
            ),
        )

    return GenericDetails(
        task_type=_optional_text(task_type),
        description=_optional_text(data.get("description")),
    )


@dataclass
class Task:
    """A task as delivered by the task store (read-only to the engine)."""

    id: str
    title: str
    date: Optional[str] = None
    time: Optional[str] = None
    due_at: Optional[str] = None
    frequency: Optional[str] = None
    description: Optional[str] = None
    additional_note: Optional[str] = None
    companion_id: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    reminder_enabled: bool = False
    reminder_offset_minutes: Optional[int] = None
    reminder_options: Optional[str] = None
    sync_with_calendar: bool = False
    calendar_provider: Optional[str] = None
    calendar_event_id: Optional[str] = None
    details: TaskDetails = field(default_factory=GenericDetails)

    @property
    def reminders_enabled(self) -> bool:
        return bool(self.reminder_enabled or self.reminder_options)

    @property
    def medication(self) -> Optional[MedicationDetails]:
        if isinstance(self.details, MedicationDetails):
            return self.details
        return None

    @property
    def linked_events(self) -> LinkedEvents:
        return LinkedEvents.parse(self.calendar_event_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Task:
        offset = _first(data, "reminderOffsetMinutes", "reminder_offset_minutes")
        try:
            offset = int(offset) if offset is not None else None
        except (TypeError, ValueError):
            offset = None

        return cls(
            id=str(_first(data, "id", "_id", default="")),
            title=str(_first(data, "title", "name", default="")),
            date=_optional_text(data.get("date")),
            time=_optional_text(data.get("time")),
            due_at=_optional_text(_first(data, "dueAt", "due_at")),
            frequency=_optional_text(data.get("frequency")),
            description=_optional_text(data.get("description")),
            additional_note=_optional_text(_first(data, "additionalNote", "additional_note")),
            companion_id=_optional_text(_first(data, "companionId", "companion_id")),
            category=_optional_text(data.get("category")),
            status=_optional_text(data.get("status")),
            reminder_enabled=_flag(_first(data, "reminderEnabled", "reminder_enabled", default=False)),
            reminder_offset_minutes=offset,
            reminder_options=_optional_text(_first(data, "reminderOptions", "reminder_options")),
            sync_with_calendar=_flag(_first(data, "syncWithCalendar", "sync_with_calendar", default=False)),
            calendar_provider=_optional_text(_first(data, "calendarProvider", "calendar_provider")),
            calendar_event_id=_optional_text(_first(data, "calendarEventId", "calendar_event_id")),
            details=parse_details(data.get("details")),
        )


@dataclass(frozen=True)
class RecurrenceRule:
    """Richer recurrence description with an explicit end date."""

    frequency: RecurrenceFrequency
    interval: int = 1
    end_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frequency": self.frequency.value,
            "interval": self.interval,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


@dataclass(frozen=True)
class RecurrenceSpec:
    """Recurrence hints handed to the host calendar.

    ``recurrence`` is the primary signal. ``rule`` is a supplementary hint and
    is never set without ``recurrence``.
    """

    recurrence: Optional[RecurrenceFrequency] = None
    rule: Optional[RecurrenceRule] = None

    def __post_init__(self) -> None:
        if self.rule is not None and self.recurrence is None:
            raise ValueError("A recurrence rule requires a simple recurrence tag")

    @property
    def is_empty(self) -> bool:
        return self.recurrence is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.recurrence is not None:
            result["recurrence"] = self.recurrence.value
        if self.rule is not None:
            result["recurrenceRule"] = self.rule.to_dict()
        return result


@dataclass(frozen=True)
class EventWindow:
    """Start and end instants of one occurrence."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class Alarm:
    """Alarm relative to the event start, in minutes (negative = before)."""

    offset_minutes: int


@dataclass
class EventDetails:
    """Payload of a host calendar write."""

    start_date: datetime
    end_date: datetime
    notes: str
    all_day: bool = False
    alarms: Optional[List[Alarm]] = None
    recurrence: Optional[RecurrenceFrequency] = None
    recurrence_rule: Optional[RecurrenceRule] = None
    calendar_id: Optional[str] = None


@dataclass
class OccurrencePlan:
    """One host write the orchestrator intends to issue."""

    title: str
    details: EventDetails
    dosage_label: Optional[str] = None


@dataclass
class CalendarEvent:
    """Calendar event data."""
    event_id: str
    title: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    location: Optional[str]
    notes: Optional[str]
    is_all_day: bool
    calendar_name: str


@dataclass
class CalendarInfo:
    """A host calendar that events can be written to."""

    identifier: str
    title: str
    source: Optional[str] = None
    allows_modifications: bool = True
