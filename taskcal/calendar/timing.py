"""Resolve start and end instants for task and dosage occurrences."""

from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple, Union
import logging

from ..core.exceptions import InvalidOccurrenceTimeError
from ..core.models import Dosage, EventWindow, Task
from ..utils.date import combine_local, parse_clock_time, parse_date, parse_timestamp

# Fixed length of every occurrence
OCCURRENCE_DURATION = timedelta(minutes=30)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class TimeResolver:
    """Computes occurrence windows with deterministic fallbacks.

    Whole tasks fall back from ``dueAt`` to ``date`` + ``time`` to ``date`` at
    the default start time to now. Dosages never fall back: an unreadable
    dosage time means the dosage is skipped.
    """

    def __init__(self, default_start: Tuple[int, int] = (9, 0),
                 clock: Optional[Callable[[], datetime]] = None,
                 logger: Optional[logging.Logger] = None):
        self.default_start = default_start
        self.clock = clock or _local_now
        self.logger = logger or logging.getLogger(__name__)

    def now(self) -> datetime:
        current = self.clock()
        if current.tzinfo is None:
            current = current.astimezone()
        return current

    def task_start(self, task: Task) -> datetime:
        """Start instant of a whole-task occurrence.

        Raises:
            InvalidOccurrenceTimeError: if ``dueAt``, ``date`` or ``time`` is unreadable
        """
        if task.due_at:
            due = parse_timestamp(task.due_at)
            if due is None:
                raise InvalidOccurrenceTimeError(f"Unreadable due time {task.due_at!r}")
            return due

        if not task.date:
            return self.now()

        day = parse_date(task.date)
        if day is None:
            raise InvalidOccurrenceTimeError(f"Unreadable task date {task.date!r}")

        if not task.time:
            return combine_local(day, *self.default_start)

        clock_time = parse_clock_time(task.time)
        if clock_time is None:
            raise InvalidOccurrenceTimeError(f"Unreadable task time {task.time!r}")
        return combine_local(day, *clock_time)

    def base_date(self, task: Task) -> date:
        """Calendar day that dosage times are anchored to."""
        day = parse_date(task.date) if task.date else None
        if day is not None:
            return day

        due = parse_timestamp(task.due_at) if task.due_at else None
        if due is not None:
            return due.astimezone(self.now().tzinfo).date()

        return self.now().date()

    def dosage_start(self, dosage: Dosage, base_date: date) -> Optional[datetime]:
        """Start instant of one dosage, or None when its time cannot be read."""
        clock_time = parse_clock_time(dosage.time)
        if clock_time is None:
            self.logger.warning(
                f"Skipping dosage '{dosage.label}' ({dosage.id}): invalid time {dosage.time!r}"
            )
            return None
        return combine_local(base_date, *clock_time)

    def resolve_window(self, subject: Union[Task, Dosage],
                       base_date: Optional[date] = None) -> Optional[EventWindow]:
        """
        Compute the window of a task or dosage occurrence.

        Args:
            subject: Task for a whole-task occurrence, Dosage for a dose
            base_date: Day a dosage falls on (defaults to today)

        Returns:
            EventWindow, or None for a dosage whose time is unreadable
        """
        if isinstance(subject, Dosage):
            start = self.dosage_start(subject, base_date or self.now().date())
            if start is None:
                return None
        else:
            start = self.task_start(subject)

        return EventWindow(start=start, end=start + OCCURRENCE_DURATION)
