"""Map task frequencies to host calendar recurrence hints."""

import logging
from typing import Dict, Optional

from ..core.models import RecurrenceFrequency, RecurrenceRule, RecurrenceSpec, Task
from ..utils.date import parse_date

logger = logging.getLogger(__name__)

_FREQUENCY_TAGS: Dict[str, RecurrenceFrequency] = {
    "daily": RecurrenceFrequency.DAILY,
    "every-day": RecurrenceFrequency.DAILY,
    "weekly": RecurrenceFrequency.WEEKLY,
    "monthly": RecurrenceFrequency.MONTHLY,
}


def normalize_frequency(tag: Optional[str]) -> Optional[RecurrenceFrequency]:
    """Return the recurrence frequency for a task tag, or None for one-off tasks."""
    if not tag:
        return None
    return _FREQUENCY_TAGS.get(str(tag).strip().lower())


def build_recurrence(task: Task) -> RecurrenceSpec:
    """
    Describe a task's repetition in host calendar terms.

    The simple tag is always the primary hint. When a medication task has an
    end date, a rule ``{frequency, interval: 1, endDate}`` is attached too;
    hosts differ in which of the two they read.

    Args:
        task: Task to describe

    Returns:
        RecurrenceSpec, empty when the task does not repeat
    """
    frequency = normalize_frequency(task.frequency)
    if frequency is None:
        logger.debug(f"No recurrence for task {task.id} (frequency={task.frequency!r})")
        return RecurrenceSpec()

    end_date = None
    medication = task.medication
    if medication is not None and medication.end_date:
        end_date = parse_date(medication.end_date)
        if end_date is None:
            logger.warning(
                f"Ignoring unreadable end date {medication.end_date!r} on task {task.id}"
            )

    logger.debug(
        f"Recurrence for task {task.id}: frequency={frequency.value}, end_date={end_date}"
    )

    if end_date is None:
        return RecurrenceSpec(recurrence=frequency)

    return RecurrenceSpec(
        recurrence=frequency,
        rule=RecurrenceRule(frequency=frequency, interval=1, end_date=end_date),
    )
