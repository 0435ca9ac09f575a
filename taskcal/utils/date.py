"""
Date, time and timestamp parsing utilities.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Tuple, Union


def local_timezone():
    """Return the system local timezone."""
    return datetime.now().astimezone().tzinfo


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a date string into a date object.

    Handles various formats:
    - ISO format (YYYY-MM-DD)
    - ISO datetime (YYYY-MM-DDTHH:MM:SS), only the date part is kept

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date object or None if invalid
    """
    if not date_str:
        return None

    # Take only date part if it's a datetime string
    if 'T' in date_str:
        date_str = date_str.split('T')[0]

    # Remove timezone if present
    date_str = date_str.split('+')[0].split('Z')[0].strip()

    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except ValueError:
        pass

    try:
        # Try with single digit month/day
        parts = date_str.split('-')
        if len(parts) == 3:
            year = int(parts[0])
            month = int(parts[1])
            day = int(parts[2])
            return date(year, month, day)
    except (ValueError, IndexError):
        pass

    return None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into a timezone-aware datetime.

    A trailing ``Z`` is accepted as UTC. Naive timestamps are interpreted
    in the local timezone.

    Returns:
        Aware datetime or None if the value is empty or unreadable
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=local_timezone())
    return parsed


def parse_clock_time(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Read an hour/minute pair from a clock time or an embedded timestamp.

    Accepts:
    - bare clock times: ``HH:mm`` or ``HH:mm:ss``
    - full timestamps containing ``T``; the local wall-clock time is used

    Returns:
        (hours, minutes) or None when the value is not a usable time
    """
    if not value:
        return None

    text = str(value).strip()

    if 'T' in text:
        parsed = parse_timestamp(text)
        if parsed is None:
            return None
        local = parsed.astimezone(local_timezone())
        return local.hour, local.minute

    if ':' not in text:
        return None

    parts = text.split(':')
    if len(parts) not in (2, 3):
        return None

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        if len(parts) == 3:
            float(parts[2])
    except ValueError:
        return None

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None

    return hours, minutes


def combine_local(day: date, hours: int, minutes: int) -> datetime:
    """Build an aware local datetime for a date and wall-clock time."""
    naive = datetime.combine(day, time(hour=hours, minute=minutes))
    return naive.astimezone()


def coerce_datetime(value: Union[datetime, date, str, None],
                    default_time: Tuple[int, int] = (9, 0)) -> Optional[datetime]:
    """
    Normalize a datetime, date or ISO string into an aware datetime.

    Date-only values resolve to ``default_time`` on that day.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.astimezone()
        return value

    if isinstance(value, date):
        return combine_local(value, *default_time)

    text = str(value).strip()
    if not text:
        return None

    if 'T' in text or ' ' in text:
        return parse_timestamp(text)

    day = parse_date(text)
    if day is None:
        return None
    return combine_local(day, *default_time)


def to_utc_iso(value: datetime) -> str:
    """Format an aware datetime as an ISO string in UTC."""
    return value.astimezone(timezone.utc).isoformat()
