"""
Exception classes for taskcal.
"""


class TaskCalError(Exception):
    """Base exception for all taskcal errors."""
    pass


class ConfigurationError(TaskCalError):
    """Raised when configuration is invalid or missing."""
    pass


class CalendarError(TaskCalError):
    """Base exception for host calendar errors."""
    pass


class PermissionDeniedError(CalendarError):
    """Raised when calendar access is denied or restricted."""
    pass


class BindingUnavailableError(CalendarError):
    """Raised when the host calendar binding (EventKit/PyObjC) is missing."""
    pass


class InvalidOccurrenceTimeError(CalendarError):
    """Raised when an occurrence time cannot be parsed."""
    pass


class CalendarWriteError(CalendarError):
    """Raised when the host calendar rejects a save or delete."""
    pass


class EventNotFoundError(CalendarError):
    """Raised when an event identifier does not resolve to an event."""
    pass


class DeepLinkError(CalendarError):
    """Raised when a calendar deep link cannot be built or opened."""
    pass
