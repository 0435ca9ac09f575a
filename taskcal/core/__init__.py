"""
Core module for taskcal - contains domain models, configuration, and exceptions.
"""

from .models import (
    Task,
    Dosage,
    MedicationDetails,
    ObservationToolDetails,
    GenericDetails,
    CalendarTarget,
    LinkedEvents,
    RecurrenceSpec,
    RecurrenceRule,
    RecurrenceFrequency,
    EventWindow,
    EventDetails,
    Alarm,
    CalendarEvent,
    CalendarInfo,
    DevicePlatform,
    PermissionStatus,
    PermissionState,
)

from .exceptions import (
    TaskCalError,
    ConfigurationError,
    CalendarError,
    PermissionDeniedError,
    BindingUnavailableError,
    InvalidOccurrenceTimeError,
    CalendarWriteError,
    EventNotFoundError,
    DeepLinkError,
)

__all__ = [
    # Models
    'Task',
    'Dosage',
    'MedicationDetails',
    'ObservationToolDetails',
    'GenericDetails',
    'CalendarTarget',
    'LinkedEvents',
    'RecurrenceSpec',
    'RecurrenceRule',
    'RecurrenceFrequency',
    'EventWindow',
    'EventDetails',
    'Alarm',
    'CalendarEvent',
    'CalendarInfo',
    'DevicePlatform',
    'PermissionStatus',
    'PermissionState',
    # Exceptions
    'TaskCalError',
    'ConfigurationError',
    'CalendarError',
    'PermissionDeniedError',
    'BindingUnavailableError',
    'InvalidOccurrenceTimeError',
    'CalendarWriteError',
    'EventNotFoundError',
    'DeepLinkError',
]
