"""Calendar module for syncing tasks into the device calendar."""

from .gateway import CalendarGateway, EventKitCalendarGateway
from .permissions import PermissionGate
from .recurrence import build_recurrence
from .timing import TimeResolver, OCCURRENCE_DURATION
from .notes import compose_notes
from .events import EventOrchestrator
from .removal import BatchRemover, RemovalReport
from .opener import EventOpener, build_deep_link
from .calendars import list_writable_calendars
from .service import CalendarSyncService

__all__ = [
    'CalendarGateway',
    'EventKitCalendarGateway',
    'PermissionGate',
    'build_recurrence',
    'TimeResolver',
    'OCCURRENCE_DURATION',
    'compose_notes',
    'EventOrchestrator',
    'BatchRemover',
    'RemovalReport',
    'EventOpener',
    'build_deep_link',
    'list_writable_calendars',
    'CalendarSyncService',
]
