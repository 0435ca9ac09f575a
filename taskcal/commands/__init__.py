"""
Command implementations for taskcal.
"""

from .sync import SyncCommand
from .unsync import UnsyncCommand
from .open import OpenCommand
from .calendars import CalendarsCommand
from .permission import PermissionCommand

__all__ = [
    'SyncCommand',
    'UnsyncCommand',
    'OpenCommand',
    'CalendarsCommand',
    'PermissionCommand',
]
