"""
Utility functions for taskcal.
"""

from .io import safe_read_json, safe_write_json, update_json
from .date import (
    parse_date, parse_timestamp, parse_clock_time,
    combine_local, coerce_datetime, local_timezone
)
from .prompts import is_interactive, Alerter, ConsoleAlerter
from .macos import set_process_name, LinkOpener, WorkspaceLinkOpener, default_link_opener

__all__ = [
    # I/O utilities
    'safe_read_json',
    'safe_write_json',
    'update_json',
    # Date utilities
    'parse_date',
    'parse_timestamp',
    'parse_clock_time',
    'combine_local',
    'coerce_datetime',
    'local_timezone',
    # Prompt utilities
    'is_interactive',
    'Alerter',
    'ConsoleAlerter',
    # macOS helpers
    'set_process_name',
    'LinkOpener',
    'WorkspaceLinkOpener',
    'default_link_opener',
]
