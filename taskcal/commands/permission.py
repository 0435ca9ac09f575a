"""Permission command - check or request calendar access."""

from typing import Optional
import logging

from ..calendar.service import CalendarSyncService
from ..core.config import CalendarSyncConfig


class PermissionCommand:
    """Command for checking calendar authorization."""

    def __init__(self, config: CalendarSyncConfig, verbose: bool = False,
                 service: Optional[CalendarSyncService] = None):
        self.config = config
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)
        if verbose:
            self.logger.setLevel(logging.DEBUG)
        self.service = service or CalendarSyncService(config)

    def run(self) -> bool:
        """Run the permission command."""
        if self.service.ensure_permission():
            print("✅ Calendar access granted.")
            return True

        print("❌ Calendar access not granted.")
        return False
