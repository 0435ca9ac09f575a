"""
Centralized path management for taskcal.

Resolves the per-user working directory that holds the configuration file
and the default task file.
"""

import os
import sys
from pathlib import Path
from typing import Optional
import logging


class PathManager:
    """Manages taskcal file paths."""

    # Directory names
    APP_DIR_NAME = "taskcal"
    HOME_ENV_VAR = "TASKCAL_HOME"

    # File names
    CONFIG_FILE = "config.json"
    TASKS_FILE = "tasks.json"

    def __init__(self, logger: Optional[logging.Logger] = None):
        """Initialize path manager."""
        self.logger = logger or logging.getLogger(__name__)
        self._working_dir: Optional[Path] = None

    def _default_user_dir(self) -> Path:
        """Platform-appropriate per-user data directory."""
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / self.APP_DIR_NAME
        if sys.platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / self.APP_DIR_NAME
            return Path.home() / "AppData" / "Roaming" / self.APP_DIR_NAME
        return Path.home() / ".config" / self.APP_DIR_NAME

    @property
    def working_dir(self) -> Path:
        """
        Get the working directory for taskcal data.

        Priority order:
        1. TASKCAL_HOME environment variable (explicit override)
        2. Platform user data directory
        """
        if self._working_dir is not None:
            return self._working_dir

        env_override = os.environ.get(self.HOME_ENV_VAR)
        if env_override:
            env_path = Path(env_override).expanduser().resolve()
            self.logger.debug(f"Using {self.HOME_ENV_VAR} override: {env_path}")
            self._working_dir = env_path
        else:
            self._working_dir = self._default_user_dir()

        return self._working_dir

    def ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in (self.working_dir, self.data_dir):
            directory.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Ensured directory exists: {directory}")

    @property
    def data_dir(self) -> Path:
        """Get the data directory for task files."""
        return self.working_dir / "data"

    @property
    def config_path(self) -> Path:
        """Get the configuration file path."""
        return self.working_dir / self.CONFIG_FILE

    @property
    def tasks_path(self) -> Path:
        """Get the default task file path."""
        return self.data_dir / self.TASKS_FILE


# Global instance for convenience
_path_manager = None


def get_path_manager() -> PathManager:
    """Get or create the global PathManager instance."""
    global _path_manager
    if _path_manager is None:
        _path_manager = PathManager()
    return _path_manager


def reset_path_manager() -> None:
    """Drop the cached PathManager so environment overrides are re-read."""
    global _path_manager
    _path_manager = None
