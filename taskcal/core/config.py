"""
Configuration management for taskcal.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.date import parse_clock_time
from ..utils.io import safe_read_json, safe_write_json
from .exceptions import ConfigurationError
from .models import DEFAULT_PLACEHOLDER_SENTINELS, DevicePlatform, TargetKind
from .paths import get_path_manager

logger = logging.getLogger(__name__)


@dataclass
class CalendarSyncConfig:
    """Settings for calendar sync operations."""

    platform: DevicePlatform = field(default_factory=DevicePlatform.current)
    default_title: str = "Task"
    attribution: str = "Created with taskcal"
    default_reminder_minutes: int = 15
    default_start_time: str = "09:00"
    placeholder_sentinels: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PLACEHOLDER_SENTINELS)
    )
    alert_on_partial_failure: bool = True
    tasks_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tasks_path is None:
            self.tasks_path = str(get_path_manager().tasks_path)
        else:
            self.tasks_path = os.path.abspath(os.path.expanduser(self.tasks_path))

        self.placeholder_sentinels = {
            str(key).strip().lower(): str(value).strip().lower()
            for key, value in self.placeholder_sentinels.items()
        }
        allowed = {TargetKind.UNRESOLVED.value, TargetKind.UNLINKED.value}
        for key, value in self.placeholder_sentinels.items():
            if value not in allowed:
                raise ConfigurationError(
                    f"Placeholder '{key}' maps to '{value}'; expected one of {sorted(allowed)}"
                )

        if parse_clock_time(self.default_start_time) is None:
            raise ConfigurationError(
                f"default_start_time '{self.default_start_time}' is not an HH:mm time"
            )

        self.default_reminder_minutes = abs(int(self.default_reminder_minutes))

    @property
    def start_time(self) -> tuple:
        """Default (hours, minutes) used when a task has a date but no time."""
        return parse_clock_time(self.default_start_time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform.value,
            "default_title": self.default_title,
            "attribution": self.attribution,
            "reminders": {
                "default_minutes": self.default_reminder_minutes,
            },
            "default_start_time": self.default_start_time,
            "placeholder_sentinels": dict(self.placeholder_sentinels),
            "alert_on_partial_failure": self.alert_on_partial_failure,
            "paths": {
                "tasks": self.tasks_path,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CalendarSyncConfig:
        reminders = data.get("reminders", {})
        paths = data.get("paths", {})
        sentinels = data.get("placeholder_sentinels")

        kwargs: Dict[str, Any] = {
            "platform": DevicePlatform.from_value(data.get("platform")),
            "default_title": data.get("default_title", "Task"),
            "attribution": data.get("attribution", "Created with taskcal"),
            "default_reminder_minutes": reminders.get(
                "default_minutes", data.get("default_reminder_minutes", 15)
            ),
            "default_start_time": data.get("default_start_time", "09:00"),
            "alert_on_partial_failure": data.get("alert_on_partial_failure", True),
            "tasks_path": paths.get("tasks"),
        }
        if isinstance(sentinels, dict):
            kwargs["placeholder_sentinels"] = sentinels
        return cls(**kwargs)

    @classmethod
    def load_from_file(cls, config_path: str) -> CalendarSyncConfig:
        data = safe_read_json(config_path, default={})
        if not data:
            return cls()
        try:
            return cls.from_dict(data)
        except (ConfigurationError, TypeError, ValueError) as exc:
            logger.warning(f"Ignoring invalid configuration in {config_path}: {exc}")
            return cls()

    def save_to_file(self, config_path: str) -> bool:
        return safe_write_json(config_path, self.to_dict())


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return get_path_manager().config_path


def load_config(config_path: Optional[str] = None) -> CalendarSyncConfig:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        CalendarSyncConfig object
    """
    if config_path is None:
        config_path = str(get_default_config_path())

    return CalendarSyncConfig.load_from_file(os.path.expanduser(config_path))


def save_config(config: CalendarSyncConfig, config_path: Optional[str] = None) -> bool:
    """
    Save configuration to file.

    Args:
        config: CalendarSyncConfig object to save
        config_path: Optional path to save to. Uses default if not provided.
    """
    if config_path is None:
        manager = get_path_manager()
        manager.ensure_directories()
        config_path = str(manager.config_path)

    return config.save_to_file(os.path.expanduser(config_path))
