"""
Infrastructure layer - Configuration.

Contains:
- Settings
"""

from .settings import (
    Settings,
    RedisSettings,
    LoggingSettings,
    MachineSettings,
    get_settings,
    reset_settings,
)


__all__ = [
    "Settings",
    "RedisSettings",
    "LoggingSettings",
    "MachineSettings",
    "get_settings",
    "reset_settings",
]
