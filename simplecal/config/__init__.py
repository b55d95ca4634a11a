"""Configuration management for simplecal."""

from .settings import (
    HolidaySettings,
    LoggingSettings,
    NavigationSettings,
    SimpleCalSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "HolidaySettings",
    "LoggingSettings",
    "NavigationSettings",
    "SimpleCalSettings",
    "get_settings",
    "reset_settings",
]
