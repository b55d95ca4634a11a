"""Host calendar capabilities used by the navigation and holiday components."""

from .host_calendar import DateComponents, HostCalendar, default_calendar

__all__ = ["DateComponents", "HostCalendar", "default_calendar"]
