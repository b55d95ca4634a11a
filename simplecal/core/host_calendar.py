"""Gregorian host calendar abstraction.

Wraps ``datetime`` and ``dateutil.relativedelta`` behind the four operations the
navigation engine and holiday resolver rely on: building a date from
components, decomposing a date, adding signed calendar offsets and testing
same-day equality. Every operation that can fail returns ``None`` instead of
raising.
"""

import logging
from datetime import date, datetime, tzinfo
from typing import NamedTuple, Optional, Union

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class DateComponents(NamedTuple):
    """Calendar components of a single day (weekday: Monday=0 .. Sunday=6)."""

    year: int
    month: int
    day: int
    weekday: int


class HostCalendar:
    """Calendar arithmetic in the host timezone."""

    def __init__(self, tz: Optional[tzinfo] = None, first_weekday: int = 0) -> None:
        """Initialize host calendar.

        Args:
            tz: Timezone used to turn aware datetimes into calendar days.
                ``None`` uses the system local timezone.
            first_weekday: First day of the week (Monday=0 .. Sunday=6)
        """
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be in 0..6, got {first_weekday}")
        self.tz = tz
        self.first_weekday = first_weekday

    def to_local_date(self, value: DateLike) -> date:
        """Return the calendar day of ``value`` in the host timezone."""
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                return value.astimezone(self.tz).date()
            return value.date()
        return value

    def today(self) -> date:
        """Get today's date in the host timezone."""
        return datetime.now(self.tz).date()

    def date_from_components(self, year: int, month: int, day: int) -> Optional[date]:
        """Build a date, or return None if the components are not a valid day."""
        try:
            return date(year, month, day)
        except (ValueError, OverflowError, TypeError):
            logger.debug("Invalid date components: %s-%s-%s", year, month, day)
            return None

    def components(self, value: DateLike) -> DateComponents:
        """Decompose a date into year, month, day and weekday."""
        day = self.to_local_date(value)
        return DateComponents(day.year, day.month, day.day, day.weekday())

    def add(
        self,
        value: DateLike,
        *,
        days: int = 0,
        weeks: int = 0,
        months: int = 0,
        years: int = 0,
    ) -> Optional[date]:
        """Add signed calendar offsets to a date.

        Month and year offsets keep the day of month, clamped to the last day of
        the target month. Day and week offsets are exact calendar days.

        Returns:
            The resulting date, or None if it falls outside the supported range
        """
        start = self.to_local_date(value)
        try:
            return start + relativedelta(years=years, months=months, weeks=weeks, days=days)
        except (ValueError, OverflowError):
            logger.debug(
                "Date arithmetic failed: %s + %dy %dm %dw %dd",
                start,
                years,
                months,
                weeks,
                days,
            )
            return None

    def is_same_day(self, first: DateLike, second: DateLike) -> bool:
        """Check whether two values fall on the same calendar day."""
        return self.to_local_date(first) == self.to_local_date(second)

    def start_of_week(self, value: DateLike) -> Optional[date]:
        """Get the first day of the week containing ``value``."""
        day = self.to_local_date(value)
        offset = (day.weekday() - self.first_weekday) % 7
        return self.add(day, days=-offset)

    def end_of_week(self, value: DateLike) -> Optional[date]:
        """Get the last day of the week containing ``value``."""
        start = self.start_of_week(value)
        if start is None:
            return None
        return self.add(start, days=6)

    def days_between(self, start: DateLike, end: DateLike) -> int:
        """Number of calendar days from ``start`` to ``end`` (negative if end is earlier)."""
        return (self.to_local_date(end) - self.to_local_date(start)).days

    def __repr__(self) -> str:
        return f"HostCalendar(tz={self.tz!r}, first_weekday={self.first_weekday})"


_default_calendar = HostCalendar()


def default_calendar() -> HostCalendar:
    """Get the shared default host calendar (local timezone, Monday first)."""
    return _default_calendar
