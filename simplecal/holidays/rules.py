"""Date algorithms for recurring holiday rules."""

import logging
from datetime import date
from typing import Optional

from dateutil.easter import EASTER_WESTERN, easter

from ..core.host_calendar import HostCalendar, default_calendar
from .models import (
    EasterRule,
    FixedDateRule,
    HolidayDefinition,
    LastWeekdayRule,
    NthWeekdayRule,
    RecurrenceRule,
)

logger = logging.getLogger(__name__)


def nth_weekday_of_month(
    year: int,
    month: int,
    weekday: int,
    n: int,
    calendar: Optional[HostCalendar] = None,
) -> Optional[date]:
    """Find the nth occurrence of a weekday in a month.

    The first occurrence is ``(weekday - weekday_of_first + 7) % 7`` days after
    the 1st; the nth is ``(n - 1)`` weeks after that.

    Args:
        year: Calendar year
        month: Month (1-12)
        weekday: Target weekday (Monday=0 .. Sunday=6)
        n: Occurrence number, starting at 1
        calendar: Host calendar used for date arithmetic

    Returns:
        The date, or None if the month has no nth such weekday
    """
    cal = calendar or default_calendar()
    first_of_month = cal.date_from_components(year, month, 1)
    if first_of_month is None or n < 1:
        return None

    offset = (weekday - cal.components(first_of_month).weekday + 7) % 7
    first_occurrence = cal.add(first_of_month, days=offset)
    if first_occurrence is None:
        return None

    nth_occurrence = cal.add(first_occurrence, days=(n - 1) * 7)
    if nth_occurrence is None or nth_occurrence.month != month:
        return None
    return nth_occurrence


def last_weekday_of_month(
    year: int, month: int, weekday: int, calendar: Optional[HostCalendar] = None
) -> Optional[date]:
    """Find the last occurrence of a weekday in a month (e.g. Memorial Day)."""
    cal = calendar or default_calendar()
    first_of_month = cal.date_from_components(year, month, 1)
    if first_of_month is None:
        return None

    end_of_month = cal.add(first_of_month, months=1, days=-1)
    if end_of_month is None:
        return None

    offset = (cal.components(end_of_month).weekday - weekday + 7) % 7
    return cal.add(end_of_month, days=-offset)


def easter_sunday(year: int) -> Optional[date]:
    """Western (Gregorian) Easter Sunday for a year."""
    try:
        return easter(year, EASTER_WESTERN)
    except ValueError:
        logger.debug("Easter is not defined for year %s", year)
        return None


def resolve_rule(
    rule: RecurrenceRule,
    definition: HolidayDefinition,
    year: int,
    calendar: Optional[HostCalendar] = None,
) -> Optional[date]:
    """Compute the date a recurrence rule produces in a given year.

    Args:
        rule: Recurrence rule to evaluate
        definition: Definition owning the rule (supplies month/day for fixed rules)
        year: Target year
        calendar: Host calendar used for date arithmetic

    Returns:
        The date, or None if the holiday does not occur that year
    """
    cal = calendar or default_calendar()

    base: Optional[date]
    if isinstance(rule, FixedDateRule):
        base = cal.date_from_components(year, definition.month, definition.day)
    elif isinstance(rule, NthWeekdayRule):
        base = nth_weekday_of_month(year, rule.month, rule.weekday, rule.n, cal)
    elif isinstance(rule, LastWeekdayRule):
        base = last_weekday_of_month(year, rule.month, rule.weekday, cal)
    elif isinstance(rule, EasterRule):
        base = easter_sunday(year)
    else:
        raise TypeError(f"Unsupported recurrence rule: {rule!r}")

    if base is None or rule.offset_days == 0:
        return base
    return cal.add(base, days=rule.offset_days)
