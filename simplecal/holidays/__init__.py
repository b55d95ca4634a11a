"""Holiday definitions, recurrence rules and snapshot resolution."""

from .catalog import DEFAULT_CATALOG_PATH, load_holiday_definitions, parse_holiday_definitions
from .categories import HolidayCategoryFilter
from .models import (
    EasterRule,
    FixedDateRule,
    HolidayCategory,
    HolidayDefinition,
    HolidayOccurrence,
    HolidaySnapshot,
    LastWeekdayRule,
    NthWeekdayRule,
    Weekday,
)
from .resolver import HolidayResolver, date_in_year, holidays_on, occurs_on, rebuild_snapshot
from .rules import easter_sunday, last_weekday_of_month, nth_weekday_of_month, resolve_rule

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "EasterRule",
    "FixedDateRule",
    "HolidayCategory",
    "HolidayCategoryFilter",
    "HolidayDefinition",
    "HolidayOccurrence",
    "HolidayResolver",
    "HolidaySnapshot",
    "LastWeekdayRule",
    "NthWeekdayRule",
    "Weekday",
    "date_in_year",
    "easter_sunday",
    "holidays_on",
    "last_weekday_of_month",
    "load_holiday_definitions",
    "nth_weekday_of_month",
    "occurs_on",
    "parse_holiday_definitions",
    "rebuild_snapshot",
    "resolve_rule",
]
