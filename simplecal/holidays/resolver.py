"""Holiday resolution: yearly expansion, date matching and snapshot ownership.

The resolver expands holiday definitions into concrete occurrences for the
previous, current and next year, and answers "which holidays fall on this
day" against the resulting snapshot. Snapshots are immutable and replaced
wholesale; readers always see either the old or the new one.
"""

import logging
import threading
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.host_calendar import DateLike, HostCalendar, default_calendar
from .categories import HolidayCategoryFilter
from .models import HolidayCategory, HolidayDefinition, HolidayOccurrence, HolidaySnapshot
from .rules import resolve_rule

logger = logging.getLogger(__name__)


def date_in_year(
    definition: HolidayDefinition, year: int, calendar: Optional[HostCalendar] = None
) -> Optional[date]:
    """Get the date of a holiday in a given year.

    Non-recurring definitions always return their exact date, whatever the
    year. Recurring definitions are resolved through their recurrence rule.

    Returns:
        The date, or None if the holiday does not occur that year
    """
    if not definition.is_recurring:
        return definition.reference_date
    return resolve_rule(definition.rule, definition, year, calendar)


def occurs_on(
    occurrence: HolidayOccurrence, query_date: DateLike, calendar: Optional[HostCalendar] = None
) -> bool:
    """Check whether an occurrence falls on a query date.

    Recurring fixed-date occurrences match on month and day only, ignoring the
    year and time of day. Floating occurrences (whose month and day change
    from year to year) and non-recurring occurrences must fall on the same
    calendar day, which depends on the host timezone for aware datetimes.
    """
    cal = calendar or default_calendar()
    if occurrence.is_recurring and not occurrence.is_floating:
        query = cal.components(query_date)
        return (occurrence.occurrence_date.month, occurrence.occurrence_date.day) == (
            query.month,
            query.day,
        )
    return cal.is_same_day(occurrence.occurrence_date, query_date)


def holidays_on(
    snapshot: HolidaySnapshot, query_date: DateLike, calendar: Optional[HostCalendar] = None
) -> List[HolidayOccurrence]:
    """Get the holidays occurring on a date, at most one per name.

    The snapshot holds up to three yearly expansions of each recurring holiday,
    so several of them may match; only the earliest-dated one is kept.
    """
    seen = set()
    result = []
    for occurrence in snapshot.occurrences:
        if occurrence.name in seen or not occurs_on(occurrence, query_date, calendar):
            continue
        seen.add(occurrence.name)
        result.append(occurrence)
    return result


def rebuild_snapshot(
    definitions: Iterable[HolidayDefinition],
    reference_year: int,
    calendar: Optional[HostCalendar] = None,
) -> HolidaySnapshot:
    """Expand definitions for ``reference_year`` and its neighbouring years.

    A definition that cannot be resolved for a year is simply left out for
    that year. Every other success is collected, except that a date already
    produced by the same definition is not added again: non-recurring
    definitions resolve to the same date for every year and are kept once, so
    month, year and upcoming listings do not repeat them.
    """
    occurrences = []
    skipped = 0
    for definition in definitions:
        resolved_dates = set()
        for year in (reference_year - 1, reference_year, reference_year + 1):
            resolved = date_in_year(definition, year, calendar)
            if resolved is None:
                skipped += 1
                continue
            if resolved in resolved_dates:
                continue
            resolved_dates.add(resolved)
            occurrences.append(HolidayOccurrence.materialize(definition, resolved))

    occurrences.sort(key=lambda occurrence: occurrence.occurrence_date)

    if skipped:
        logger.debug("%d holiday/year combinations did not resolve", skipped)
    return HolidaySnapshot(reference_year=reference_year, occurrences=tuple(occurrences))


class HolidayResolver:
    """Owns the current holiday snapshot and answers holiday queries.

    Writers rebuild a fresh snapshot and publish it with a single reference
    assignment; readers never lock and never observe a partial snapshot.
    """

    def __init__(
        self,
        definitions: Sequence[HolidayDefinition],
        calendar: Optional[HostCalendar] = None,
        reference_year: Optional[int] = None,
        category_filter: Optional[HolidayCategoryFilter] = None,
    ):
        """Initialize resolver and build the first snapshot.

        Args:
            definitions: Holiday definitions to expand
            calendar: Host calendar used for all date arithmetic
            reference_year: Year the snapshot is centred on, defaults to the current year
            category_filter: Enabled categories, defaults to all
        """
        self._calendar = calendar or default_calendar()
        self._definitions = tuple(definitions)
        self.category_filter = category_filter or HolidayCategoryFilter()
        self._write_lock = threading.Lock()
        self._snapshot = HolidaySnapshot.empty()
        self.rebuild(reference_year)

    @property
    def snapshot(self) -> HolidaySnapshot:
        """Get the current snapshot."""
        return self._snapshot

    @property
    def definitions(self) -> tuple:
        return self._definitions

    def rebuild(self, reference_year: Optional[int] = None) -> HolidaySnapshot:
        """Rebuild and publish a new snapshot.

        Args:
            reference_year: Year to centre on, defaults to the current year

        Returns:
            The newly published snapshot
        """
        year = reference_year if reference_year is not None else self._calendar.today().year
        with self._write_lock:
            snapshot = rebuild_snapshot(self._definitions, year, self._calendar)
            self._snapshot = snapshot

        logger.info(
            "Holiday snapshot rebuilt for %d-%d: %d occurrences from %d definitions",
            year - 1,
            year + 1,
            len(snapshot.occurrences),
            len(self._definitions),
        )
        return snapshot

    def refresh_if_needed(self, today: Optional[date] = None) -> bool:
        """Rebuild the snapshot when the current year has changed.

        Args:
            today: Override for today's date

        Returns:
            True if a new snapshot was published
        """
        current_year = (today or self._calendar.today()).year
        if self._snapshot.reference_year == current_year:
            return False
        logger.debug(
            "Reference year changed from %s to %s", self._snapshot.reference_year, current_year
        )
        self.rebuild(current_year)
        return True

    def set_definitions(self, definitions: Sequence[HolidayDefinition]) -> HolidaySnapshot:
        """Replace the holiday definitions and rebuild for the same reference year."""
        self._definitions = tuple(definitions)
        return self.rebuild(self._snapshot.reference_year)

    def holidays_on(self, query_date: DateLike) -> List[HolidayOccurrence]:
        """Get enabled holidays occurring on a date, at most one per name."""
        matches = holidays_on(self._snapshot, query_date, self._calendar)
        return self.category_filter.apply(matches)

    def holidays_in_month(self, month: int, year: int) -> List[HolidayOccurrence]:
        """Get enabled occurrences dated within a specific month and year."""
        return self.category_filter.apply(
            occurrence
            for occurrence in self._snapshot.occurrences
            if occurrence.occurrence_date.month == month and occurrence.occurrence_date.year == year
        )

    def holidays_for_year(self, year: int) -> List[HolidayOccurrence]:
        """Get enabled occurrences dated within a specific year."""
        return self.category_filter.apply(
            occurrence
            for occurrence in self._snapshot.occurrences
            if occurrence.occurrence_date.year == year
        )

    def holidays_by_category(self) -> Dict[HolidayCategory, List[HolidayOccurrence]]:
        """Group enabled occurrences of the snapshot by category."""
        grouped: Dict[HolidayCategory, List[HolidayOccurrence]] = defaultdict(list)
        for occurrence in self.category_filter.apply(self._snapshot.occurrences):
            grouped[occurrence.category].append(occurrence)
        return dict(grouped)

    def upcoming_holidays(
        self, today: Optional[date] = None, limit: int = 10
    ) -> List[HolidayOccurrence]:
        """Get the next enabled occurrences on or after today, in date order.

        Args:
            today: Override for today's date
            limit: Maximum number of occurrences to return
        """
        start = self._calendar.to_local_date(today or self._calendar.today())
        upcoming = self.category_filter.apply(
            occurrence
            for occurrence in self._snapshot.occurrences
            if occurrence.occurrence_date >= start
        )
        return upcoming[: max(limit, 0)]
