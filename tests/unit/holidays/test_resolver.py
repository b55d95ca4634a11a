"""Unit tests for holiday resolution, matching and snapshot ownership."""

import threading
from datetime import date, datetime, timedelta, timezone

import pytest

from simplecal.core.host_calendar import HostCalendar
from simplecal.holidays.categories import HolidayCategoryFilter
from simplecal.holidays.models import (
    HolidayCategory,
    HolidayDefinition,
    HolidayOccurrence,
    HolidaySnapshot,
)
from simplecal.holidays.resolver import (
    HolidayResolver,
    date_in_year,
    holidays_on,
    occurs_on,
    rebuild_snapshot,
)


def _by_name(definitions, name):
    return next(definition for definition in definitions if definition.name == name)


def _names(occurrences):
    return [occurrence.name for occurrence in occurrences]


@pytest.fixture
def snapshot(sample_definitions, utc_calendar):
    """Snapshot of the sample definitions centred on 2025."""
    return rebuild_snapshot(sample_definitions, 2025, utc_calendar)


@pytest.fixture
def resolver(sample_definitions, utc_calendar):
    """Resolver over the sample definitions centred on 2025."""
    return HolidayResolver(sample_definitions, calendar=utc_calendar, reference_year=2025)


class TestDateInYear:
    """Test resolving a definition for a year."""

    def test_recurring_fixed_date(self, sample_definitions, utc_calendar):
        """Test that fixed holidays move to the requested year."""
        christmas = _by_name(sample_definitions, "Christmas Day")
        assert date_in_year(christmas, 2031, utc_calendar) == date(2031, 12, 25)

    def test_recurring_floating_date(self, sample_definitions, utc_calendar):
        """Test that floating holidays use their rule."""
        thanksgiving = _by_name(sample_definitions, "Thanksgiving")
        assert date_in_year(thanksgiving, 2025, utc_calendar) == date(2025, 11, 27)

    def test_non_recurring_ignores_year(self, sample_definitions, utc_calendar):
        """Test that non-recurring holidays return their exact date for any year."""
        launch = _by_name(sample_definitions, "Launch Day")
        assert date_in_year(launch, 1999, utc_calendar) == date(2025, 7, 16)
        assert date_in_year(launch, 2025, utc_calendar) == date(2025, 7, 16)

    def test_unconstructible_date(self, sample_definitions, utc_calendar):
        """Test that Feb 29 does not occur in a common year."""
        leap_day = _by_name(sample_definitions, "Leap Day")
        assert date_in_year(leap_day, 2025, utc_calendar) is None


class TestOccursOn:
    """Test matching occurrences against query dates."""

    def _occurrence(self, occurrence_date, is_recurring=True, is_floating=False):
        return HolidayOccurrence(
            name="Sample",
            occurrence_date=occurrence_date,
            is_recurring=is_recurring,
            is_floating=is_floating,
            category=HolidayCategory.OTHER,
        )

    @pytest.mark.parametrize("year", [1990, 2024, 2025, 2026, 2099])
    def test_recurring_matches_month_and_day_in_any_year(self, utc_calendar, year):
        """Test that recurring matches ignore the year."""
        occurrence = self._occurrence(date(2024, 12, 25))
        assert occurs_on(occurrence, date(year, 12, 25), utc_calendar)
        assert not occurs_on(occurrence, date(year, 12, 24), utc_calendar)
        assert not occurs_on(occurrence, date(year, 11, 25), utc_calendar)

    def test_recurring_ignores_time_of_day(self, utc_calendar):
        """Test datetime queries at any time of the day."""
        occurrence = self._occurrence(date(2024, 7, 4))
        assert occurs_on(occurrence, datetime(2030, 7, 4, 0, 0), utc_calendar)
        assert occurs_on(occurrence, datetime(2030, 7, 4, 23, 59, 59), utc_calendar)

    def test_floating_requires_same_day(self, utc_calendar):
        """Test that a floating occurrence only matches its own resolved day."""
        occurrence = self._occurrence(date(2025, 11, 27), is_floating=True)
        assert occurs_on(occurrence, date(2025, 11, 27), utc_calendar)
        assert occurs_on(occurrence, datetime(2025, 11, 27, 21, 0), utc_calendar)
        assert not occurs_on(occurrence, date(2026, 11, 27), utc_calendar)

    def test_non_recurring_requires_same_day(self, utc_calendar):
        """Test that non-recurring matches need the full date."""
        occurrence = self._occurrence(date(2025, 7, 16), is_recurring=False)
        assert occurs_on(occurrence, date(2025, 7, 16), utc_calendar)
        assert occurs_on(occurrence, datetime(2025, 7, 16, 18, 30), utc_calendar)
        assert not occurs_on(occurrence, date(2026, 7, 16), utc_calendar)

    def test_non_recurring_depends_on_host_timezone(self):
        """Test that the calendar day of an aware query follows the host timezone."""
        occurrence = self._occurrence(date(2025, 7, 16), is_recurring=False)
        query = datetime(2025, 7, 16, 2, 0, tzinfo=timezone.utc)
        assert occurs_on(occurrence, query, HostCalendar(tz=timezone.utc))
        assert not occurs_on(occurrence, query, HostCalendar(tz=timezone(timedelta(hours=-5))))


class TestRebuildSnapshot:
    """Test snapshot expansion."""

    def test_snapshot_covers_three_years(self, snapshot):
        """Test that recurring definitions are expanded for the previous, current and next year."""
        christmas = [o.occurrence_date for o in snapshot.occurrences if o.name == "Christmas Day"]
        assert christmas == [date(2024, 12, 25), date(2025, 12, 25), date(2026, 12, 25)]
        assert snapshot.reference_year == 2025
        assert snapshot.years == (2024, 2025, 2026)

    def test_snapshot_sorted_by_date(self, snapshot):
        """Test date ordering."""
        dates = [occurrence.occurrence_date for occurrence in snapshot.occurrences]
        assert dates == sorted(dates)

    def test_unresolvable_years_are_skipped(self, snapshot):
        """Test that Leap Day only appears in the leap year of the window."""
        leap_days = [o.occurrence_date for o in snapshot.occurrences if o.name == "Leap Day"]
        assert leap_days == [date(2024, 2, 29)]

    def test_non_recurring_kept_once(self, snapshot):
        """Test that a non-recurring holiday appears once."""
        launches = [o for o in snapshot.occurrences if o.name == "Launch Day"]
        assert len(launches) == 1

    def test_snapshot_size(self, snapshot):
        """Test the total number of occurrences for the sample catalog."""
        # 5 definitions x 3 years, Leap Day once, Launch Day once
        assert len(snapshot) == 17

    def test_floating_holiday_dates(self, snapshot):
        """Test Thanksgiving and Black Friday expansions."""
        thanksgiving = [o.occurrence_date for o in snapshot.occurrences if o.name == "Thanksgiving"]
        assert thanksgiving == [date(2024, 11, 28), date(2025, 11, 27), date(2026, 11, 26)]

    def test_failing_definition_does_not_block_others(self, utc_calendar):
        """Test that a definition that never resolves leaves the rest intact."""
        definitions = [
            HolidayDefinition(name="Leap Day", reference_date=date(2024, 2, 29)),
            HolidayDefinition(name="Halloween", reference_date=date(2024, 10, 31)),
        ]
        snapshot = rebuild_snapshot(definitions, 2022, utc_calendar)
        assert _names(snapshot.occurrences) == ["Halloween", "Halloween", "Halloween"]


class TestHolidaysOn:
    """Test holiday lookup with deduplication."""

    def test_fixed_holiday_found_once(self, snapshot, utc_calendar):
        """Test that three matching expansions surface a single occurrence."""
        result = holidays_on(snapshot, date(2025, 12, 25), utc_calendar)
        assert _names(result) == ["Christmas Day"]
        assert result[0].occurrence_date == date(2024, 12, 25)

    def test_floating_holiday(self, snapshot, utc_calendar):
        """Test Thanksgiving on its 2025 date."""
        result = holidays_on(snapshot, date(2025, 11, 27), utc_calendar)
        assert _names(result) == ["Thanksgiving"]
        assert result[0].occurrence_date == date(2025, 11, 27)

    def test_floating_holiday_other_years_do_not_match(self, snapshot, utc_calendar):
        """Test that another year's floating date is not reused for this year."""
        # Thanksgiving 2024 was on Nov 28, Black Friday 2026 is on Nov 27
        assert _names(holidays_on(snapshot, date(2025, 11, 28), utc_calendar)) == ["Black Friday"]
        assert holidays_on(snapshot, date(2025, 11, 26), utc_calendar) == []

    def test_several_holidays_on_one_day(self, default_definitions, utc_calendar):
        """Test that different names on the same day are all returned in catalog order."""
        snapshot = rebuild_snapshot(default_definitions, 2025, utc_calendar)
        names = _names(holidays_on(snapshot, date(2025, 12, 26), utc_calendar))
        assert "Boxing Day" in names
        assert "Kwanzaa" in names
        assert names.index("Boxing Day") < names.index("Kwanzaa")

    def test_no_holiday(self, snapshot, utc_calendar):
        """Test an ordinary day."""
        assert holidays_on(snapshot, date(2025, 3, 12), utc_calendar) == []

    def test_leap_day_graceful_absence(self, snapshot, utc_calendar):
        """Test that Leap Day is absent on Feb 28 of a common year."""
        assert holidays_on(snapshot, date(2025, 2, 28), utc_calendar) == []
        assert _names(holidays_on(snapshot, date(2024, 2, 29), utc_calendar)) == ["Leap Day"]

    def test_non_recurring_only_on_its_date(self, snapshot, utc_calendar):
        """Test a one-off holiday."""
        assert _names(holidays_on(snapshot, date(2025, 7, 16), utc_calendar)) == ["Launch Day"]
        assert holidays_on(snapshot, date(2026, 7, 16), utc_calendar) == []

    def test_empty_snapshot(self, utc_calendar):
        """Test lookup before any snapshot was built."""
        assert holidays_on(HolidaySnapshot.empty(), date(2025, 12, 25), utc_calendar) == []

    def test_names_unique_for_every_day_of_year(self, default_definitions, utc_calendar):
        """Test deduplication across the whole bundled catalog for a full year."""
        snapshot = rebuild_snapshot(default_definitions, 2025, utc_calendar)
        day = date(2025, 1, 1)
        while day.year == 2025:
            names = _names(holidays_on(snapshot, day, utc_calendar))
            assert len(names) == len(set(names)), day
            day += timedelta(days=1)

    def test_recurring_matching_for_every_fixed_definition(self, default_definitions, utc_calendar):
        """Test that each recurring fixed-date holiday is found on its month and day in any year."""
        snapshot = rebuild_snapshot(default_definitions, 2025, utc_calendar)
        for definition in default_definitions:
            if not definition.is_recurring or definition.is_floating:
                continue
            for year in (2020, 2028, 2033):
                query = utc_calendar.date_from_components(year, definition.month, definition.day)
                if query is None:
                    continue
                assert definition.name in _names(holidays_on(snapshot, query, utc_calendar))


class TestHolidayResolver:
    """Test the snapshot-owning resolver."""

    def test_initial_snapshot(self, resolver):
        """Test that the resolver builds a snapshot on construction."""
        assert resolver.snapshot.reference_year == 2025
        assert len(resolver.snapshot) == 17

    def test_defaults_to_current_year(self, sample_definitions, utc_calendar):
        """Test the default reference year."""
        resolver = HolidayResolver(sample_definitions, calendar=utc_calendar)
        assert resolver.snapshot.reference_year == utc_calendar.today().year

    def test_rebuild_replaces_snapshot(self, resolver):
        """Test that a rebuild publishes a new snapshot and leaves the old one intact."""
        old = resolver.snapshot
        new = resolver.rebuild(2030)

        assert resolver.snapshot is new
        assert new is not old
        assert old.reference_year == 2025
        assert len(old) == 17
        assert new.years == (2029, 2030, 2031)

    def test_refresh_if_needed(self, resolver):
        """Test rebuilding on year rollover only."""
        assert resolver.refresh_if_needed(today=date(2025, 6, 1)) is False
        assert resolver.snapshot.reference_year == 2025

        assert resolver.refresh_if_needed(today=date(2026, 1, 1)) is True
        assert resolver.snapshot.reference_year == 2026

    def test_set_definitions(self, resolver):
        """Test replacing definitions keeps the reference year."""
        resolver.set_definitions(
            [HolidayDefinition(name="Halloween", reference_date=date(2024, 10, 31))]
        )
        assert resolver.snapshot.reference_year == 2025
        assert _names(resolver.holidays_on(date(2025, 10, 31))) == ["Halloween"]
        assert resolver.holidays_on(date(2025, 12, 25)) == []

    def test_holidays_on_respects_categories(self, resolver):
        """Test category filtering of lookups."""
        assert _names(resolver.holidays_on(date(2025, 12, 25))) == ["Christmas Day"]
        resolver.category_filter.disable(HolidayCategory.RELIGIOUS)
        assert resolver.holidays_on(date(2025, 12, 25)) == []

    def test_holidays_in_month(self, resolver):
        """Test listing one month of one year."""
        november = resolver.holidays_in_month(11, 2025)
        assert [(o.name, o.occurrence_date) for o in november] == [
            ("Thanksgiving", date(2025, 11, 27)),
            ("Black Friday", date(2025, 11, 28)),
        ]

    def test_non_recurring_listed_once_in_month(self, resolver):
        """Test that a one-off holiday is not repeated in month listings."""
        july = resolver.holidays_in_month(7, 2025)
        assert [(o.name, o.occurrence_date) for o in july] == [("Launch Day", date(2025, 7, 16))]

    def test_holidays_for_year(self, resolver):
        """Test listing a whole year."""
        names_2024 = _names(resolver.holidays_for_year(2024))
        assert "Leap Day" in names_2024
        assert "Launch Day" not in names_2024
        assert "Leap Day" not in _names(resolver.holidays_for_year(2025))

    def test_holidays_by_category(self, resolver):
        """Test grouping by category."""
        grouped = resolver.holidays_by_category()
        assert len(grouped[HolidayCategory.RELIGIOUS]) == 6
        assert {o.name for o in grouped[HolidayCategory.NATIONAL]} == {
            "New Year's Day",
            "Thanksgiving",
        }
        assert HolidayCategory.EDUCATIONAL not in grouped

    def test_upcoming_holidays(self, resolver):
        """Test the next holidays from a given day."""
        upcoming = resolver.upcoming_holidays(today=date(2025, 11, 1), limit=3)
        assert [(o.name, o.occurrence_date) for o in upcoming] == [
            ("Thanksgiving", date(2025, 11, 27)),
            ("Black Friday", date(2025, 11, 28)),
            ("Christmas Day", date(2025, 12, 25)),
        ]

    def test_upcoming_holidays_limit(self, resolver):
        """Test limits of zero and negative values."""
        assert resolver.upcoming_holidays(today=date(2025, 1, 1), limit=0) == []
        assert resolver.upcoming_holidays(today=date(2025, 1, 1), limit=-5) == []

    def test_upcoming_holidays_skip_disabled(self, sample_definitions, utc_calendar):
        """Test that disabled categories are not listed."""
        resolver = HolidayResolver(
            sample_definitions,
            calendar=utc_calendar,
            reference_year=2025,
            category_filter=HolidayCategoryFilter([HolidayCategory.NATIONAL]),
        )
        upcoming = resolver.upcoming_holidays(today=date(2025, 11, 1), limit=2)
        assert [(o.name, o.occurrence_date) for o in upcoming] == [
            ("Thanksgiving", date(2025, 11, 27)),
            ("New Year's Day", date(2026, 1, 1)),
        ]

    def test_readers_see_whole_snapshots(self, resolver):
        """Test that concurrent readers never observe a partially built snapshot."""
        sizes = set()
        errors = []

        def reader():
            try:
                for _ in range(200):
                    snapshot = resolver.snapshot
                    sizes.add((snapshot.reference_year, len(snapshot)))
                    resolver.holidays_on(date(2025, 12, 25))
            except Exception as e:  # pragma: no cover
                errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for year in (2024, 2025, 2026, 2027):
            resolver.rebuild(year)
        for thread in threads:
            thread.join()

        assert errors == []
        # Leap Day is in the window for 2023-2025 and 2027-2029 only
        expected = {
            (2024, 17),
            (2025, 17),
            (2026, 16),
            (2027, 17),
        }
        assert sizes <= expected
