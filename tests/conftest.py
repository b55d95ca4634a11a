"""Shared test fixtures for simplecal."""

import os
from datetime import date, timezone

import pytest

from simplecal.config.settings import reset_settings
from simplecal.core.host_calendar import HostCalendar
from simplecal.holidays.catalog import load_holiday_definitions
from simplecal.holidays.models import (
    EasterRule,
    FixedDateRule,
    HolidayCategory,
    HolidayDefinition,
    NthWeekdayRule,
    Weekday,
)
from simplecal.ui.navigation import NavigationState, ViewMode


@pytest.fixture
def utc_calendar() -> HostCalendar:
    """Host calendar pinned to UTC so tests do not depend on the machine timezone."""
    return HostCalendar(tz=timezone.utc)


@pytest.fixture
def navigation_factory(utc_calendar):
    """Factory for navigation states with anchor and selection on the same day."""

    def _make(
        anchor: date = date(2025, 12, 8),
        view_mode: ViewMode = ViewMode.THREE_DAYS,
        selected: object = "anchor",
    ) -> NavigationState:
        selected_date = anchor if selected == "anchor" else selected
        return NavigationState(
            current_anchor=anchor,
            selected_date=selected_date,
            view_mode=view_mode,
            calendar=utc_calendar,
        )

    return _make


@pytest.fixture
def sample_definitions() -> list:
    """Small catalog covering each recurrence kind."""
    return [
        HolidayDefinition(
            name="Christmas Day",
            reference_date=date(2024, 12, 25),
            category=HolidayCategory.RELIGIOUS,
            emoji="🎄",
        ),
        HolidayDefinition(
            name="New Year's Day",
            reference_date=date(2024, 1, 1),
            category=HolidayCategory.NATIONAL,
        ),
        HolidayDefinition(
            name="Thanksgiving",
            reference_date=date(2024, 11, 28),
            category=HolidayCategory.NATIONAL,
            rule=NthWeekdayRule(month=11, weekday=Weekday.THURSDAY, n=4),
        ),
        HolidayDefinition(
            name="Black Friday",
            reference_date=date(2024, 11, 29),
            category=HolidayCategory.CULTURAL,
            rule=NthWeekdayRule(month=11, weekday=Weekday.THURSDAY, n=4, offset_days=1),
        ),
        HolidayDefinition(
            name="Good Friday",
            reference_date=date(2024, 3, 29),
            category=HolidayCategory.RELIGIOUS,
            rule=EasterRule(offset_days=-2),
        ),
        HolidayDefinition(
            name="Leap Day",
            reference_date=date(2024, 2, 29),
            category=HolidayCategory.OTHER,
            rule=FixedDateRule(),
        ),
        HolidayDefinition(
            name="Launch Day",
            reference_date=date(2025, 7, 16),
            is_recurring=False,
            category=HolidayCategory.OTHER,
        ),
    ]


@pytest.fixture(scope="session")
def default_definitions() -> list:
    """Definitions from the catalog bundled with the package."""
    return load_holiday_definitions()


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Isolate settings from the environment, user config and the global instance."""
    for key in list(os.environ):
        if key.upper().startswith("SIMPLECAL_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()
