"""Calendar session: one navigation state plus a holiday resolver, built from settings."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .config.settings import SimpleCalSettings, get_settings
from .core.host_calendar import HostCalendar
from .holidays.catalog import load_holiday_definitions
from .holidays.categories import HolidayCategoryFilter
from .holidays.models import HolidayOccurrence
from .holidays.resolver import HolidayResolver
from .ui.actions import NavigationActionHandler
from .ui.navigation import NavigationState

logger = logging.getLogger(__name__)


class CalendarSession:
    """A single calendar view session.

    Each session owns its navigation state. The holiday resolver may be shared
    between sessions since its snapshot is immutable and swapped atomically.
    """

    def __init__(
        self,
        navigation_state: NavigationState,
        resolver: HolidayResolver,
        upcoming_limit: int = 10,
    ):
        self.navigation_state = navigation_state
        self.resolver = resolver
        self.actions = NavigationActionHandler(navigation_state)
        self.upcoming_limit = upcoming_limit

    @classmethod
    def from_settings(
        cls,
        settings: Optional[SimpleCalSettings] = None,
        resolver: Optional[HolidayResolver] = None,
    ) -> "CalendarSession":
        """Build a session from application settings.

        Args:
            settings: Application settings, defaults to the global settings
            resolver: Existing resolver to share, a new one is built if omitted

        Returns:
            New calendar session

        Raises:
            HolidayCatalogError: If a new resolver is needed and the catalog cannot be loaded
        """
        settings = settings or get_settings()

        calendar = HostCalendar(
            tz=settings.get_timezone(),
            first_weekday=settings.navigation.first_weekday,
        )

        if resolver is None:
            definitions = load_holiday_definitions(settings.holidays.catalog_path)
            resolver = HolidayResolver(
                definitions,
                calendar=calendar,
                category_filter=HolidayCategoryFilter(settings.holidays.enabled_categories),
            )

        navigation_state = NavigationState(
            view_mode=settings.navigation.default_view_mode,
            calendar=calendar,
        )

        logger.info(
            "Calendar session created: mode=%s, %d holiday definitions",
            navigation_state.view_mode.value,
            len(resolver.definitions),
        )
        return cls(navigation_state, resolver, upcoming_limit=settings.holidays.upcoming_limit)

    @property
    def calendar(self) -> HostCalendar:
        return self.navigation_state.calendar

    def handle_action(self, action: str) -> bool:
        """Dispatch a navigation action, refreshing holidays if the year rolled over."""
        self.resolver.refresh_if_needed()
        return self.actions.handle_action(action)

    def holidays_on(self, query_date: date) -> List[HolidayOccurrence]:
        return self.resolver.holidays_on(query_date)

    def visible_holidays(self) -> Dict[date, List[HolidayOccurrence]]:
        """Get the holidays of every visible day that has at least one."""
        start, end = self.navigation_state.visible_range()
        result: Dict[date, List[HolidayOccurrence]] = {}
        day: Optional[date] = start
        while day is not None and day <= end:
            matches = self.resolver.holidays_on(day)
            if matches:
                result[day] = matches
            day = self.calendar.add(day, days=1)
        return result

    def upcoming_holidays(self, today: Optional[date] = None) -> List[HolidayOccurrence]:
        return self.resolver.upcoming_holidays(today=today, limit=self.upcoming_limit)

    def get_state(self) -> Dict[str, Any]:
        """Get navigation info plus the holidays on the selected (or anchor) day."""
        info = self.actions.get_navigation_info()
        focus = self.navigation_state.selected_date or self.navigation_state.current_anchor
        info["holidays"] = [
            {
                "name": occurrence.name,
                "date": occurrence.occurrence_date.isoformat(),
                "category": occurrence.category.value,
                "emoji": occurrence.emoji,
            }
            for occurrence in self.resolver.holidays_on(focus)
        ]
        return info
