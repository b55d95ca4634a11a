"""Enabled/disabled state for holiday categories."""

import logging
from typing import Iterable, List, Optional

from .models import HolidayCategory, HolidayOccurrence

logger = logging.getLogger(__name__)


class HolidayCategoryFilter:
    """Tracks which holiday categories are shown."""

    def __init__(self, enabled: Optional[Iterable[HolidayCategory]] = None) -> None:
        """Initialize category filter.

        Args:
            enabled: Categories to enable, defaults to every category
        """
        if enabled is None:
            self._enabled = set(HolidayCategory)
        else:
            self._enabled = {HolidayCategory(category) for category in enabled}

    @property
    def enabled_categories(self) -> frozenset:
        return frozenset(self._enabled)

    def is_enabled(self, category: HolidayCategory) -> bool:
        return category in self._enabled

    def enable(self, category: HolidayCategory) -> None:
        self._enabled.add(category)
        logger.debug("Holiday category enabled: %s", category.value)

    def disable(self, category: HolidayCategory) -> None:
        self._enabled.discard(category)
        logger.debug("Holiday category disabled: %s", category.value)

    def toggle(self, category: HolidayCategory) -> bool:
        """Flip a category and return whether it is now enabled."""
        if self.is_enabled(category):
            self.disable(category)
            return False
        self.enable(category)
        return True

    def enable_all(self) -> None:
        self._enabled = set(HolidayCategory)

    def disable_all(self) -> None:
        self._enabled = set()

    def apply(self, occurrences: Iterable[HolidayOccurrence]) -> List[HolidayOccurrence]:
        """Keep only occurrences whose category is enabled, preserving order."""
        return [occurrence for occurrence in occurrences if occurrence.category in self._enabled]

    def __repr__(self) -> str:
        names = sorted(category.value for category in self._enabled)
        return f"HolidayCategoryFilter(enabled={names})"
