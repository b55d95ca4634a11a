"""Navigation state management for interactive date browsing."""

import logging
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..core.host_calendar import HostCalendar, default_calendar

logger = logging.getLogger(__name__)


class NavigationDirection(Enum):
    """Direction for navigation."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def sign(self) -> int:
        return 1 if self is NavigationDirection.FORWARD else -1


class NavigationUnit(Enum):
    """Calendar unit moved by a single navigation step."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class ViewMode(Enum):
    """Calendar view modes, from a single day up to a whole year."""

    SINGLE_DAY = "singleDay"
    TWO_DAYS = "twoDays"
    THREE_DAYS = "threeDays"
    FOUR_DAYS = "fourDays"
    FIVE_DAYS = "fiveDays"
    SIX_DAYS = "sixDays"
    SEVEN_DAYS = "sevenDays"
    EIGHT_DAYS = "eightDays"
    NINE_DAYS = "nineDays"
    TWO_WEEKS = "twoWeeks"
    MONTH = "month"
    YEAR = "year"

    @property
    def day_count(self) -> int:
        """Number of days shown side by side in this mode."""
        return _DAY_COUNTS[self]

    @property
    def is_day_range(self) -> bool:
        """True for the 1-9 day modes."""
        return self.day_count <= 9

    @property
    def half_window(self) -> Optional[int]:
        """Radius in days of the window used for visibility tests.

        None for the month and year views, whose window is the anchor's
        calendar month or year rather than a span of days.
        """
        if self.is_day_range:
            return self.day_count // 2
        return _HALF_WINDOWS.get(self)

    @property
    def display_name(self) -> str:
        if self.is_day_range:
            if self.day_count == 1:
                return "One Day View"
            return f"{self.day_count} Day View"
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_key(cls, key: str) -> Optional["ViewMode"]:
        """Map a digit key to a view mode ("1".."9" day views, "0" two weeks)."""
        if key == "0":
            return cls.TWO_WEEKS
        if len(key) == 1 and key.isdigit():
            count = int(key)
            for mode in cls:
                if mode.is_day_range and mode.day_count == count:
                    return mode
        return None


_DAY_COUNTS = {
    ViewMode.SINGLE_DAY: 1,
    ViewMode.TWO_DAYS: 2,
    ViewMode.THREE_DAYS: 3,
    ViewMode.FOUR_DAYS: 4,
    ViewMode.FIVE_DAYS: 5,
    ViewMode.SIX_DAYS: 6,
    ViewMode.SEVEN_DAYS: 7,
    ViewMode.EIGHT_DAYS: 8,
    ViewMode.NINE_DAYS: 9,
    ViewMode.TWO_WEEKS: 14,
    ViewMode.MONTH: 31,
    ViewMode.YEAR: 365,
}

_HALF_WINDOWS = {
    ViewMode.TWO_WEEKS: 7,
}

_DISPLAY_NAMES = {
    ViewMode.TWO_WEEKS: "2 Week View",
    ViewMode.MONTH: "Month View",
    ViewMode.YEAR: "Year View",
}


def visible_range(
    view_mode: ViewMode, anchor: date, calendar: Optional[HostCalendar] = None
) -> Tuple[date, date]:
    """Get the inclusive range of days displayed for a view mode.

    Day-range modes extend forward from the anchor. The two-week view starts at
    the beginning of the anchor's week, the month view covers the padded month
    grid (whole weeks) and the year view covers the anchor's calendar year.
    An endpoint that cannot be computed falls back to the anchor itself.

    Args:
        view_mode: View mode to compute the range for
        anchor: Current anchor date
        calendar: Host calendar, defaults to the shared local calendar

    Returns:
        (start, end) tuple of dates, both inclusive
    """
    cal = calendar or default_calendar()

    if view_mode.is_day_range:
        start: Optional[date] = anchor
        end = cal.add(anchor, days=view_mode.day_count - 1)
    elif view_mode is ViewMode.TWO_WEEKS:
        start = cal.start_of_week(anchor)
        end = cal.add(start, days=13) if start is not None else None
    elif view_mode is ViewMode.MONTH:
        first = cal.date_from_components(anchor.year, anchor.month, 1)
        last = cal.add(first, months=1, days=-1) if first is not None else None
        start = cal.start_of_week(first) if first is not None else None
        end = cal.end_of_week(last) if last is not None else None
    else:
        start = cal.date_from_components(anchor.year, 1, 1)
        end = cal.date_from_components(anchor.year, 12, 31)

    return (start or anchor, end or anchor)


class NavigationState:
    """Manages the view anchor, the selected day and the view mode.

    ``current_anchor`` is the reference point of the visible window and
    ``selected_date`` is the highlighted day, which may be unset. Every
    operation is all-or-nothing: when a date cannot be computed the state is
    left untouched.
    """

    def __init__(
        self,
        current_anchor: Optional[date] = None,
        selected_date: Optional[date] = None,
        view_mode: ViewMode = ViewMode.THREE_DAYS,
        calendar: Optional[HostCalendar] = None,
    ):
        """Initialize navigation state.

        Args:
            current_anchor: Initial anchor date, defaults to today
            selected_date: Initially selected date, defaults to no selection
            view_mode: Initial view mode
            calendar: Host calendar used for all date arithmetic
        """
        self._calendar = calendar or default_calendar()
        self._current_anchor = self._calendar.to_local_date(current_anchor or self._calendar.today())
        self._selected_date = (
            self._calendar.to_local_date(selected_date) if selected_date is not None else None
        )
        self._view_mode = view_mode
        self._previous_view_mode: Optional[ViewMode] = None
        self._change_callbacks: List[Callable[["NavigationState"], None]] = []

        logger.debug(
            "Navigation state initialized: anchor=%s selected=%s mode=%s",
            self._current_anchor,
            self._selected_date,
            self._view_mode.value,
        )

    @property
    def calendar(self) -> HostCalendar:
        return self._calendar

    @property
    def current_anchor(self) -> date:
        """Get the reference date of the visible window."""
        return self._current_anchor

    @property
    def selected_date(self) -> Optional[date]:
        """Get the highlighted day, or None when nothing is selected."""
        return self._selected_date

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def previous_view_mode(self) -> Optional[ViewMode]:
        return self._previous_view_mode

    def navigate(self, unit: NavigationUnit, direction: NavigationDirection) -> None:
        """Move the anchor by exactly one day, week or month.

        Args:
            unit: Calendar unit to move by
            direction: Forward or backward
        """
        step = direction.sign
        if unit is NavigationUnit.DAY:
            new_anchor = self._calendar.add(self._current_anchor, days=step)
        elif unit is NavigationUnit.WEEK:
            new_anchor = self._calendar.add(self._current_anchor, weeks=step)
        else:
            new_anchor = self._calendar.add(self._current_anchor, months=step)

        if new_anchor is None:
            logger.debug(
                "Navigation %s %s from %s not possible; anchor unchanged",
                direction.value,
                unit.value,
                self._current_anchor,
            )
            return

        self._set_state(anchor=new_anchor)

    def navigate_to_next_month(self) -> None:
        """Advance one month, or one year while in the year view."""
        if self._view_mode is ViewMode.YEAR:
            self.navigate_to_next_year()
        else:
            self.navigate(NavigationUnit.MONTH, NavigationDirection.FORWARD)

    def navigate_to_previous_month(self) -> None:
        """Go back one month, or one year while in the year view."""
        if self._view_mode is ViewMode.YEAR:
            self.navigate_to_previous_year()
        else:
            self.navigate(NavigationUnit.MONTH, NavigationDirection.BACKWARD)

    def navigate_to_next_year(self) -> None:
        new_anchor = self._calendar.add(self._current_anchor, years=1)
        if new_anchor is not None:
            self._set_state(anchor=new_anchor)

    def navigate_to_previous_year(self) -> None:
        new_anchor = self._calendar.add(self._current_anchor, years=-1)
        if new_anchor is not None:
            self._set_state(anchor=new_anchor)

    def navigate_to_today(self, today: Optional[date] = None) -> None:
        """Move both the anchor and the selection to today.

        Args:
            today: Override for today's date
        """
        target = self._calendar.to_local_date(today or self._calendar.today())
        self._set_state(anchor=target, selected=target)

    def move_selected_by(self, days: int) -> None:
        """Move the selected date by a number of days.

        Does nothing when no date is selected. After the move the anchor is
        recentered on the selection only if the selection left the visible
        window.

        Args:
            days: Signed number of calendar days (e.g. -7 for one week up)
        """
        if self._selected_date is None:
            logger.debug("No selected date; ignoring move by %d days", days)
            return

        new_selected = self._calendar.add(self._selected_date, days=days)
        if new_selected is None:
            logger.debug("Cannot move selection %s by %d days", self._selected_date, days)
            return

        self._set_state(anchor=self._stable_anchor_for(new_selected), selected=new_selected)

    def move_up_one_week(self) -> None:
        self.move_selected_by(-7)

    def move_down_one_week(self) -> None:
        self.move_selected_by(7)

    def move_left_one_day(self) -> None:
        self.move_selected_by(-1)

    def move_right_one_day(self) -> None:
        self.move_selected_by(1)

    def select_date(self, target_date: date) -> None:
        """Select a date, recentering the view only if it is not visible.

        Args:
            target_date: Date to select
        """
        target = self._calendar.to_local_date(target_date)
        self._set_state(anchor=self._stable_anchor_for(target), selected=target)

    def clear_selection(self) -> None:
        """Remove the selection, leaving the anchor where it is."""
        if self._selected_date is None:
            return
        self._selected_date = None
        logger.debug("Selection cleared")
        self._notify_change()

    def set_view_mode(self, mode: ViewMode) -> None:
        """Switch view mode, remembering the previous mode for year view toggling."""
        if mode is self._view_mode:
            return
        if mode is not ViewMode.YEAR:
            self._previous_view_mode = self._view_mode
        old_mode = self._view_mode
        self._view_mode = mode
        logger.debug("View mode changed: %s -> %s", old_mode.value, mode.value)
        self._notify_change()

    def toggle_year_view(self) -> None:
        """Enter the year view, or return to the mode used before it."""
        if self._view_mode is ViewMode.YEAR:
            self._view_mode = self._previous_view_mode or ViewMode.MONTH
            self._previous_view_mode = None
        else:
            self._previous_view_mode = self._view_mode
            self._view_mode = ViewMode.YEAR
        logger.debug("Year view toggled; mode is now %s", self._view_mode.value)
        self._notify_change()

    def is_visible(self, target_date: date) -> bool:
        """Check whether a date lies within the anchor's window for the current mode.

        The month view keeps dates of the anchor's month and the year view
        dates of the anchor's year. Other modes use the day radius around the
        anchor.
        """
        if self._view_mode is ViewMode.MONTH:
            return (target_date.year, target_date.month) == (
                self._current_anchor.year,
                self._current_anchor.month,
            )
        if self._view_mode is ViewMode.YEAR:
            return target_date.year == self._current_anchor.year

        radius = self._view_mode.half_window
        distance = self._calendar.days_between(self._current_anchor, target_date)
        return -radius <= distance <= radius

    def visible_range(self) -> Tuple[date, date]:
        """Get the inclusive range of days displayed for the current state."""
        return visible_range(self._view_mode, self._current_anchor, self._calendar)

    def _stable_anchor_for(self, new_selected: date) -> date:
        """Anchor to use after selecting ``new_selected``.

        The anchor only moves when the selection falls outside the window, so
        small moves inside an already visible range do not make the view jump.
        Day-range and two-week views recenter on the selection itself.
        """
        if self.is_visible(new_selected):
            return self._current_anchor

        # month and year views snap to the start of the selected period
        if self._view_mode is ViewMode.MONTH:
            period_start = self._calendar.date_from_components(
                new_selected.year, new_selected.month, 1
            )
        elif self._view_mode is ViewMode.YEAR:
            period_start = self._calendar.date_from_components(new_selected.year, 1, 1)
        else:
            period_start = None
        return period_start or new_selected

    def _set_state(self, anchor: date, selected: Optional[date] = None) -> None:
        """Apply a new anchor (and selection, if given) in a single step."""
        new_selected = selected if selected is not None else self._selected_date
        if anchor == self._current_anchor and new_selected == self._selected_date:
            return

        old_anchor, old_selected = self._current_anchor, self._selected_date
        self._current_anchor = anchor
        self._selected_date = new_selected

        logger.debug(
            "Navigation: anchor %s -> %s, selected %s -> %s",
            old_anchor,
            anchor,
            old_selected,
            new_selected,
        )
        self._notify_change()

    def add_change_callback(self, callback: Callable[["NavigationState"], None]) -> None:
        """Add a callback to be called when the navigation state changes.

        Args:
            callback: Function called with this state after each change
        """
        self._change_callbacks.append(callback)
        logger.debug("Added navigation change callback")

    def remove_change_callback(self, callback: Callable[["NavigationState"], None]) -> None:
        """Remove a navigation change callback.

        Args:
            callback: Callback function to remove
        """
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)
            logger.debug("Removed navigation change callback")

    def _notify_change(self) -> None:
        """Notify all registered callbacks of a state change."""
        for callback in list(self._change_callbacks):
            try:
                callback(self)
            except Exception:
                logger.exception("Error in navigation change callback")

    def __str__(self) -> str:
        return (
            f"NavigationState(anchor={self._current_anchor}, "
            f"selected={self._selected_date}, mode={self._view_mode.value})"
        )

    def __repr__(self) -> str:
        return (
            f"NavigationState(current_anchor={self._current_anchor!r}, "
            f"selected_date={self._selected_date!r}, view_mode={self._view_mode!r})"
        )
