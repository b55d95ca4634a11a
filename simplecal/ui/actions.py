"""Action dispatch from presentation-layer input to the navigation engine."""

import logging
from typing import Any, Callable, Dict, Optional

from .navigation import NavigationDirection, NavigationState, NavigationUnit, ViewMode

logger = logging.getLogger(__name__)

VIEW_ACTION_PREFIX = "view:"


class NavigationActionHandler:
    """Translates named actions (keystrokes, gestures, buttons) into navigation calls."""

    def __init__(self, navigation_state: Optional[NavigationState] = None):
        """Initialize navigation action handler.

        Args:
            navigation_state: Navigation state to drive, a new one is created if omitted
        """
        self.navigation_state = navigation_state or NavigationState()
        state = self.navigation_state

        self._actions: Dict[str, Callable[[], None]] = {
            "prev-day": lambda: state.navigate(NavigationUnit.DAY, NavigationDirection.BACKWARD),
            "next-day": lambda: state.navigate(NavigationUnit.DAY, NavigationDirection.FORWARD),
            "prev-week": lambda: state.navigate(NavigationUnit.WEEK, NavigationDirection.BACKWARD),
            "next-week": lambda: state.navigate(NavigationUnit.WEEK, NavigationDirection.FORWARD),
            "prev-month": state.navigate_to_previous_month,
            "next-month": state.navigate_to_next_month,
            "prev-year": state.navigate_to_previous_year,
            "next-year": state.navigate_to_next_year,
            "up": state.move_up_one_week,
            "down": state.move_down_one_week,
            "left": state.move_left_one_day,
            "right": state.move_right_one_day,
            "today": state.navigate_to_today,
            "toggle-year": state.toggle_year_view,
            "clear-selection": state.clear_selection,
        }

        logger.debug("Navigation action handler initialized")

    @property
    def actions(self) -> list:
        """Names of the fixed actions understood by the handler."""
        return sorted(self._actions)

    def handle_action(self, action: str) -> bool:
        """Handle a navigation action.

        Args:
            action: Action name (prev-week, up, today, view:month, "3", ...)

        Returns:
            True if the action was recognized and dispatched
        """
        handler = self._actions.get(action)
        if handler is not None:
            handler()
            logger.debug("Navigation action %r -> %s", action, self.navigation_state)
            return True

        mode = self._resolve_view_mode(action)
        if mode is not None:
            self.navigation_state.set_view_mode(mode)
            return True

        logger.warning("Unknown navigation action: %s", action)
        return False

    def _resolve_view_mode(self, action: str) -> Optional[ViewMode]:
        if action.startswith(VIEW_ACTION_PREFIX):
            value = action[len(VIEW_ACTION_PREFIX):]
            try:
                return ViewMode(value)
            except ValueError:
                return None
        return ViewMode.from_key(action)

    def get_navigation_info(self) -> Dict[str, Any]:
        """Get current navigation information for display.

        Returns:
            JSON-friendly navigation information dictionary
        """
        state = self.navigation_state
        start, end = state.visible_range()
        selected = state.selected_date
        return {
            "current_anchor": state.current_anchor.isoformat(),
            "selected_date": selected.isoformat() if selected is not None else None,
            "view_mode": state.view_mode.value,
            "view_mode_name": state.view_mode.display_name,
            "visible_start": start.isoformat(),
            "visible_end": end.isoformat(),
            "selection_visible": selected is not None and state.is_visible(selected),
        }
