"""Navigation engine and action dispatch for interactive calendar views."""

from .actions import NavigationActionHandler
from .navigation import (
    NavigationDirection,
    NavigationState,
    NavigationUnit,
    ViewMode,
    visible_range,
)

__all__ = [
    "NavigationActionHandler",
    "NavigationDirection",
    "NavigationState",
    "NavigationUnit",
    "ViewMode",
    "visible_range",
]
