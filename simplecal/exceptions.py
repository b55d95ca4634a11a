"""Exceptions raised by simplecal.

Date arithmetic never raises: failures at the calendar boundary are absorbed
as "no-op" or "omit this occurrence". These exceptions cover configuration
problems only, which are reported when configuration is loaded.
"""

from pathlib import Path
from typing import Optional


class SimpleCalError(Exception):
    """Base exception for all simplecal errors."""


class ConfigurationError(SimpleCalError):
    """Exception raised when application configuration is unusable."""


class HolidayCatalogError(ConfigurationError):
    """Exception raised when a holiday catalog cannot be loaded or validated."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        """Initialize HolidayCatalogError.

        Args:
            message: Error message
            path: Catalog file that caused the error, if any
        """
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        base = super().__str__()
        if self.path is not None:
            return f"{base} ({self.path})"
        return base
