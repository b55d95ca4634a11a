"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..holidays.models import HolidayCategory
from ..ui.navigation import ViewMode

logger = logging.getLogger(__name__)

ENV_PREFIX = "SIMPLECAL_"


class LoggingSettings(BaseModel):
    """Console logging configuration settings."""

    console_level: str = Field(
        default="INFO", description="Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )
    console_colors: bool = Field(default=True, description="Enable colored console output")
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class NavigationSettings(BaseModel):
    """Navigation engine defaults."""

    default_view_mode: ViewMode = Field(
        default=ViewMode.THREE_DAYS, description="View mode used when a session starts"
    )
    first_weekday: int = Field(
        default=0, ge=0, le=6, description="First day of the week (Monday=0 .. Sunday=6)"
    )


class HolidaySettings(BaseModel):
    """Holiday catalog and display preferences."""

    catalog_path: Optional[Path] = Field(
        default=None, description="Custom holiday catalog YAML (defaults to the bundled catalog)"
    )
    enabled_categories: list[HolidayCategory] = Field(
        default_factory=lambda: list(HolidayCategory),
        description="Holiday categories shown to the user",
    )
    upcoming_limit: int = Field(
        default=10, ge=0, description="Number of upcoming holidays to list"
    )

    @field_validator("catalog_path")
    @classmethod
    def expand_catalog_path(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None


class SimpleCalSettings(BaseSettings):
    """Application settings with environment variable and YAML support."""

    # Private attributes
    _explicit_args: set = PrivateAttr(default_factory=set)
    _env_vars_set: set = PrivateAttr(default_factory=set)

    app_name: str = Field(default="SimpleCal", description="Application name")
    timezone: Optional[str] = Field(
        default=None, description="IANA timezone for calendar days (defaults to system local)"
    )

    # File Paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "simplecal")
    config_file: Optional[Path] = Field(
        default=None, description="Explicit YAML configuration file"
    )

    # Sections
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    navigation: NavigationSettings = Field(default_factory=NavigationSettings)
    holidays: HolidaySettings = Field(default_factory=HolidaySettings)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs: Any) -> None:
        # Track which environment variables are set before calling parent
        env_vars_set = {
            key[len(ENV_PREFIX):].lower() for key in os.environ if key.upper().startswith(ENV_PREFIX)
        }

        super().__init__(**kwargs)

        # Track which arguments were explicitly provided
        self._explicit_args = set(kwargs.keys())
        self._env_vars_set = env_vars_set

        # Load YAML configuration after basic initialization
        self._load_yaml_config()

    def _find_config_file(self) -> Optional[Path]:
        """Find config file: explicit path, then project directory, then user config dir."""
        if self.config_file is not None:
            if self.config_file.exists():
                return self.config_file
            logger.warning("Configured config file %s does not exist", self.config_file)
            return None

        project_root = Path(__file__).parent.parent.parent
        project_config = project_root / "config" / "config.yaml"
        if project_config.exists():
            return project_config

        user_config = self.config_dir / "config.yaml"
        if user_config.exists():
            return user_config

        return None

    def _is_overridden(self, key: str) -> bool:
        """Check whether a value was given explicitly or through the environment."""
        return key in self._explicit_args or key in self._env_vars_set

    def _load_basic_settings(self, config_data: dict) -> None:
        """Load top-level settings from YAML data."""
        for setting in ("app_name", "timezone"):
            if setting in config_data and not self._is_overridden(setting):
                setattr(self, setting, config_data[setting])

    def _load_section(self, name: str, model_cls: type, config_data: dict) -> None:
        """Merge one YAML section into the corresponding settings model."""
        section = config_data.get(name)
        if not isinstance(section, dict) or name in self._explicit_args:
            return

        updates = {
            key: value for key, value in section.items() if not self._is_overridden(f"{name}__{key}")
        }
        if not updates:
            return

        current = getattr(self, name)
        setattr(self, name, model_cls.model_validate({**current.model_dump(), **updates}))

    def _load_yaml_config(self) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open(encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                return
            if not isinstance(config_data, dict):
                logger.warning("Ignoring YAML config %s: top level is not a mapping", config_file)
                return

            self._load_basic_settings(config_data)
            self._load_section("logging", LoggingSettings, config_data)
            self._load_section("navigation", NavigationSettings, config_data)
            self._load_section("holidays", HolidaySettings, config_data)

            logger.debug("Loaded YAML config from %s", config_file)

        except (OSError, yaml.YAMLError, ValidationError) as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logger.warning("Could not load YAML config from %s: %s", config_file, e)

    def get_timezone(self) -> Optional[ZoneInfo]:
        """Resolve the configured timezone, or None for the system local timezone."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Invalid timezone %r, using system local timezone", self.timezone)
            return None


# Global settings management
_settings_instance: Optional[SimpleCalSettings] = None


def get_settings() -> SimpleCalSettings:
    """Get the global settings instance, creating it lazily if needed.

    Returns:
        SimpleCalSettings: The global settings instance
    """
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = SimpleCalSettings()
    return globals()["_settings_instance"]


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
