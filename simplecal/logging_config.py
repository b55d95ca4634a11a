"""
Central logging configuration for simplecal.

Keeps simplecal's own loggers at INFO (or DEBUG when troubleshooting) while
holding third-party libraries at a quieter level.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

from .config.settings import LoggingSettings

CONSOLE_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

SIMPLECAL_MODULES = [
    "simplecal",
    "simplecal.core",
    "simplecal.ui",
    "simplecal.holidays",
    "simplecal.config",
]

THIRD_PARTY_LOGGERS = [
    "pydantic",
    "yaml",
]

_TRUTHY = ("1", "true", "yes", "on")


def _level_from_name(level_name: Optional[str], default: int = logging.INFO) -> int:
    if not level_name:
        return default
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else default


def create_console_handler(use_colors: bool = True) -> logging.Handler:
    """Create a stderr handler with the simplecal console format.

    Args:
        use_colors: Colorize the level name with colorlog

    Returns:
        Configured stream handler
    """
    handler = logging.StreamHandler(stream=sys.stderr)
    if use_colors:
        formatter: logging.Formatter = ColoredFormatter(
            CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS
        )
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    settings: Optional[LoggingSettings] = None,
) -> None:
    """
    Configure logging levels for simplecal.

    Args:
        debug_mode: Whether to enable debug logging for simplecal modules
        force_debug: Override debug mode setting (None to use env var detection)
        settings: Logging section of the application settings

    Environment Variables:
        SIMPLECAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        SIMPLECAL_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    settings = settings or LoggingSettings()

    env_debug = os.getenv("SIMPLECAL_DEBUG", "").strip().lower() in _TRUTHY
    env_log_level = os.getenv("SIMPLECAL_LOG_LEVEL", "").strip().upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else _level_from_name(settings.console_level)
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if none exist so embedding applications keep theirs
    if not root_logger.handlers:
        root_logger.addHandler(create_console_handler(settings.console_colors))

    logger_config: dict[str, int] = {}

    third_party_level = _level_from_name(settings.third_party_level, logging.WARNING)
    for logger_name in THIRD_PARTY_LOGGERS:
        logger_config[logger_name] = third_party_level

    simplecal_level = logging.DEBUG if final_debug else logging.INFO
    for module in SIMPLECAL_MODULES:
        logger_config[module] = simplecal_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.info("Debug logging enabled for simplecal modules")
    else:
        root_logger.debug("Logging configured at %s", logging.getLevelName(root_level))


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in ["simplecal", *THIRD_PARTY_LOGGERS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
