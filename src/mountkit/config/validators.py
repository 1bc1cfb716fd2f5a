"""
Configuration validation utilities.

This module turns raw TOML data into validated configuration dataclasses.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, LoggingConfig, MountConfig, StatsConfig
from ..validation import (
    validate_absolute_path,
    validate_enum_choice,
    validate_octal_mode,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_mount_config(mount_data: Dict[str, Any]) -> MountConfig:
    """
    Validate the ``[mount]`` section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = MountConfig()
    return MountConfig(
        dir=validate_absolute_path(
            mount_data.get("dir", defaults.dir), field_name="mount.dir"
        ),
        default_mode=validate_octal_mode(
            mount_data.get("default_mode", defaults.default_mode),
            field_name="mount.default_mode",
        ),
    )


def validate_stats_config(stats_data: Dict[str, Any]) -> StatsConfig:
    """
    Validate the ``[stats]`` section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = StatsConfig()
    return StatsConfig(
        cpu_sample_interval=validate_positive_float(
            stats_data.get("cpu_sample_interval", defaults.cpu_sample_interval),
            min_value=0.01,
            max_value=60.0,
            field_name="stats.cpu_sample_interval",
        ),
        login_defs=validate_absolute_path(
            stats_data.get("login_defs", defaults.login_defs),
            field_name="stats.login_defs",
        ),
    )


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    """
    Validate the ``[logging]`` section.

    Raises:
        ValidationError: If validation fails
    """
    level = validate_enum_choice(
        logging_data.get("level", LoggingConfig().level),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )
    return LoggingConfig(level=level)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate all sections and assemble the ``AppConfig``.

    Unknown sections are ignored with a warning.
    """
    known = {"mount", "stats", "logging"}
    for section in config_data:
        if section not in known:
            logger.warning(f"Ignoring unknown configuration section [{section}]")

    return AppConfig(
        mount=validate_mount_config(config_data.get("mount", {})),
        stats=validate_stats_config(config_data.get("stats", {})),
        logging=validate_logging_config(config_data.get("logging", {})),
    )
