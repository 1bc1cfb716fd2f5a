"""
Configuration data models.

This module contains the configuration structures loaded from ``config.toml``.
"""

from dataclasses import dataclass, field


@dataclass
class MountConfig:
    """
    Settings of the ``[mount]`` section.
    """

    # Base directory under which canonical mountpoints are created.
    dir: str = "/srv"
    # Permission mode used when a mountpoint directory is created.
    default_mode: str = "0700"


@dataclass
class StatsConfig:
    """
    Settings of the ``[stats]`` section.
    """

    # Seconds between the two /proc/stat samples of the CPU usage measurement.
    cpu_sample_interval: float = 1.0
    # Location of the shadow password suite configuration.
    login_defs: str = "/etc/login.defs"


@dataclass
class LoggingConfig:
    """
    Settings of the ``[logging]`` section.
    """

    level: str = "INFO"


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    mount: MountConfig = field(default_factory=MountConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
