"""
Data models for the mountkit package.

Configuration Models:
- Application-wide configuration settings per TOML section

Mount Models:
- Active mount descriptions and filesystem usage

Statistics Models:
- Memory, CPU, uptime and load average snapshots
- Aggregated system summary
"""

# Configuration models
from .config import AppConfig, LoggingConfig, MountConfig, StatsConfig

# Mount models
from .mount import DiskUsage, MountInfo

# Statistics models
from .stats import (
    CpuStats,
    CpuTimes,
    LoadAverage,
    MemorySection,
    MemoryStats,
    SwapSection,
    SystemSummary,
    TotalSection,
    UptimeStats,
)

__all__ = [
    # Configuration
    "AppConfig",
    "LoggingConfig",
    "MountConfig",
    "StatsConfig",
    # Mount
    "DiskUsage",
    "MountInfo",
    # Statistics
    "CpuStats",
    "CpuTimes",
    "LoadAverage",
    "MemorySection",
    "MemoryStats",
    "SwapSection",
    "SystemSummary",
    "TotalSection",
    "UptimeStats",
]
