"""
mountkit: filesystem mountpoint management and system statistics.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Exceptions, input validation and error handling
- system: External command execution
- mount: Mountpoint lifecycle (create, mount, umount, remove)
- stats: Uptime, load, memory and CPU statistics, device lookups
- cli: Command-line interface

Usage:
    From command line:
        mountkit status /srv/dev-disk-by-label-data

    Programmatically:
        from mountkit import MountPoint, build_path
        mp = MountPoint(build_path("/dev/disk/by-label/data"))
        mp.create()
        mp.mount("noatime")
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .mount import MountPoint, build_path

# Model classes for external use
from .models import (
    AppConfig,
    CpuStats,
    DiskUsage,
    LoadAverage,
    MemoryStats,
    MountInfo,
    SystemSummary,
    UptimeStats,
)

# Errors
from .validation import (
    ExecutionError,
    MountkitError,
    StructureError,
    ValidationError,
)

# System utilities
from .system import run_command

# Statistics
from .stats import (
    collect_system_summary,
    get_cpu_stats,
    get_load_average,
    get_login_defs,
    get_memory_stats,
    get_next_device,
    get_root_device_file,
    is_root_device_file,
    uptime,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "MountPoint",
    "build_path",
    # Models
    "AppConfig",
    "CpuStats",
    "DiskUsage",
    "LoadAverage",
    "MemoryStats",
    "MountInfo",
    "SystemSummary",
    "UptimeStats",
    # Errors
    "ExecutionError",
    "MountkitError",
    "StructureError",
    "ValidationError",
    # System utilities
    "run_command",
    # Statistics
    "collect_system_summary",
    "get_cpu_stats",
    "get_load_average",
    "get_login_defs",
    "get_memory_stats",
    "get_next_device",
    "get_root_device_file",
    "is_root_device_file",
    "uptime",
]
