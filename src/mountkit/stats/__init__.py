"""
System statistics.

Stateless queries of host metrics parsed from ``/proc`` and command output,
plus device lookups. The only cached value is the root device file.
"""

from .devices import (
    clear_root_device_cache,
    get_login_defs,
    get_next_device,
    get_root_device_file,
    is_root_device_file,
)
from .parsers import (
    calculate_cpu_usage,
    parse_cpu_times,
    parse_free_output,
    parse_key_value_lines,
)
from .telemetry import (
    collect_system_summary,
    format_uptime,
    get_cpu_info,
    get_cpu_stats,
    get_load_average,
    get_memory_stats,
    sample_cpu_times,
    uptime,
)

__all__ = [
    # Devices
    "clear_root_device_cache",
    "get_login_defs",
    "get_next_device",
    "get_root_device_file",
    "is_root_device_file",
    # Parsers
    "calculate_cpu_usage",
    "parse_cpu_times",
    "parse_free_output",
    "parse_key_value_lines",
    # Telemetry
    "collect_system_summary",
    "format_uptime",
    "get_cpu_info",
    "get_cpu_stats",
    "get_load_average",
    "get_memory_stats",
    "sample_cpu_times",
    "uptime",
]
