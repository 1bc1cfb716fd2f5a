"""
Point-in-time system telemetry.

Uptime, load average, memory and CPU statistics are read from the kernel
pseudo-files under ``/proc`` and from ``free``. Every call recomputes its
result; nothing is cached. ``get_cpu_stats`` blocks for the sampling
interval (one second by default), callers serving requests should run it on
a worker thread.
"""

import logging
import os
import socket
import time
from datetime import datetime
from typing import Optional, Tuple, Union

from ..config import get_config
from ..i18n import ngettext, not_available
from ..models.stats import CpuStats, CpuTimes, LoadAverage, MemoryStats, SystemSummary, UptimeStats
from ..system.commands import run_command
from ..validation import StructureError
from .parsers import calculate_cpu_usage, parse_cpu_times, parse_free_output, parse_key_value_lines

logger = logging.getLogger(__name__)

PROC_UPTIME = "/proc/uptime"
PROC_LOADAVG = "/proc/loadavg"
PROC_STAT = "/proc/stat"
PROC_CPUINFO = "/proc/cpuinfo"

# Keys of /proc/cpuinfo (whitespace removed) holding the CPU model name,
# in order of preference. x86 uses "model name", MIPS "cpu model", older
# ARM kernels "Processor" and "Hardware". Lookups are case-sensitive so the
# per-core "processor" index on x86 never matches.
MODEL_NAME_KEYS = ("modelname", "cpumodel", "Processor", "Hardware")
CPU_MHZ_KEY = "cpuMHz"


def _read_first_line(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.readline()


def uptime(indexed: bool = False) -> Union[UptimeStats, str]:
    """
    Get the system uptime.

    Args:
        indexed: Return the split up values instead of a sentence.

    Returns:
        ``UptimeStats``, or a localized sentence such as
        ``"1 day 1 hour 1 minute 5 seconds"``.
    """
    total_seconds = float(_read_first_line(PROC_UPTIME).split()[0])
    stats = UptimeStats(
        days=int(total_seconds // 86400),
        hours=int(total_seconds // 3600) % 24,
        minutes=int(total_seconds // 60) % 60,
        seconds=int(total_seconds) % 60,
    )
    if indexed:
        return stats
    return format_uptime(stats)


def format_uptime(stats: UptimeStats) -> str:
    """Render uptime values as a sentence, singular exactly when a value is 1."""
    parts = [
        ngettext("%d day", "%d days", stats.days) % stats.days,
        ngettext("%d hour", "%d hours", stats.hours) % stats.hours,
        ngettext("%d minute", "%d minutes", stats.minutes) % stats.minutes,
        ngettext("%d second", "%d seconds", stats.seconds) % stats.seconds,
    ]
    return " ".join(parts)


def get_load_average() -> LoadAverage:
    """Get the 1, 5 and 15 minute load average; ``str()`` joins them with commas."""
    fields = _read_first_line(PROC_LOADAVG).split()
    if len(fields) < 3:
        raise StructureError(f"Unexpected content of {PROC_LOADAVG}: {fields}", path=PROC_LOADAVG)
    return LoadAverage(load1=fields[0], load5=fields[1], load15=fields[2])


def get_memory_stats() -> MemoryStats:
    """
    Get memory and swap usage in bytes from ``free``.

    Sections whose line cannot be parsed stay at zero.

    Raises:
        ExecutionError: If free cannot be run.
    """
    output, _ = run_command("free", ["-b", "-t", "-w"])
    return parse_free_output(output)


def sample_cpu_times() -> CpuTimes:
    """Read one sample of the aggregate CPU counters from ``/proc/stat``."""
    return parse_cpu_times(_read_first_line(PROC_STAT))


def get_cpu_info() -> Tuple[str, str]:
    """
    Get the CPU model name and clock speed from ``/proc/cpuinfo``.

    Returns:
        Tuple of (modelname, cpumhz); each is a localized "n/a" if missing.
    """
    try:
        with open(PROC_CPUINFO, "r", encoding="utf-8", errors="replace") as f:
            info = parse_key_value_lines(f, delimiter=":", comment="", strip_key_spaces=True)
    except OSError as e:
        logger.warning(f"Failed to read {PROC_CPUINFO}: {e}")
        info = {}

    modelname = not_available()
    for key in MODEL_NAME_KEYS:
        if key in info:
            modelname = info[key]
            break
    cpumhz = info.get(CPU_MHZ_KEY) or not_available()
    return modelname, cpumhz


def get_cpu_stats(interval: Optional[float] = None) -> CpuStats:
    """
    Get the CPU model, clock speed and current utilization.

    The utilization is measured by sampling ``/proc/stat`` twice. This call
    sleeps between the samples and therefore blocks for ``interval`` seconds.

    Args:
        interval: Seconds between samples, defaults to the configured
            ``stats.cpu_sample_interval`` (1 second)

    Raises:
        StructureError: If ``/proc/stat`` has fewer counters than expected.
    """
    if interval is None:
        interval = get_config().stats.cpu_sample_interval

    modelname, cpumhz = get_cpu_info()

    first = sample_cpu_times()
    time.sleep(interval)
    second = sample_cpu_times()
    usage = calculate_cpu_usage(first, second)
    logger.debug(f"CPU usage over {interval}s: {usage:.1f}%")

    return CpuStats(modelname=modelname, cpumhz=cpumhz, usage=usage)


def collect_system_summary(cpu_interval: Optional[float] = None) -> SystemSummary:
    """
    Collect all statistics into one timestamped snapshot.

    Blocks for the CPU sampling interval.
    """
    ts = datetime.now()
    return SystemSummary(
        ts=ts,
        hostname=socket.gethostname(),
        kernel=os.uname().release,
        uptime=uptime(indexed=True),
        load_average=get_load_average(),
        memory=get_memory_stats(),
        cpu=get_cpu_stats(cpu_interval),
    )
