"""
Parsers for kernel pseudo-files and command output.

The parsers are pure functions over text so they can be tested without a
live system. The line formats are fixed: each regular expression requires
the exact number of fields the kernel or ``free`` produces, and a line that
does not match leaves the corresponding record at its zero defaults.
"""

import logging
import re
from typing import Dict, Iterable, Optional

from ..models.stats import CpuTimes, MemorySection, MemoryStats, SwapSection, TotalSection
from ..validation import StructureError

logger = logging.getLogger(__name__)

_MEM_RE = re.compile(r"^Mem:\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)$")
_SWAP_RE = re.compile(r"^Swap:\s+(\d+)\s+(\d+)\s+(\d+)$")
_TOTAL_RE = re.compile(r"^Total:\s+(\d+)\s+(\d+)\s+(\d+)$")

# Index of the idle and iowait counters after the label and padding tokens
# of the aggregate "cpu" line have been dropped.
_IDLE_FIELD = 3
_IOWAIT_FIELD = 4


def parse_key_value_lines(
    lines: Iterable[str],
    delimiter: Optional[str] = None,
    comment: str = "#",
    strip_key_spaces: bool = False,
) -> Dict[str, str]:
    """
    Parse ``key<delimiter>value`` lines into a dictionary.

    Keys are case-sensitive and the first occurrence of a key wins. Blank
    lines, comment lines and lines without a delimiter are skipped.

    Args:
        lines: Text lines to parse
        delimiter: Separator between key and value, None for any whitespace
        comment: Prefix marking a comment line, empty to disable
        strip_key_spaces: Remove all whitespace inside keys, so that
            ``model name`` becomes ``modelname``

    Returns:
        Mapping from key to the stripped value
    """
    result: Dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if not line or (comment and line.startswith(comment)):
            continue
        parts = line.split(delimiter, 1)
        if len(parts) != 2:
            continue
        key, value = parts[0].strip(), parts[1].strip()
        if strip_key_spaces:
            key = "".join(key.split())
        if key and key not in result:
            result[key] = value
    return result


def parse_free_output(lines: Iterable[str]) -> MemoryStats:
    """
    Parse the output of ``free -b -t -w``.

    Example input::

                       total        used        free      shared     buffers       cache   available
        Mem:      2101825536    98390016  1823117312    12967936    16809984   163508224  1844318208
        Swap:              0           0           0
        Total:    2101825536    98390016  1823117312
    """
    mem = MemorySection()
    swap = SwapSection()
    total = TotalSection()

    for raw in lines:
        line = raw.strip()
        if line.startswith("Mem:"):
            match = _MEM_RE.match(line)
            if match:
                mem = MemorySection(*(int(v) for v in match.groups()))
            else:
                logger.debug(f"Unexpected 'Mem:' line in free output: {line!r}")
        elif line.startswith("Swap:"):
            match = _SWAP_RE.match(line)
            if match:
                swap = SwapSection(*(int(v) for v in match.groups()))
            else:
                logger.debug(f"Unexpected 'Swap:' line in free output: {line!r}")
        elif line.startswith("Total:"):
            match = _TOTAL_RE.match(line)
            if match:
                total = TotalSection(*(int(v) for v in match.groups()))
            else:
                logger.debug(f"Unexpected 'Total:' line in free output: {line!r}")

    return MemoryStats(mem=mem, swap=swap, total=total)


def parse_cpu_times(line: str) -> CpuTimes:
    """
    Parse the aggregate ``cpu`` line of ``/proc/stat``.

    The kernel pads the label with two spaces (``cpu  4705 356 584 3699 ...``),
    so splitting on single spaces yields the label and an empty token before
    the counters. Both are dropped; the remaining counters are summed for the
    total time.

    Raises:
        StructureError: If the line has too few counters to locate idle and
            iowait.
    """
    tokens = line.strip().split(" ")
    fields = tokens[2:]
    if len(fields) <= _IOWAIT_FIELD:
        raise StructureError(
            f"Expected at least {_IOWAIT_FIELD + 1} counters in /proc/stat cpu line, "
            f"got {len(fields)}: {line.strip()!r}"
        )
    try:
        values = [int(v) for v in fields]
    except ValueError as e:
        raise StructureError(f"Malformed /proc/stat cpu line {line.strip()!r}: {e}") from e
    return CpuTimes(total=sum(values), idle=values[_IDLE_FIELD], iowait=values[_IOWAIT_FIELD])


def calculate_cpu_usage(first: CpuTimes, second: CpuTimes) -> float:
    """
    Compute the CPU usage in percent between two ``/proc/stat`` samples.

    Idle and iowait time both count as not busy. Returns 0.0 if no time
    passed between the samples.
    """
    diff_total = second.total - first.total
    if diff_total == 0:
        return 0.0
    diff_idle = second.idle - first.idle
    diff_iowait = second.iowait - first.iowait
    return (diff_total - diff_iowait - diff_idle) * 100 / diff_total
