"""
System statistics data models.

Every record is an immutable snapshot taken at call time; nothing here is
cached or persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MemorySection:
    """The ``Mem:`` row of ``free -b -t -w``, in bytes."""

    total: int = 0
    used: int = 0
    free: int = 0
    shared: int = 0
    buffers: int = 0
    cache: int = 0
    available: int = 0


@dataclass(frozen=True)
class SwapSection:
    """The ``Swap:`` row of ``free -b -t -w``, in bytes."""

    total: int = 0
    used: int = 0
    free: int = 0


@dataclass(frozen=True)
class TotalSection:
    """The ``Total:`` row (memory plus swap) of ``free -b -t -w``, in bytes."""

    total: int = 0
    used: int = 0
    free: int = 0


@dataclass(frozen=True)
class MemoryStats:
    mem: MemorySection = field(default_factory=MemorySection)
    swap: SwapSection = field(default_factory=SwapSection)
    total: TotalSection = field(default_factory=TotalSection)


@dataclass(frozen=True)
class CpuTimes:
    """
    One sample of the aggregate ``cpu`` line of ``/proc/stat``.

    All values are in clock ticks since boot.
    """

    total: int
    idle: int
    iowait: int


@dataclass(frozen=True)
class CpuStats:
    modelname: str
    cpumhz: str
    usage: float


@dataclass(frozen=True)
class UptimeStats:
    days: int
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True)
class LoadAverage:
    """The 1, 5 and 15 minute load figures exactly as the kernel reports them."""

    load1: str
    load5: str
    load15: str

    def __str__(self) -> str:
        return "%s, %s, %s" % (self.load1, self.load5, self.load15)


@dataclass(frozen=True)
class SystemSummary:
    ts: datetime
    hostname: str
    kernel: str
    uptime: UptimeStats
    load_average: LoadAverage
    memory: MemoryStats
    cpu: CpuStats
