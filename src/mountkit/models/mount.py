"""
Mount related data models.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class MountInfo:
    """An active mount as reported by the kernel mount table."""

    device: str
    mountpoint: str
    fstype: str
    options: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DiskUsage:
    total: int
    used: int
    free: int
    percent: float
