"""
Mountpoint management.
"""

from .mountpoint import MountPoint, build_path
from .paths import is_device_file, unescape_path

__all__ = [
    "MountPoint",
    "build_path",
    "is_device_file",
    "unescape_path",
]
