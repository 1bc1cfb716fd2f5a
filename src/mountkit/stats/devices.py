"""
Device related system queries.

This module resolves the root filesystem device, reads the shadow password
suite configuration and finds free device names such as ``md2`` or
``bond0``.
"""

import logging
import re
import threading
from typing import Dict, Optional, Set

from ..config import get_config
from ..system.commands import run_command
from ..validation import ExecutionError, validate_enum_choice
from .parsers import parse_key_value_lines

logger = logging.getLogger(__name__)

# Legacy alias the kernel uses for the root device on some boot setups.
ROOT_DEVICE_ALIAS = "/dev/root"

# Device numbers are searched in [0, MAX_DEVICE_NUMBER].
MAX_DEVICE_NUMBER = 255

# Column extraction commands listing the names in use per device class.
_DEVICE_LISTERS = {
    "disk": ("awk", ["{print $4}", "/proc/partitions"]),
    "iface": ("awk", ["-F:", "/:/ {print $1}", "/proc/net/dev"]),
}

# --- Write-once cache for the root device file ---

_ROOT_DEVICE_FILE: Optional[str] = None
_ROOT_DEVICE_LOCK = threading.Lock()


def get_root_device_file() -> str:
    """
    Get the device file backing the root filesystem, e.g. ``/dev/sda1``.

    The value is resolved with ``findmnt`` once per process and cached; a
    failed resolution is not cached.

    Raises:
        ExecutionError: If findmnt fails or reports nothing.
    """
    global _ROOT_DEVICE_FILE
    if _ROOT_DEVICE_FILE is not None:
        return _ROOT_DEVICE_FILE
    with _ROOT_DEVICE_LOCK:
        if _ROOT_DEVICE_FILE is None:
            args = ["-f", "-n", "-o", "SOURCE", "/"]
            output, returncode = run_command("findmnt", args)
            device_file = output[0].strip() if output else ""
            if not device_file:
                raise ExecutionError("findmnt", args, returncode,
                                     ["No source reported for the root filesystem"])
            logger.debug(f"Resolved root device file: {device_file}")
            _ROOT_DEVICE_FILE = device_file
    return _ROOT_DEVICE_FILE


def clear_root_device_cache() -> None:
    """Forget the cached root device file so the next call resolves it again."""
    global _ROOT_DEVICE_FILE
    with _ROOT_DEVICE_LOCK:
        _ROOT_DEVICE_FILE = None


def is_root_device_file(device_file: str, exact: bool = True) -> bool:
    """
    Check whether a device file is the one of the root filesystem.

    Args:
        device_file: Device file to check, e.g. ``/dev/sda1``
        exact: Require an exact match. Otherwise ``device_file`` only has to
            be a prefix of the root device file, so ``/dev/sda`` matches a
            root filesystem on ``/dev/sda1``.
    """
    if device_file == ROOT_DEVICE_ALIAS:
        return True
    root_device_file = get_root_device_file()
    if exact:
        return root_device_file == device_file
    return root_device_file.startswith(device_file)


def get_login_defs(path: Optional[str] = None) -> Optional[Dict[str, str]]:
    """
    Read the shadow password suite configuration.

    Args:
        path: File to read, defaults to the configured ``stats.login_defs``

    Returns:
        Mapping of the settings (keys are case-sensitive), or None if the
        file cannot be read.
    """
    path = path or get_config().stats.login_defs
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return parse_key_value_lines(f)
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return None


def _get_used_device_numbers(type: str, name: str) -> Set[int]:
    command, args = _DEVICE_LISTERS[type]
    output, _ = run_command(command, args)
    regex = re.compile(r"^%s(\d+)$" % re.escape(name))
    used = set()
    for line in output:
        match = regex.match(line.strip())
        if match:
            used.add(int(match.group(1)))
    return used


def get_next_device(type: str, name: str) -> Optional[str]:
    """
    Get the next free device name of a class.

    Example: with ``md0``, ``md1`` and ``md3`` in use,
    ``get_next_device("disk", "md")`` returns ``md2``.

    Args:
        type: Device class, ``disk`` or ``iface``
        name: Device name prefix, e.g. ``md``, ``bond`` or ``eth``

    Returns:
        The device name, or None if all numbers 0..255 are in use.

    Raises:
        ValidationError: If ``type`` is unknown.
        ExecutionError: If listing the devices fails.
    """
    type = validate_enum_choice(type, choices=list(_DEVICE_LISTERS), field_name="type")
    used = _get_used_device_numbers(type, name)
    for number in range(MAX_DEVICE_NUMBER + 1):
        if number not in used:
            return f"{name}{number}"
    logger.warning(f"No free {type} device number left for '{name}'")
    return None
