"""
Path helpers for device files and escaped mount paths.
"""

import re

_DEVICE_FILE_RE = re.compile(r"^/dev/.+$")
_HEX_ESCAPE_RE = re.compile(r"\\x([0-9a-fA-F]{2})")


def is_device_file(value: str) -> bool:
    """Check whether ``value`` looks like a device file path such as ``/dev/sdb1``."""
    return bool(_DEVICE_FILE_RE.match(value))


def unescape_path(path: str) -> str:
    """
    Reverse ``\\xNN`` escaping as used by udev and systemd in device paths.

    Examples:
        >>> unescape_path("/dev/disk/by-label/My\\\\x20Data")
        '/dev/disk/by-label/My Data'
    """
    return _HEX_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), path)
