"""
Mountpoint lifecycle management.

A ``MountPoint`` wraps one directory that serves as the target of a
filesystem mount. It creates and removes the directory, mounts and unmounts
it and reports whether it is currently mounted. The filesystem source of a
mount is resolved by the operating system (fstab), never passed explicitly.
"""

import logging
import os
from typing import List, Optional, Sequence, Union

import psutil

from ..config import get_config
from ..models.mount import DiskUsage, MountInfo
from ..system.commands import run_command
from ..validation import ExecutionError, StructureError
from .paths import is_device_file, unescape_path

logger = logging.getLogger(__name__)


def build_path(id: str, mount_dir: Optional[str] = None) -> str:
    """Build the canonical mountpoint directory for a filesystem identifier.

    Device files are flattened into a single path component, e.g.
    ``/dev/disk/by-id/wwn-0x5000cca211cc703c-part1`` becomes
    ``dev-disk-by-id-wwn-0x5000cca211cc703c-part1``. Any other identifier
    (filesystem UUID, label token) is used as it is, minus any leading
    separator, so the result always lies below ``mount_dir``.

    Args:
        id: A filesystem UUID/label token or a device file path.
        mount_dir: Base directory; defaults to the configured ``mount.dir``.

    Returns:
        The mountpoint path, e.g. ``/srv/dev-disk-by-id-wwn-0x5000...``.
    """
    if mount_dir is None:
        mount_dir = get_config().mount.dir
    if is_device_file(id):
        id = unescape_path(id).strip("/")
        id = id.replace("/", "-").replace(":", "-")
    else:
        id = id.lstrip("/")
    return os.path.join(mount_dir, id)


def _normalize_options(options: Union[str, Sequence[str], None]) -> List[str]:
    if not options:
        return []
    if isinstance(options, str):
        options = options.split(",")
    return [opt.strip() for opt in options if opt and opt.strip()]


class MountPoint:
    """A directory used as the target of a filesystem mount."""

    def __init__(self, path: str):
        self._path = path

    @classmethod
    def from_id(cls, id: str, mount_dir: Optional[str] = None) -> "MountPoint":
        """Create the mountpoint for a filesystem identifier, see build_path()."""
        return cls(build_path(id, mount_dir))

    build_path = staticmethod(build_path)

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, path: str) -> None:
        self._path = path

    def get_path(self) -> str:
        return self._path

    def set_path(self, path: str) -> None:
        self._path = path

    def __repr__(self) -> str:
        return f"MountPoint({self._path!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, MountPoint):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def exists(self) -> bool:
        """Check whether the mountpoint directory exists.

        Raises:
            StructureError: If the path exists but is not a directory.
        """
        if not os.path.exists(self._path):
            return False
        if not os.path.isdir(self._path):
            raise StructureError(
                f"The mountpoint '{self._path}' is not a directory", path=self._path
            )
        return True

    def create(self, mode: str = "0700") -> None:
        """Create the mountpoint directory, including missing parents.

        Does nothing if the directory already exists.

        Args:
            mode: Octal permission mode of the new directory.

        Raises:
            ExecutionError: If mkdir fails.
        """
        if self.exists():
            return
        logger.info(f"Creating mountpoint directory {self._path} (mode={mode})")
        run_command("mkdir", ["--parents", f"--mode={mode}", self._path],
                    merge_stderr=True)

    def unlink(self, force: bool = True) -> None:
        """Remove the mountpoint directory recursively.

        Does nothing if the directory does not exist.

        Args:
            force: Ignore the path disappearing while it is being removed.

        Raises:
            ExecutionError: If rm fails.
        """
        if not self.exists():
            return
        args = ["--recursive"]
        if force:
            args.append("--force")
        args.append(self._path)
        logger.info(f"Removing mountpoint directory {self._path}")
        run_command("rm", args, merge_stderr=True)

    def is_mount_point(self) -> bool:
        """Check whether the directory is a mount boundary.

        The exit status of ``mountpoint -q`` is the answer: 0 means mounted,
        any other status means not mounted. This check never raises; if the
        ``mountpoint`` program cannot be run the directory is reported as
        not mounted.
        """
        try:
            _, returncode = run_command("mountpoint", ["-q", self._path],
                                        quiet=True, check=False)
        except ExecutionError as e:
            logger.warning(f"Cannot determine mount state of {self._path}: {e}")
            return False
        return returncode == 0

    def is_mounted(self) -> bool:
        """Check whether the directory is the target of an active mount."""
        return self.is_mount_point()

    def mount(self, options: Union[str, Sequence[str], None] = "") -> None:
        """Mount the filesystem configured for this mountpoint.

        Args:
            options: Mount options, either comma separated or as a list.

        Raises:
            ExecutionError: If mount fails.
        """
        args = ["-v"]
        opts = _normalize_options(options)
        if opts:
            args.extend(["-o", ",".join(opts)])
        args.extend(["--target", self._path])
        logger.info(f"Mounting {self._path}" + (f" with options {opts}" if opts else ""))
        run_command("mount", args, merge_stderr=True)

    def umount(self, force: bool = False, lazy: bool = False) -> None:
        """Unmount the filesystem.

        Args:
            force: Force the unmount (e.g. an unreachable NFS server).
            lazy: Detach now, clean up references once no longer busy.

        Raises:
            ExecutionError: If umount fails.
        """
        args = ["-v"]
        if force:
            args.append("-f")
        if lazy:
            args.append("-l")
        args.append(self._path)
        logger.info(f"Unmounting {self._path} (force={force}, lazy={lazy})")
        run_command("umount", args, merge_stderr=True)

    def get_mount_info(self) -> Optional[MountInfo]:
        """Return the active mount targeting this directory, if any.

        When several mounts are stacked on the path the topmost one wins.
        """
        target = os.path.normpath(self._path)
        found = None
        for part in psutil.disk_partitions(all=True):
            if os.path.normpath(part.mountpoint) == target:
                found = part
        if found is None:
            return None
        return MountInfo(
            device=found.device,
            mountpoint=found.mountpoint,
            fstype=found.fstype,
            options=_normalize_options(found.opts),
        )

    def get_usage(self) -> DiskUsage:
        """Return the filesystem usage of the directory.

        Raises:
            StructureError: If the directory does not exist.
        """
        if not self.exists():
            raise StructureError(
                f"The mountpoint '{self._path}' does not exist", path=self._path
            )
        usage = psutil.disk_usage(self._path)
        return DiskUsage(
            total=int(usage.total),
            used=int(usage.used),
            free=int(usage.free),
            percent=float(usage.percent),
        )
