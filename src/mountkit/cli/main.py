"""
Command-line interface for mountkit.

This module provides the ``mountkit`` entry point for managing mountpoints
and printing system statistics from a shell.
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..mount import MountPoint, build_path
from ..stats import collect_system_summary, format_uptime, get_next_device
from ..system.commands import is_command_available
from ..validation import (
    MountkitError,
    ValidationError,
    handle_cli_error,
    validate_absolute_path,
    validate_octal_mode,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, get_config().logging.level)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )


def _mountpoint(path: str) -> MountPoint:
    return MountPoint(validate_absolute_path(path, field_name="PATH"))


def _cmd_build_path(args: argparse.Namespace) -> int:
    print(build_path(args.id))
    return 0


def _cmd_status(args: argparse.Namespace) -> int:
    mp = _mountpoint(args.path)
    exists = mp.exists()
    if not is_command_available("mountpoint"):
        logger.warning("The 'mountpoint' command is not installed, mount state is unreliable")
    mounted = mp.is_mounted() if exists else False
    print(f"path:    {mp.path}")
    print(f"exists:  {'yes' if exists else 'no'}")
    print(f"mounted: {'yes' if mounted else 'no'}")
    if mounted:
        info = mp.get_mount_info()
        if info is not None:
            print(f"device:  {info.device}")
            print(f"fstype:  {info.fstype}")
            print(f"options: {','.join(info.options)}")
        usage = mp.get_usage()
        print(f"usage:   {usage.used}/{usage.total} bytes ({usage.percent:.1f}%)")
    return 0


def _cmd_create(args: argparse.Namespace) -> int:
    mode = args.mode or get_config().mount.default_mode
    _mountpoint(args.path).create(validate_octal_mode(mode, field_name="--mode"))
    return 0


def _cmd_unlink(args: argparse.Namespace) -> int:
    _mountpoint(args.path).unlink(force=not args.no_force)
    return 0


def _cmd_mount(args: argparse.Namespace) -> int:
    _mountpoint(args.path).mount(args.options or "")
    return 0


def _cmd_umount(args: argparse.Namespace) -> int:
    _mountpoint(args.path).umount(force=args.force, lazy=args.lazy)
    return 0


def _cmd_next_device(args: argparse.Namespace) -> int:
    device = get_next_device(args.type, args.name)
    if device is None:
        logger.error(f"No free device name left for '{args.name}'")
        return 1
    print(device)
    return 0


def _cmd_stats(args: argparse.Namespace) -> int:
    summary = collect_system_summary()
    if args.json:
        print(json.dumps(dataclasses.asdict(summary), default=str, indent=2))
        return 0
    mem = summary.memory.mem
    print(f"Hostname:     {summary.hostname}")
    print(f"Kernel:       {summary.kernel}")
    print(f"Uptime:       {format_uptime(summary.uptime)}")
    print(f"Load average: {summary.load_average}")
    print(f"CPU:          {summary.cpu.modelname} ({summary.cpu.cpumhz} MHz)")
    print(f"CPU usage:    {summary.cpu.usage:.1f}%")
    print(f"Memory:       {mem.used}/{mem.total} bytes, {mem.available} available")
    print(f"Swap:         {summary.memory.swap.used}/{summary.memory.swap.total} bytes")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mountkit",
        description="Manage filesystem mountpoints and show system statistics.",
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to config.toml.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("build-path", help="Print the mountpoint of a filesystem id or device file.")
    p.add_argument("id")
    p.set_defaults(func=_cmd_build_path)

    p = subparsers.add_parser("status", help="Show whether a mountpoint exists and is mounted.")
    p.add_argument("path")
    p.set_defaults(func=_cmd_status)

    p = subparsers.add_parser("create", help="Create a mountpoint directory.")
    p.add_argument("path")
    p.add_argument("--mode", help="Octal permission mode (default from config).")
    p.set_defaults(func=_cmd_create)

    p = subparsers.add_parser("unlink", help="Remove a mountpoint directory.")
    p.add_argument("path")
    p.add_argument("--no-force", action="store_true", help="Fail if the path vanishes during removal.")
    p.set_defaults(func=_cmd_unlink)

    p = subparsers.add_parser("mount", help="Mount the filesystem configured for a mountpoint.")
    p.add_argument("path")
    p.add_argument("-o", "--options", help="Comma separated mount options.")
    p.set_defaults(func=_cmd_mount)

    p = subparsers.add_parser("umount", help="Unmount a mountpoint.")
    p.add_argument("path")
    p.add_argument("-f", "--force", action="store_true", help="Force the unmount.")
    p.add_argument("-l", "--lazy", action="store_true", help="Lazy unmount.")
    p.set_defaults(func=_cmd_umount)

    p = subparsers.add_parser("next-device", help="Print the next free device name.")
    p.add_argument("type", choices=["disk", "iface"])
    p.add_argument("name")
    p.set_defaults(func=_cmd_next_device)

    p = subparsers.add_parser("stats", help="Show system statistics (samples the CPU for about a second).")
    p.add_argument("--json", action="store_true", help="Print JSON instead of text.")
    p.set_defaults(func=_cmd_stats)

    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line interface for mountkit.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    if args.config:
        set_config_path(args.config)

    try:
        _setup_logging(args.verbose)
    except (ValidationError, OSError, ValueError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    try:
        return args.func(args)
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation", exit_code=1, logger=logger)
    except MountkitError as e:
        handle_cli_error(error=e, context=args.command, exit_code=1, logger=logger)
    return 1


def main() -> None:
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
