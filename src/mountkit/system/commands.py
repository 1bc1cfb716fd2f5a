"""
Command execution utilities.

This module provides the single primitive used to run external programs:
spawn a process, capture its output, optionally merge stderr into stdout and
raise ``ExecutionError`` on a non-zero exit status unless the caller disables
checking.
"""

import logging
import shutil
import subprocess
from typing import List, Optional, Sequence, Tuple

from ..validation import ExecutionError, ErrorSeverity, handle_subprocess_error

logger = logging.getLogger(__name__)


def run_command(
    command: str,
    args: Optional[Sequence[str]] = None,
    merge_stderr: bool = False,
    quiet: bool = False,
    check: bool = True,
) -> Tuple[List[str], int]:
    """Execute a command and capture its output.

    Runs the program directly (no shell) and waits for it to finish. There is
    no timeout; a hung command blocks the caller.

    Args:
        command: Program name or path to execute.
        args: Arguments passed to the program.
        merge_stderr: Append stderr to stdout in the returned output.
        quiet: Discard stderr entirely.
        check: Raise ``ExecutionError`` on a non-zero exit status.

    Returns:
        Tuple of (stdout_lines, return_code).

    Raises:
        ExecutionError: If the command exits non-zero while ``check`` is set,
            or if it cannot be spawned.
    """
    args = [str(arg) for arg in (args or [])]
    cmdline = " ".join([command] + args)
    logger.debug(f"Executing command: '{cmdline}'")

    if quiet:
        stderr = subprocess.DEVNULL
    elif merge_stderr:
        stderr = subprocess.STDOUT
    else:
        stderr = subprocess.PIPE

    try:
        process = subprocess.run(
            [command] + args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=stderr,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        error = ExecutionError(command, args, -1, [f"{type(e).__name__}: {e}"])
        handle_subprocess_error(error, cmdline, reraise=False, logger=logger)
        raise error from e

    output = process.stdout.splitlines() if process.stdout else []

    if check and process.returncode != 0:
        details = list(output)
        if process.stderr:
            details.extend(process.stderr.splitlines())
        error = ExecutionError(command, args, process.returncode, details)
        handle_subprocess_error(
            error, cmdline, severity=ErrorSeverity.ERROR, reraise=False, logger=logger
        )
        raise error

    return output, process.returncode


def is_command_available(command: str) -> bool:
    """Check whether ``command`` can be found in the system PATH."""
    return shutil.which(command) is not None
