"""
Exception types and error handling helpers.

This module defines the exception taxonomy shared by the mount and stats
packages and the helpers used to log errors consistently before they are
propagated or turned into exit codes.
"""

import logging
import sys
from enum import Enum
from typing import Any, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class MountkitError(Exception):
    """Base class for all errors raised by mountkit."""


class ValidationError(MountkitError):
    """
    Exception raised when validation of a configuration or argument value fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ExecutionError(MountkitError):
    """
    Exception raised when an external command fails.

    Raised when a command exits with a non-zero status while failure checking
    is enabled, or when the command could not be spawned at all (in which
    case ``returncode`` is -1).

    Attributes:
        command: Program name that was executed.
        arguments: Arguments passed to the program.
        returncode: Exit status of the process.
        output: Captured output lines (stdout, plus stderr when merged).
    """

    def __init__(self, command: str, args: Sequence[str], returncode: int,
                 output: Optional[List[str]] = None):
        self.command = command
        self.arguments = list(args)
        self.returncode = returncode
        self.output = list(output or [])
        cmdline = " ".join([command] + self.arguments)
        message = f"Failed to execute command '{cmdline}' (exit code={returncode})"
        if self.output:
            message += ": " + "\n".join(self.output)
        super().__init__(message)


class StructureError(MountkitError):
    """
    Exception raised when a structural precondition is violated.

    Examples are a mountpoint path that exists but is not a directory, or a
    kernel pseudo-file that does not have the expected number of fields.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and terminate the process with ``exit_code``."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    if include_traceback:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
