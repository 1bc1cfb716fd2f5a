"""
Validation and error handling for the mountkit package.

This module provides the exception taxonomy, input validation and error
handling helpers with consistent error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ExecutionError,
    MountkitError,
    StructureError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

from .validators import (
    validate_absolute_path,
    validate_enum_choice,
    validate_octal_mode,
    validate_positive_float,
)

__all__ = [
    # Exceptions
    "ErrorSeverity",
    "ExecutionError",
    "MountkitError",
    "StructureError",
    "ValidationError",
    # Error handling
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_absolute_path",
    "validate_enum_choice",
    "validate_octal_mode",
    "validate_positive_float",
]
