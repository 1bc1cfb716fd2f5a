"""
Validation functions for configuration and command line values.
"""

import os
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError

_OCTAL_MODE_RE = re.compile(r"^[0-7]{3,4}$")


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_absolute_path(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path is a non-empty absolute path.

    The path does not need to exist.

    Returns:
        The normalized path string

    Raises:
        ValidationError: If the path is empty, not a string or relative
    """
    if not isinstance(path, (str, Path)) or not str(path).strip():
        raise ValidationError(
            f"{field_name} must be a non-empty path",
            field_name=field_name,
            value=path
        )
    path_str = str(path)
    if not os.path.isabs(path_str):
        raise ValidationError(
            f"{field_name} must be an absolute path, got {path_str}",
            field_name=field_name,
            value=path
        )
    return os.path.normpath(path_str)


def validate_octal_mode(mode: Any, field_name: str = "mode") -> str:
    """
    Validate a permission mode given as an octal string such as ``"0700"``.

    Raises:
        ValidationError: If the mode is not three or four octal digits
    """
    mode_str = str(mode)
    if not _OCTAL_MODE_RE.match(mode_str):
        raise ValidationError(
            f"{field_name} must be an octal mode like '0700', got {mode}",
            field_name=field_name,
            value=mode
        )
    return mode_str


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        The matching choice as it appears in ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value in choices:
            return str_value
    else:
        for choice in choices:
            if choice.lower() == str_value.lower():
                return choice

    raise ValidationError(
        f"{field_name} must be one of {choices}, got {value}",
        field_name=field_name,
        value=value
    )
