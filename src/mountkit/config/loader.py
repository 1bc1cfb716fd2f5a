"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file and the environment overrides applied on top of it.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)

# Environment variable naming an alternative configuration file.
CONFIG_PATH_ENV = "MOUNTKIT_CONFIG"
# Environment variable overriding [mount] dir.
MOUNT_DIR_ENV = "MOUNTKIT_MOUNT_DIR"

DEFAULT_CONFIG_PATH = Path("/etc/mountkit/config.toml")


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        OSError: If the file cannot be read
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """
    Load the main configuration file, or an empty mapping if it is missing.

    A missing file is not an error: every setting has a built-in default.
    """
    if not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return {}
    return load_toml_file(config_path, "main configuration file")


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the configuration path from the environment or the default."""
    environ = os.environ if environ is None else environ
    value = environ.get(CONFIG_PATH_ENV)
    return Path(value) if value else DEFAULT_CONFIG_PATH


def apply_env_overrides(
    config_data: Dict[str, Any], environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Apply environment variable overrides to raw configuration data.

    Returns a new dictionary; ``config_data`` is left untouched.
    """
    environ = os.environ if environ is None else environ
    merged = {section: dict(values) for section, values in config_data.items()
              if isinstance(values, dict)}

    mount_dir = environ.get(MOUNT_DIR_ENV)
    if mount_dir:
        logger.debug(f"Overriding mount.dir from {MOUNT_DIR_ENV}: {mount_dir}")
        merged.setdefault("mount", {})["dir"] = mount_dir

    return merged
