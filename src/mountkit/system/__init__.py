"""
System interaction utilities.

Every mount operation and every command-based statistic goes through
``run_command`` so that logging and error reporting stay uniform.
"""

from .commands import is_command_available, run_command

__all__ = [
    "is_command_available",
    "run_command",
]
