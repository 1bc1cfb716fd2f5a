"""
Command-line interface for the mountkit package.
"""

from .main import main, main_cli

__all__ = [
    "main",
    "main_cli",
]
