"""
cli - Command Line Interface for bumv
"""

from .cli_entry import main

__all__ = ["main"]
