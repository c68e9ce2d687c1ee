"""
gui - PySide6 front end for bumv
"""

from .gui_entry import main

__all__ = ["main"]
