"""
gui - PySide6 Interface for File Renamer
"""

from .gui_entry import main

__all__ = ["main"]
