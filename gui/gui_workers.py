"""
gui_workers.py - GUI Worker Threads

Runs folder scans and commits in the background to avoid blocking the UI
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QThread, Signal, QObject

from core import RenameBatch, RenameOptions, scan_directory


class ScanWorker(QThread):
    """Folder scanning worker thread"""

    # Signals
    finished = Signal(list)         # Complete, returns FileEntry list
    error = Signal(str)             # Error message

    def __init__(
        self,
        directory: Path,
        options: Optional[RenameOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directory = directory
        self.options = options or RenameOptions()

    def run(self):
        try:
            entries = scan_directory(self.directory, self.options)
            self.finished.emit(entries)
        except Exception as e:
            self.error.emit(str(e))


class CommitWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # CommitResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        batch: RenameBatch,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.batch = batch

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = self.batch.commit(progress_callback=progress_callback)
            self.finished.emit(result)
        except Exception as e:
            self.error.emit(str(e))
