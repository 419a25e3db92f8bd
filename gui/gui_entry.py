"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from core.log_setup import setup_logging

from .gui_mainwindow import MainWindow


def main():
    """GUI main entry"""
    setup_logging(verbose="--verbose" in sys.argv)

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("File Renamer")
    app.setApplicationVersion("1.0.0")

    # Set style
    app.setStyle("Fusion")

    # Optional folder to open on start
    folders = [arg for arg in sys.argv[1:] if not arg.startswith("-")]
    window = MainWindow(folders[0] if folders else None)
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
