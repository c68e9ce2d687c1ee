"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from .. import __version__
from .gui_mainwindow import MainWindow


def main():
    """GUI main entry"""
    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    argv = [arg for arg in sys.argv if arg not in ("--gui", "-g")]
    app = QApplication(argv)
    app.setApplicationName("bumv")
    app.setApplicationVersion(__version__)

    # Set style
    app.setStyle("Fusion")

    window = MainWindow()
    if len(argv) > 1:
        window.set_directory(argv[1])
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
