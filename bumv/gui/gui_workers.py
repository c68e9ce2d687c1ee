"""
gui_workers.py - GUI Worker Threads

Provides background execution of long tasks to avoid blocking UI
"""

from typing import Optional, List

from PySide6.QtCore import QThread, Signal, QObject

from ..core import (
    scan_snapshot, run_plan, write_rename_log,
    RenameOptions, RenamePlan, RenameJournal, BumvError,
)


class ScanWorker(QThread):
    """Snapshot worker thread"""

    # Signals
    completed = Signal(list)        # Complete, returns the snapshot
    error = Signal(str)             # Error message

    def __init__(self, options: RenameOptions, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.options = options

    def run(self):
        try:
            self.completed.emit(scan_snapshot(self.options))
        except (OSError, ValueError) as e:
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    completed = Signal(object)          # RenameResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        plan: RenamePlan,
        snapshot: List[str],
        options: RenameOptions,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.snapshot = snapshot
        self.options = options
        self.journal = RenameJournal(root=options.root)

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = run_plan(
                self.plan,
                self.snapshot,
                self.options,
                progress_callback=progress_callback,
                journal=self.journal,
            )
            if result.completed and not self.options.no_log:
                write_rename_log(self.plan.mapping, self.options.root)

            self.completed.emit(result)
        except BumvError as e:
            self.error.emit(e.details())
        except OSError as e:
            self.error.emit(str(e))
