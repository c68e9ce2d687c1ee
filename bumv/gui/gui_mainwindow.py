"""
gui_mainwindow.py - GUI Main Window

The listing is edited in place instead of in an external editor:
1. Load the files of a directory into the text area
2. Edit the paths
3. Preview the planned steps
4. Execute after confirmation
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QPlainTextEdit,
    QTableWidget, QTableWidgetItem, QProgressBar, QFileDialog,
    QMessageBox, QHeaderView, QGroupBox, QSplitter,
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor, QFont

from ..core import (
    RenameOptions, RenamePlan, RenameResult, OpKind, BumvError,
    render_list, parse_list, validate_edit, build_plan,
)
from .gui_workers import ScanWorker, RenameWorker

KIND_LABELS = {
    OpKind.RENAME: ("Rename", QColor(0, 150, 0)),
    OpKind.TO_TEMP: ("Park (cycle)", QColor(200, 150, 0)),
    OpKind.FROM_TEMP: ("Unpark (cycle)", QColor(200, 150, 0)),
}


class RenameWidget(QWidget):
    """Edit list, preview and execute"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.snapshot: List[str] = []
        self.options: Optional[RenameOptions] = None
        self.plan: Optional[RenamePlan] = None
        self.scan_worker: Optional[ScanWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Directory settings group
        dir_group = QGroupBox("Directory")
        dir_layout = QGridLayout(dir_group)

        dir_layout.addWidget(QLabel("Directory:"), 0, 0)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select directory...")
        dir_layout.addWidget(self.dir_edit, 0, 1)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        dir_layout.addWidget(self.browse_btn, 0, 2)

        options_layout = QHBoxLayout()
        self.recursive_check = QCheckBox("Recursive")
        self.no_ignore_check = QCheckBox("Do not observe ignore files")
        self.no_log_check = QCheckBox("Do not write a log file")
        options_layout.addWidget(self.recursive_check)
        options_layout.addWidget(self.no_ignore_check)
        options_layout.addWidget(self.no_log_check)
        options_layout.addStretch()
        dir_layout.addLayout(options_layout, 1, 0, 1, 3)

        self.load_btn = QPushButton("Load Files")
        self.load_btn.clicked.connect(self._do_load)
        dir_layout.addWidget(self.load_btn, 2, 0, 1, 3)

        layout.addWidget(dir_group)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Editable listing
        self.list_edit = QPlainTextEdit()
        self.list_edit.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.list_edit.setFont(QFont("monospace"))
        self.list_edit.setPlaceholderText("Load a directory, then edit the paths here (one per line)")
        self.list_edit.textChanged.connect(self._on_text_changed)
        splitter.addWidget(self.list_edit)

        # Planned steps
        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Step", "From", "To"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        splitter.addWidget(self.table)

        layout.addWidget(splitter, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        self.preview_btn.setEnabled(False)
        bottom_layout.addWidget(self.preview_btn)

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        # Status label
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def set_directory(self, directory: str):
        self.dir_edit.setText(directory)

    def _browse_directory(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            self.dir_edit.setText(directory)

    def _do_load(self):
        """Take the snapshot"""
        directory = self.dir_edit.text().strip()
        if not directory:
            QMessageBox.warning(self, "Warning", "Please select a directory first")
            return

        path = Path(directory)
        if not path.is_dir():
            QMessageBox.warning(self, "Warning", f"Directory does not exist: {directory}")
            return

        self.options = RenameOptions(
            root=path,
            recursive=self.recursive_check.isChecked(),
            no_ignore=self.no_ignore_check.isChecked(),
            no_log=self.no_log_check.isChecked(),
        )

        self.load_btn.setEnabled(False)
        self.load_btn.setText("Loading...")
        self.preview_btn.setEnabled(False)
        self.execute_btn.setEnabled(False)

        self.scan_worker = ScanWorker(self.options)
        self.scan_worker.completed.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(list)
    def _on_scan_finished(self, snapshot: List[str]):
        """Snapshot taken"""
        self.snapshot = snapshot
        self.plan = None
        self.load_btn.setEnabled(True)
        self.load_btn.setText("Load Files")

        self.list_edit.setPlainText(render_list(snapshot))
        self.table.setRowCount(0)

        if snapshot:
            self.preview_btn.setEnabled(True)
            self.status_label.setText(f"Loaded {len(snapshot)} files")
        else:
            self.status_label.setText("No files found")

    @Slot(str)
    def _on_scan_error(self, error: str):
        """Scan error"""
        self.load_btn.setEnabled(True)
        self.load_btn.setText("Load Files")
        QMessageBox.critical(self, "Error", f"Loading failed: {error}")

    @Slot()
    def _on_text_changed(self):
        # Any edit invalidates the previewed plan
        if self.plan is not None:
            self.plan = None
            self.execute_btn.setEnabled(False)
            self.status_label.setText("List changed, preview again")

    def _do_preview(self):
        """Validate the edited list and show the planned steps"""
        if self.options is None:
            return

        edited = parse_list(self.list_edit.toPlainText())
        try:
            mapping = validate_edit(self.snapshot, edited, self.options)
            plan = build_plan(mapping, self.options, self.snapshot)
        except BumvError as e:
            self.table.setRowCount(0)
            QMessageBox.warning(self, "Invalid Edit", e.details())
            return

        self._update_table(plan)
        if plan.is_empty():
            self.status_label.setText("No files to rename")
            return

        self.plan = plan
        self.execute_btn.setEnabled(True)
        self.status_label.setText(
            f"Will rename {len(plan.mapping)} files in {plan.total_count} steps "
            f"(cycles broken: {plan.cycle_count})"
        )

    def _update_table(self, plan: RenamePlan):
        """Display planned steps"""
        ops = plan.ops
        self.table.setRowCount(len(ops))
        for i, op in enumerate(ops):
            label, color = KIND_LABELS[op.kind]
            kind_item = QTableWidgetItem(f"{i + 1}. {label}")
            kind_item.setForeground(color)
            self.table.setItem(i, 0, kind_item)
            self.table.setItem(i, 1, QTableWidgetItem(op.src))
            self.table.setItem(i, 2, QTableWidgetItem(op.dst))

    def _do_execute(self):
        """Execute rename"""
        if not self.plan or self.plan.is_empty():
            return

        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {len(self.plan.mapping)} files?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self.execute_btn.setEnabled(False)
        self.execute_btn.setText("Executing...")
        self.preview_btn.setEnabled(False)
        self.load_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, self.plan.total_count)

        self.rename_worker = RenameWorker(self.plan, self.snapshot, self.options)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.completed.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        """Execution progress update"""
        self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_rename_finished(self, result: RenameResult):
        """Execution complete"""
        self._reset_after_run()

        if result.completed:
            QMessageBox.information(self, "Complete", f"Renamed {len(self.plan.mapping)} files.")
        else:
            QMessageBox.critical(self, "Stopped", result.summary())

        self.snapshot = []
        self.plan = None
        self.list_edit.clear()
        self.table.setRowCount(0)
        self.preview_btn.setEnabled(False)
        self.status_label.setText("Complete" if result.completed else "Stopped")

    @Slot(str)
    def _on_rename_error(self, error: str):
        """Refused before renaming anything"""
        self._reset_after_run()
        self.preview_btn.setEnabled(True)
        QMessageBox.critical(self, "Error", error)

    def _reset_after_run(self):
        self.execute_btn.setEnabled(False)
        self.execute_btn.setText("Execute Rename")
        self.load_btn.setEnabled(True)
        self.progress_bar.setVisible(False)


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("bumv - Bulk Rename")
        self.setMinimumSize(900, 600)

        self.rename_widget = RenameWidget()
        self.setCentralWidget(self.rename_widget)

        # Status bar
        self.statusBar().showMessage("Ready")

    def set_directory(self, directory: str):
        self.rename_widget.set_directory(directory)
