"""
gui_mainwindow.py - GUI Main Window

Left: the files of the chosen folder with their new names.
Right: the ordered list of rename operations.
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QListWidget,
    QTableWidget, QTableWidgetItem, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox, QSplitter, QDialog
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor

from core import RenameBatch, RenameOptions, FileEntry, CommitResult
from core.models_fs import normalize_for_comparison
from .gui_workers import ScanWorker, CommitWorker
from .gui_operation_dialog import OperationDialog

COL_SELECTED, COL_NAME, COL_NEW_NAME, COL_EXTENSION = range(4)


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self, folder: Optional[str] = None):
        super().__init__()
        self.setWindowTitle("File Renamer")
        self.setMinimumSize(900, 600)

        self.batch = RenameBatch(options=RenameOptions())
        self.scan_worker: Optional[ScanWorker] = None
        self.commit_worker: Optional[CommitWorker] = None
        self._updating_table = False

        self._init_ui()

        if folder:
            self.dir_edit.setText(folder)
            self._do_scan()

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Folder group
        folder_group = QGroupBox("Folder")
        folder_layout = QGridLayout(folder_group)
        self.dir_edit = QLineEdit()
        self.dir_edit.setPlaceholderText("Select folder containing files to rename...")
        self.dir_edit.returnPressed.connect(self._do_scan)
        folder_layout.addWidget(self.dir_edit, 0, 0)
        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.clicked.connect(self._browse_directory)
        folder_layout.addWidget(self.browse_btn, 0, 1)
        self.refresh_btn = QPushButton("Refresh")
        self.refresh_btn.clicked.connect(self._do_scan)
        folder_layout.addWidget(self.refresh_btn, 0, 2)
        self.hidden_check = QCheckBox("Include Hidden Files")
        folder_layout.addWidget(self.hidden_check, 1, 0, 1, 3)
        layout.addWidget(folder_group)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        # Files table
        self.table = QTableWidget()
        self.table.setColumnCount(4)
        self.table.setHorizontalHeaderLabels(["", "Current Name", "New Name", "Extension"])
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(COL_SELECTED, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(COL_NAME, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_NEW_NAME, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(COL_EXTENSION, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.itemChanged.connect(self._on_item_changed)
        splitter.addWidget(self.table)

        # Operations panel
        ops_widget = QGroupBox("Operations")
        ops_layout = QVBoxLayout(ops_widget)
        self.op_list = QListWidget()
        self.op_list.itemDoubleClicked.connect(lambda _item: self._edit_operation())
        ops_layout.addWidget(self.op_list, 1)

        buttons = QGridLayout()
        self.op_add_btn = QPushButton("Add")
        self.op_edit_btn = QPushButton("Edit")
        self.op_remove_btn = QPushButton("Remove")
        self.op_up_btn = QPushButton("Up")
        self.op_down_btn = QPushButton("Down")
        self.op_clear_btn = QPushButton("Clear")
        self.op_add_btn.clicked.connect(self._add_operation)
        self.op_edit_btn.clicked.connect(self._edit_operation)
        self.op_remove_btn.clicked.connect(self._remove_operation)
        self.op_up_btn.clicked.connect(self._move_operation_up)
        self.op_down_btn.clicked.connect(self._move_operation_down)
        self.op_clear_btn.clicked.connect(self._clear_operations)
        for i, btn in enumerate([self.op_add_btn, self.op_edit_btn, self.op_remove_btn,
                                 self.op_up_btn, self.op_down_btn, self.op_clear_btn]):
            buttons.addWidget(btn, i // 3, i % 3)
        ops_layout.addLayout(buttons)
        splitter.addWidget(ops_widget)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        layout.addWidget(splitter, 1)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.status_label = QLabel("")
        bottom_layout.addWidget(self.status_label, 1)

        self.execute_btn = QPushButton("Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        self.statusBar().showMessage("Ready")

    # ------------------------------------------------------------------
    # Folder
    # ------------------------------------------------------------------

    def _browse_directory(self):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Open Folder Containing Files to Rename",
                                                     self.dir_edit.text())
        if directory:
            self.dir_edit.setText(directory)
            self._do_scan()

    def _do_scan(self):
        """Scan the folder"""
        directory = self.dir_edit.text().strip()
        if not directory:
            QMessageBox.warning(self, "Warning", "Please select a directory first")
            return

        path = Path(directory)
        if not path.is_dir():
            QMessageBox.warning(self, "Warning", f"Directory does not exist: {directory}")
            return

        self.batch.folder = path
        self.batch.options.include_hidden = self.hidden_check.isChecked()
        self._set_busy(True)
        self.statusBar().showMessage(f"Scanning {path} ...")

        self.scan_worker = ScanWorker(path, self.batch.options)
        self.scan_worker.finished.connect(self._on_scan_finished)
        self.scan_worker.error.connect(self._on_scan_error)
        self.scan_worker.start()

    @Slot(list)
    def _on_scan_finished(self, entries: List[FileEntry]):
        self._set_busy(False)
        self.batch.set_entries(entries)
        self._refresh()
        self.statusBar().showMessage(f"Found {len(entries)} files")

    @Slot(str)
    def _on_scan_error(self, error: str):
        self._set_busy(False)
        self.batch.set_entries([])
        self._refresh()
        QMessageBox.critical(self, "Error", f"Scan failed: {error}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _example_position(self) -> Optional[int]:
        """Row used as the example in the operation dialog"""
        row = self.table.currentRow()
        return row if row >= 0 else None

    def _add_operation(self):
        example = self.batch.example_name(self._example_position())
        dialog = OperationDialog(example, parent=self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.batch.add_operation(dialog.operation())
            self._refresh()
            self.op_list.setCurrentRow(len(self.batch.operations) - 1)

    def _edit_operation(self):
        position = self.op_list.currentRow()
        if position < 0:
            return
        example = self.batch.example_name(self._example_position(), upto=position)
        dialog = OperationDialog(example, self.batch.operations[position], parent=self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.batch.replace_operation(position, dialog.operation())
            self._refresh()
            self.op_list.setCurrentRow(position)

    def _remove_operation(self):
        position = self.op_list.currentRow()
        if position < 0:
            return
        self.batch.remove_operation(position)
        self._refresh()

    def _move_operation_up(self):
        position = self.batch.move_operation_up(self.op_list.currentRow())
        self._refresh()
        self.op_list.setCurrentRow(position)

    def _move_operation_down(self):
        position = self.batch.move_operation_down(self.op_list.currentRow())
        self._refresh()
        self.op_list.setCurrentRow(position)

    def _clear_operations(self):
        self.batch.clear_operations()
        self._refresh()

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------

    @Slot(QTableWidgetItem)
    def _on_item_changed(self, item: QTableWidgetItem):
        if self._updating_table or item.column() != COL_SELECTED:
            return
        self.batch.set_selected(item.row(), item.checkState() == Qt.CheckState.Checked)
        self._refresh()

    def _refresh(self):
        """Redraw operations and files from the batch"""
        self.op_list.clear()
        self.op_list.addItems(self.batch.descriptions())

        entries = self.batch.entries
        counts = {}
        for entry in self.batch.selected_entries:
            key = normalize_for_comparison(entry.new_name)
            counts[key] = counts.get(key, 0) + 1

        self._updating_table = True
        try:
            self.table.setRowCount(len(entries))
            for row, entry in enumerate(entries):
                check = QTableWidgetItem()
                check.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable)
                check.setCheckState(Qt.CheckState.Checked if entry.selected else Qt.CheckState.Unchecked)
                self.table.setItem(row, COL_SELECTED, check)
                self.table.setItem(row, COL_NAME, QTableWidgetItem(entry.current_name))

                new_name_item = QTableWidgetItem(entry.new_name if entry.selected else "")
                if entry.selected and (not entry.new_name or counts.get(normalize_for_comparison(entry.new_name), 0) > 1):
                    new_name_item.setForeground(QColor(200, 0, 0))
                elif entry.selected and entry.is_changed:
                    new_name_item.setForeground(QColor(0, 150, 0))
                self.table.setItem(row, COL_NEW_NAME, new_name_item)
                self.table.setItem(row, COL_EXTENSION, QTableWidgetItem(entry.extension))
        finally:
            self._updating_table = False

        self.execute_btn.setEnabled(self.batch.can_rename)
        problems = self.batch.problems()
        self.status_label.setText(problems[0] if problems else "Ready to rename")

    def _set_busy(self, busy: bool):
        for widget in (self.browse_btn, self.refresh_btn, self.op_add_btn, self.op_edit_btn,
                       self.op_remove_btn, self.op_up_btn, self.op_down_btn, self.op_clear_btn,
                       self.table):
            widget.setEnabled(not busy)
        if busy:
            self.execute_btn.setEnabled(False)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _do_execute(self):
        """Execute rename"""
        if not self.batch.can_rename:
            return

        count = sum(1 for e in self.batch.selected_entries if e.is_changed)
        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to rename {count} files?\n\nThis action cannot be undone!",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._set_busy(True)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, len(self.batch.selected_entries))

        self.commit_worker = CommitWorker(self.batch)
        self.commit_worker.progress.connect(self._on_commit_progress)
        self.commit_worker.finished.connect(self._on_commit_finished)
        self.commit_worker.error.connect(self._on_commit_error)
        self.commit_worker.start()

    @Slot(int, int, str)
    def _on_commit_progress(self, current: int, total: int, msg: str):
        self.progress_bar.setValue(current)
        self.statusBar().showMessage(msg)

    @Slot(object)
    def _on_commit_finished(self, result: CommitResult):
        self._set_busy(False)
        self.progress_bar.setVisible(False)
        self._refresh()

        msg = f"Rename complete!\n\nSuccess: {result.success_count}\nFailed: {result.failed_count}"
        if result.failed:
            msg += "\n\nFailure Details:\n"
            for record in result.failed[:5]:
                msg += f"  Unable to rename '{record.src.name}': {record.error}\n"
            if len(result.failed) > 5:
                msg += f"  ... and {len(result.failed) - 5} more failures"
            QMessageBox.warning(self, "Complete", msg)
        else:
            QMessageBox.information(self, "Complete", msg)
        self.statusBar().showMessage("Complete")

    @Slot(str)
    def _on_commit_error(self, error: str):
        self._set_busy(False)
        self.progress_bar.setVisible(False)
        self._refresh()
        QMessageBox.critical(self, "Error", f"Rename failed: {error}")
