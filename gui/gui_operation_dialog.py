"""
gui_operation_dialog.py - Operation Editor Dialog

Three tabs (Add / Remove / Replace). The dialog shows the example name
before and after the operation while it is being edited; OK returns a new
operation snapshot.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QWidget, QVBoxLayout, QGridLayout, QTabWidget, QLabel, QLineEdit,
    QCheckBox, QComboBox, QSpinBox, QRadioButton, QButtonGroup, QDialogButtonBox,
    QGroupBox, QFormLayout
)

from core import (
    AddOperation, RemoveOperation, ReplaceOperation, Operation,
    AddMode, RemoveMode, TextLocation, TextOccurrence,
)

TAB_ADD, TAB_REMOVE, TAB_REPLACE = range(3)


def _location_combo(current: TextLocation) -> QComboBox:
    combo = QComboBox()
    for location in TextLocation:
        combo.addItem(location.label, location)
    combo.setCurrentIndex(list(TextLocation).index(current))
    return combo


def _occurrence_combo(current: TextOccurrence) -> QComboBox:
    combo = QComboBox()
    for occurrence in TextOccurrence:
        combo.addItem(occurrence.label, occurrence)
    combo.setCurrentIndex(list(TextOccurrence).index(current))
    return combo


def _spin(value: int, minimum: int = 0, maximum: int = 9999) -> QSpinBox:
    spin = QSpinBox()
    spin.setRange(minimum, maximum)
    spin.setValue(value)
    return spin


class AddPage(QWidget):
    def __init__(self, op: AddOperation, parent=None):
        super().__init__(parent)
        layout = QFormLayout(self)

        self.string_radio = QRadioButton("Text")
        self.number_radio = QRadioButton("Incrementing number")
        group = QButtonGroup(self)
        group.addButton(self.string_radio)
        group.addButton(self.number_radio)
        self.number_radio.setChecked(op.mode == AddMode.INCREMENTING_NUMBER)
        self.string_radio.setChecked(op.mode != AddMode.INCREMENTING_NUMBER)

        self.text_edit = QLineEdit(op.text)
        self.start_spin = _spin(op.increment_start, -99999, 99999)
        self.location_combo = _location_combo(op.location)
        self.offset_spin = _spin(op.offset)

        layout.addRow(self.string_radio, self.text_edit)
        layout.addRow(self.number_radio, self.start_spin)
        layout.addRow("Location:", self.location_combo)
        layout.addRow("Character offset:", self.offset_spin)

        self.changed_signals = [
            self.string_radio.toggled, self.text_edit.textChanged, self.start_spin.valueChanged,
            self.location_combo.currentIndexChanged, self.offset_spin.valueChanged,
        ]

    def update_enabled(self):
        self.text_edit.setEnabled(self.string_radio.isChecked())
        self.start_spin.setEnabled(self.number_radio.isChecked())
        self.offset_spin.setEnabled(self.location_combo.currentData() == TextLocation.INDEX)

    def operation(self) -> AddOperation:
        mode = AddMode.INCREMENTING_NUMBER if self.number_radio.isChecked() else AddMode.LITERAL_STRING
        return AddOperation(
            text=self.text_edit.text(),
            mode=mode,
            increment_start=self.start_spin.value(),
            location=self.location_combo.currentData(),
            offset=self.offset_spin.value(),
        )


class RemovePage(QWidget):
    def __init__(self, op: RemoveOperation, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        self.string_radio = QRadioButton("Remove text")
        self.count_radio = QRadioButton("Remove a number of characters")
        group = QButtonGroup(self)
        group.addButton(self.string_radio)
        group.addButton(self.count_radio)
        self.count_radio.setChecked(op.mode == RemoveMode.CHARACTER_COUNT)
        self.string_radio.setChecked(op.mode != RemoveMode.CHARACTER_COUNT)

        string_group = QGroupBox()
        string_layout = QFormLayout(string_group)
        self.text_edit = QLineEdit(op.text)
        self.occurrence_combo = _occurrence_combo(op.occurrence)
        string_layout.addRow("Text:", self.text_edit)
        string_layout.addRow("Occurrence:", self.occurrence_combo)

        count_group = QGroupBox()
        count_layout = QFormLayout(count_group)
        self.count_spin = _spin(op.count)
        self.location_combo = _location_combo(op.location)
        self.offset_spin = _spin(op.offset)
        count_layout.addRow("Characters:", self.count_spin)
        count_layout.addRow("From:", self.location_combo)
        count_layout.addRow("Character offset:", self.offset_spin)

        layout.addWidget(self.string_radio)
        layout.addWidget(string_group)
        layout.addWidget(self.count_radio)
        layout.addWidget(count_group)
        layout.addStretch()

        self.string_group = string_group
        self.count_group = count_group
        self.changed_signals = [
            self.string_radio.toggled, self.text_edit.textChanged,
            self.occurrence_combo.currentIndexChanged, self.count_spin.valueChanged,
            self.location_combo.currentIndexChanged, self.offset_spin.valueChanged,
        ]

    def update_enabled(self):
        by_count = self.count_radio.isChecked()
        self.string_group.setEnabled(not by_count)
        self.count_group.setEnabled(by_count)
        self.offset_spin.setEnabled(by_count and self.location_combo.currentData() == TextLocation.INDEX)

    def operation(self) -> RemoveOperation:
        mode = RemoveMode.CHARACTER_COUNT if self.count_radio.isChecked() else RemoveMode.LITERAL_STRING
        return RemoveOperation(
            mode=mode,
            text=self.text_edit.text(),
            occurrence=self.occurrence_combo.currentData(),
            count=self.count_spin.value(),
            location=self.location_combo.currentData(),
            offset=self.offset_spin.value(),
        )


class ReplacePage(QWidget):
    def __init__(self, op: ReplaceOperation, parent=None):
        super().__init__(parent)
        layout = QFormLayout(self)

        self.text_edit = QLineEdit(op.text)
        self.replacement_edit = QLineEdit(op.replacement)
        self.replacement_edit.setPlaceholderText("Leave empty to delete")
        self.case_check = QCheckBox("Ignore case")
        self.case_check.setChecked(op.ignore_case)
        self.occurrence_combo = _occurrence_combo(op.occurrence)

        layout.addRow("Find:", self.text_edit)
        layout.addRow("Replace with:", self.replacement_edit)
        layout.addRow("", self.case_check)
        layout.addRow("Occurrence:", self.occurrence_combo)

        self.changed_signals = [
            self.text_edit.textChanged, self.replacement_edit.textChanged,
            self.case_check.toggled, self.occurrence_combo.currentIndexChanged,
        ]

    def update_enabled(self):
        pass

    def operation(self) -> ReplaceOperation:
        return ReplaceOperation(
            text=self.text_edit.text(),
            replacement=self.replacement_edit.text(),
            ignore_case=self.case_check.isChecked(),
            occurrence=self.occurrence_combo.currentData(),
        )


class OperationDialog(QDialog):
    """Create or edit one rename operation"""

    def __init__(self, example_name: str, operation: Optional[Operation] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit Operation" if operation is not None else "Add Operation")
        self.resize(600, 380)
        self.example_name = example_name

        layout = QVBoxLayout(self)

        self.tabs = QTabWidget()
        self.add_page = AddPage(operation if isinstance(operation, AddOperation) else AddOperation())
        self.remove_page = RemovePage(operation if isinstance(operation, RemoveOperation) else RemoveOperation())
        self.replace_page = ReplacePage(operation if isinstance(operation, ReplaceOperation) else ReplaceOperation())
        self.tabs.addTab(self.add_page, "Add")
        self.tabs.addTab(self.remove_page, "Remove")
        self.tabs.addTab(self.replace_page, "Replace")
        if isinstance(operation, RemoveOperation):
            self.tabs.setCurrentIndex(TAB_REMOVE)
        elif isinstance(operation, ReplaceOperation):
            self.tabs.setCurrentIndex(TAB_REPLACE)
        layout.addWidget(self.tabs, 1)

        # Example preview
        example_group = QGroupBox("Example")
        example_layout = QGridLayout(example_group)
        example_layout.addWidget(QLabel("Before:"), 0, 0)
        example_layout.addWidget(QLabel(example_name or "(no file selected)"), 0, 1)
        example_layout.addWidget(QLabel("After:"), 1, 0)
        self.after_label = QLabel()
        example_layout.addWidget(self.after_label, 1, 1)
        example_layout.setColumnStretch(1, 1)
        layout.addWidget(example_group)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        for page in (self.add_page, self.remove_page, self.replace_page):
            for signal in page.changed_signals:
                signal.connect(self._update_example)
        self.tabs.currentChanged.connect(self._update_example)
        self._update_example()

    def _current_page(self):
        return self.tabs.currentWidget()

    def _update_example(self, *_args):
        page = self._current_page()
        page.update_enabled()
        new_name = page.operation().transform(self.example_name, 0)
        self.after_label.setText(new_name if new_name else "(empty name)")

    def operation(self) -> Operation:
        """The operation as currently configured"""
        return self._current_page().operation()
