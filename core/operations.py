"""
operations.py - Rename Operations

Each operation is an immutable snapshot of its parameters. Editing an
operation means building a new snapshot (see with_changes) and swapping it
into the pipeline.

Contains:
- AddOperation: add a literal string or an incrementing number
- RemoveOperation: remove a literal string or a number of characters
- ReplaceOperation: replace a string with another
- apply_operations: run a pipeline of operations over one name
"""

from dataclasses import dataclass, replace
from typing import Iterable, Union

from .errors import OperationConfigError
from .models_fs import TextLocation, TextOccurrence, AddMode, RemoveMode
from .text_match import find_first, find_last, splice, replace_text, replace_text_once


@dataclass(frozen=True)
class AddOperation:
    """Add text to the name"""
    text: str = ""
    mode: AddMode = AddMode.LITERAL_STRING
    increment_start: int = 0
    location: TextLocation = TextLocation.START
    offset: int = 0                 # Only used with TextLocation.INDEX

    def with_changes(self, **changes) -> "AddOperation":
        return replace(self, **changes)

    def describe(self) -> str:
        if self.mode == AddMode.INCREMENTING_NUMBER:
            what = f"Incrementing from {self.increment_start}"
        else:
            what = f"'{self.text}'"

        extra = f" {self.offset}" if self.location == TextLocation.INDEX else ""
        return f"Add {what} at {_label(self.location)}{extra}"

    def transform(self, name: str, index: int) -> str:
        if self.mode == AddMode.LITERAL_STRING:
            text_to_add = self.text
        elif self.mode == AddMode.INCREMENTING_NUMBER:
            text_to_add = str(index + self.increment_start)
        else:
            raise OperationConfigError(f"Unknown add mode: {self.mode!r}")

        if self.location == TextLocation.START:
            return text_to_add + name
        if self.location == TextLocation.END:
            return name + text_to_add
        if self.location == TextLocation.INDEX:
            # Past the end falls back to appending
            if self.offset >= len(name):
                return name + text_to_add
            start = max(self.offset, 0)
            return splice(name, start, start, text_to_add)
        raise OperationConfigError(f"Unknown text location: {self.location!r}")


@dataclass(frozen=True)
class RemoveOperation:
    """Remove text from the name"""
    mode: RemoveMode = RemoveMode.LITERAL_STRING
    text: str = ""                  # LITERAL_STRING only
    occurrence: TextOccurrence = TextOccurrence.FIRST
    count: int = 1                  # CHARACTER_COUNT only
    location: TextLocation = TextLocation.START
    offset: int = 0

    def with_changes(self, **changes) -> "RemoveOperation":
        return replace(self, **changes)

    def describe(self) -> str:
        if self.mode == RemoveMode.LITERAL_STRING:
            return f"Remove {_label(self.occurrence)} '{self.text}'"

        if self.location == TextLocation.START:
            where = "Start"
        elif self.location == TextLocation.END:
            where = "End"
        else:
            where = f"Offset {self.offset}"
        return f"Remove {self.count} Characters from {where}"

    def transform(self, name: str, index: int) -> str:
        if self.mode == RemoveMode.LITERAL_STRING:
            return self._remove_string(name)
        if self.mode == RemoveMode.CHARACTER_COUNT:
            return self._remove_count(name)
        raise OperationConfigError(f"Unknown remove mode: {self.mode!r}")

    def _remove_string(self, name: str) -> str:
        if self.occurrence == TextOccurrence.ALL:
            return replace_text(name, self.text, "")
        if self.occurrence not in (TextOccurrence.FIRST, TextOccurrence.LAST):
            raise OperationConfigError(f"Unknown occurrence: {self.occurrence!r}")
        if not self.text:
            return name

        if self.occurrence == TextOccurrence.FIRST:
            match = find_first(name, self.text)
        else:
            match = find_last(name, self.text)
        if match is None:
            return name
        return splice(name, match.start(), match.end())

    def _remove_count(self, name: str) -> str:
        count = max(self.count, 0)
        if count > len(name):
            return ""

        if self.location == TextLocation.START:
            return name[count:]
        if self.location == TextLocation.END:
            return name[:len(name) - count]
        if self.location == TextLocation.INDEX:
            # An offset past the end behaves like END
            if self.offset >= len(name):
                return name[:len(name) - count]
            start = max(self.offset, 0)
            return splice(name, start, start + count)
        raise OperationConfigError(f"Unknown text location: {self.location!r}")


@dataclass(frozen=True)
class ReplaceOperation:
    """Replace text in the name"""
    text: str = ""
    replacement: str = ""
    ignore_case: bool = False
    occurrence: TextOccurrence = TextOccurrence.FIRST

    def with_changes(self, **changes) -> "ReplaceOperation":
        return replace(self, **changes)

    def describe(self) -> str:
        return f"Replace {_label(self.occurrence)} '{self.text}' with '{self.replacement}'"

    def transform(self, name: str, index: int) -> str:
        if not self.text:
            return name

        case_sensitive = not self.ignore_case
        if self.occurrence == TextOccurrence.ALL:
            return replace_text(name, self.text, self.replacement, case_sensitive)
        if self.occurrence == TextOccurrence.FIRST:
            return replace_text_once(name, self.text, self.replacement, case_sensitive)
        if self.occurrence == TextOccurrence.LAST:
            return replace_text_once(name, self.text, self.replacement, case_sensitive, last=True)
        raise OperationConfigError(f"Unknown occurrence: {self.occurrence!r}")


Operation = Union[AddOperation, RemoveOperation, ReplaceOperation]
OPERATION_TYPES = (AddOperation, RemoveOperation, ReplaceOperation)


def _label(value) -> str:
    try:
        return value.label
    except AttributeError:
        raise OperationConfigError(f"Unknown option value: {value!r}") from None


def _check(op) -> None:
    if not isinstance(op, OPERATION_TYPES):
        raise OperationConfigError(f"Unknown operation type: {type(op).__name__}")


def describe_operation(op: Operation) -> str:
    """Human readable summary of an operation"""
    _check(op)
    return op.describe()


def transform_name(op: Operation, name: str, index: int) -> str:
    """Apply a single operation to a name"""
    _check(op)
    return op.transform(name, index)


def apply_operations(operations: Iterable[Operation], name: str, index: int) -> str:
    """
    Run name through every operation in order

    Args:
        operations: Ordered operations (empty means no change)
        name: Name without suffix
        index: Position of the file among the selected files

    Returns:
        The new name
    """
    for op in operations:
        name = transform_name(op, name, index)
    return name
