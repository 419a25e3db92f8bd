"""
batch_engine.py - Batch Rename Engine

Responsibilities:
- Holding the ordered operation list and the file entries of one folder
- Recomputing every selected entry's new name after each change
- Deciding whether the batch can be renamed (non-empty, unique names)
- Committing the renames
"""

from pathlib import Path
from typing import Dict, List, Optional, Callable
import logging

from .errors import FolderNotFoundError, InvalidOperationError, DuplicateNameError
from .models_fs import FileEntry, RenameOptions, PathLike, normalize_for_comparison
from .operations import Operation, apply_operations, describe_operation
from .safety_checks import is_valid_filename
from .scan_files import scan_directory
from .exec_rename import execute_commit, CommitResult, Mover

logger = logging.getLogger(__name__)


class RenameBatch:
    """Ordered operations plus the files they are applied to"""

    def __init__(self, entries: Optional[List[FileEntry]] = None,
                 operations: Optional[List[Operation]] = None,
                 options: Optional[RenameOptions] = None):
        self.options = options or RenameOptions()
        self.folder: Optional[Path] = None
        self._entries: List[FileEntry] = list(entries or [])
        self._operations: List[Operation] = list(operations or [])
        self.can_rename = False
        self.recompute()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def entries(self) -> List[FileEntry]:
        """Entries in scan order (copy of the list, entries are shared)"""
        return list(self._entries)

    @property
    def operations(self) -> List[Operation]:
        return list(self._operations)

    @property
    def selected_entries(self) -> List[FileEntry]:
        return [e for e in self._entries if e.selected]

    def descriptions(self) -> List[str]:
        return [describe_operation(op) for op in self._operations]

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def load_folder(self, folder: PathLike) -> List[FileEntry]:
        """
        Replace the entries with the files of folder

        A missing folder leaves the batch with no entries.
        """
        self.folder = Path(folder) if folder else None
        try:
            entries = scan_directory(folder, self.options)
        except FolderNotFoundError as e:
            logger.warning(str(e))
            entries = []
        self.set_entries(entries)
        return self.entries

    def refresh(self) -> List[FileEntry]:
        """Rescan the current folder, e.g. after files changed on disk"""
        if self.folder is None:
            self.set_entries([])
            return []
        return self.load_folder(self.folder)

    def set_entries(self, entries: List[FileEntry]) -> None:
        self._entries = list(entries)
        self.recompute()

    def set_selected(self, position: int, selected: bool = True) -> None:
        self._entries[position].selected = selected
        self.recompute()

    def select_all(self, selected: bool = True) -> None:
        for entry in self._entries:
            entry.selected = selected
        self.recompute()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def add_operation(self, op: Operation) -> None:
        self._operations.append(op)
        self.recompute()

    def insert_operation(self, position: int, op: Operation) -> None:
        self._operations.insert(position, op)
        self.recompute()

    def replace_operation(self, position: int, op: Operation) -> None:
        """Swap in an edited snapshot of the operation at position"""
        self._operations[position] = op
        self.recompute()

    def remove_operation(self, position: int) -> Operation:
        op = self._operations.pop(position)
        self.recompute()
        return op

    def move_operation_up(self, position: int) -> int:
        """Returns the operation's new position"""
        if position < 1 or position >= len(self._operations):
            return position
        ops = self._operations
        ops[position - 1], ops[position] = ops[position], ops[position - 1]
        self.recompute()
        return position - 1

    def move_operation_down(self, position: int) -> int:
        """Returns the operation's new position"""
        if position < 0 or position >= len(self._operations) - 1:
            return position
        ops = self._operations
        ops[position + 1], ops[position] = ops[position], ops[position + 1]
        self.recompute()
        return position + 1

    def clear_operations(self) -> None:
        self._operations.clear()
        self.recompute()

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def recompute(self) -> bool:
        """
        Compute the new name of every selected entry and update can_rename

        Only selected entries consume an index, starting at 0.
        """
        index = 0
        for entry in self._entries:
            if not entry.selected:
                continue
            entry.new_name = apply_operations(self._operations, entry.current_name, index)
            index += 1

        self.can_rename = not self.problems()
        return self.can_rename

    def problems(self) -> List[str]:
        """Reasons the batch cannot be renamed (empty when it can)"""
        problems = []
        if not self._operations:
            problems.append("No rename operations")

        selected = self.selected_entries
        if not selected:
            problems.append("No files selected")

        seen: Dict[str, FileEntry] = {}
        for entry in selected:
            if not entry.new_name:
                problems.append(f"New name for {entry.file_name} is empty")
                continue
            key = normalize_for_comparison(entry.new_name)
            if key in seen:
                problems.append(f"Name collision on '{entry.new_name}' ({seen[key].file_name}, {entry.file_name})")
            else:
                seen[key] = entry
        return problems

    def example_name(self, position: Optional[int] = None, upto: Optional[int] = None) -> str:
        """
        Name of an entry after the first `upto` operations, using index 0

        Args:
            position: Entry position (default: first selected entry)
            upto: Number of operations to apply (default: all)

        Returns:
            The example name, or "" when there is no entry to use
        """
        if position is None or not (0 <= position < len(self._entries)) \
                or not self._entries[position].selected:
            selected = self.selected_entries
            if not selected:
                return ""
            entry = selected[0]
        else:
            entry = self._entries[position]

        ops = self._operations if upto is None else self._operations[:upto]
        return apply_operations(ops, entry.current_name, 0)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def validate_for_commit(self) -> None:
        """
        Check the new names right before renaming

        Raises:
            InvalidOperationError: a new name is empty or not a valid file name
            DuplicateNameError: two new names collide, or a new name collides
                with a file that is not part of the batch
        """
        seen = set()
        targets = set()
        for entry in self.selected_entries:
            if not entry.new_name:
                raise InvalidOperationError(f"The new name for file {entry.current_name} is empty")
            target = entry.target_path
            if target.parent != entry.path.parent:
                raise InvalidOperationError(
                    f"The new name for file {entry.file_name} would move it to another folder: {entry.new_name}"
                )
            valid, error = is_valid_filename(target.name)
            if not valid:
                raise InvalidOperationError(f"The new name for file {entry.file_name} is not valid: {error}")
            key = normalize_for_comparison(entry.new_name)
            if key in seen:
                raise DuplicateNameError(
                    entry.new_name,
                    f"The new name for file {entry.current_name} matches another file's new name: "
                    f"{entry.new_name}. The new names must be unique (case insensitive) to perform any renames."
                )
            seen.add(key)
            targets.add(normalize_for_comparison(target.name))

        for entry in self._entries:
            if entry.selected:
                continue
            if normalize_for_comparison(entry.file_name) in targets:
                raise DuplicateNameError(
                    entry.current_name,
                    f"A new name matches the unselected file {entry.file_name}"
                )

    def commit(self, mover: Optional[Mover] = None,
               progress_callback: Optional[Callable[[int, int, str], None]] = None) -> CommitResult:
        """
        Rename the selected files

        Raises:
            InvalidOperationError: can_rename is False
            DuplicateNameError: names collide (nothing is renamed)
        """
        if not self.can_rename:
            raise InvalidOperationError("The batch cannot be renamed: " + "; ".join(self.problems()))

        self.validate_for_commit()

        logger.info(f"Renaming {len(self.selected_entries)} files")
        result = execute_commit(self._entries, self.options, mover=mover,
                                progress_callback=progress_callback)

        # Renamed entries keep new_name == current_name until the next recompute
        self.can_rename = not self.problems()
        return result
