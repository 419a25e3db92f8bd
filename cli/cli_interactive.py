"""
cli_interactive.py - Interactive CLI

Provides a menu-style interface to build an operation pipeline, preview
the new names and rename
"""

import os
from pathlib import Path
from typing import Optional, List

from core import (
    RenameBatch, RenameToolError,
    AddOperation, RemoveOperation, ReplaceOperation, Operation,
    AddMode, RemoveMode, TextLocation, TextOccurrence,
)


def clear_screen():
    """Clear screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_header(title: str):
    """Print header"""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def pause():
    input("Press Enter to return...")


def input_directory(prompt: str = "Please enter directory path") -> Optional[Path]:
    """Input and validate directory"""
    while True:
        path_str = input(f"{prompt} (q to return): ").strip()
        if path_str.lower() == 'q':
            return None

        path = Path(path_str).expanduser().resolve()
        if path.is_dir():
            return path
        else:
            print(f"Error: Directory does not exist: {path}")


def input_choice(prompt: str, choices: List[str], default: Optional[str] = None) -> Optional[str]:
    """Input choice"""
    choices_str = "/".join(choices)
    default_str = f" [{default}]" if default else ""

    while True:
        value = input(f"{prompt} ({choices_str}){default_str}: ").strip()
        if not value and default:
            return default
        if value.lower() == 'q':
            return None
        if value in choices:
            return value
        print(f"Invalid choice, please enter: {choices_str}")


def input_bool(prompt: str, default: bool = False) -> bool:
    """Input boolean value"""
    default_str = "Y/n" if default else "y/N"
    value = input(f"{prompt} ({default_str}): ").strip().lower()
    if not value:
        return default
    return value == 'y'


def input_int(prompt: str, default: int = 0, min_val: Optional[int] = 0) -> int:
    """Input integer"""
    while True:
        value = input(f"{prompt} [{default}]: ").strip()
        if not value:
            return default
        try:
            num = int(value)
            if min_val is not None and num < min_val:
                print(f"Value cannot be less than {min_val}")
                continue
            return num
        except ValueError:
            print("Please enter a valid integer")


def input_text(prompt: str, default: str = "") -> str:
    """Input text, keeping surrounding spaces (they can matter in names)"""
    default_str = f" [{default}]" if default else ""
    value = input(f"{prompt}{default_str}: ")
    return value if value else default


def input_position(batch_size: int, prompt: str) -> Optional[int]:
    """Input a 1-based list position, returns 0-based or None"""
    if batch_size == 0:
        print("The list is empty")
        return None
    choices = [str(i) for i in range(1, batch_size + 1)]
    choice = input_choice(prompt, choices)
    return None if choice is None else int(choice) - 1


def _choose_enum(prompt: str, enum_cls, default):
    values = [m.value for m in enum_cls]
    choice = input_choice(prompt, values, default.value)
    return default if choice is None else enum_cls(choice)


def prompt_operation(kind: str, current: Optional[Operation] = None) -> Operation:
    """Ask for the settings of an operation, current values are the defaults"""
    if kind == "add":
        op = current if isinstance(current, AddOperation) else AddOperation()
        counter = input_bool("Add an incrementing number instead of text",
                             default=op.mode == AddMode.INCREMENTING_NUMBER)
        if counter:
            op = op.with_changes(mode=AddMode.INCREMENTING_NUMBER,
                                 increment_start=input_int("Start value", op.increment_start, min_val=None))
        else:
            op = op.with_changes(mode=AddMode.LITERAL_STRING, text=input_text("Text to add", op.text))
        location = _choose_enum("Where", TextLocation, op.location)
        offset = input_int("Character offset", op.offset) if location == TextLocation.INDEX else op.offset
        return op.with_changes(location=location, offset=offset)

    if kind == "remove":
        op = current if isinstance(current, RemoveOperation) else RemoveOperation()
        by_count = input_bool("Remove a number of characters instead of text",
                              default=op.mode == RemoveMode.CHARACTER_COUNT)
        if by_count:
            count = input_int("Number of characters", op.count)
            location = _choose_enum("From", TextLocation, op.location)
            offset = input_int("Character offset", op.offset) if location == TextLocation.INDEX else op.offset
            return op.with_changes(mode=RemoveMode.CHARACTER_COUNT, count=count,
                                   location=location, offset=offset)
        text = input_text("Text to remove", op.text)
        occurrence = _choose_enum("Which occurrence", TextOccurrence, op.occurrence)
        return op.with_changes(mode=RemoveMode.LITERAL_STRING, text=text, occurrence=occurrence)

    op = current if isinstance(current, ReplaceOperation) else ReplaceOperation()
    text = input_text("Text to replace", op.text)
    replacement = input_text("Replace with (leave empty to delete)", op.replacement)
    ignore_case = input_bool("Ignore case", default=op.ignore_case)
    occurrence = _choose_enum("Which occurrence", TextOccurrence, op.occurrence)
    return op.with_changes(text=text, replacement=replacement,
                           ignore_case=ignore_case, occurrence=occurrence)


def _kind_of(op: Operation) -> str:
    if isinstance(op, AddOperation):
        return "add"
    if isinstance(op, RemoveOperation):
        return "remove"
    return "replace"


def print_operations(batch: RenameBatch):
    if not batch.operations:
        print("  (no operations)")
    for i, description in enumerate(batch.descriptions(), 1):
        print(f"  {i}. {description}")


def print_files(batch: RenameBatch, limit: int = 30):
    entries = batch.entries
    print("-" * 70)
    for i, entry in enumerate(entries[:limit], 1):
        mark = "x" if entry.selected else " "
        new_name = f"{entry.new_name}{entry.extension}" if entry.selected else ""
        print(f"  {i:>3}. [{mark}] {entry.file_name:<30} {new_name}")
    if len(entries) > limit:
        print(f"  ... and {len(entries) - limit} more files")
    print("-" * 70)


def menu_add_operation(batch: RenameBatch):
    print_header("Add Operation")
    print(f"Example name: {batch.example_name()}")
    kind = input_choice("Operation", ["add", "remove", "replace"], "add")
    if kind is None:
        return
    op = prompt_operation(kind)
    batch.add_operation(op)
    print(f"\nAdded: {op.describe()}")
    print(f"Example name now: {batch.example_name()}")
    pause()


def menu_edit_operation(batch: RenameBatch):
    print_header("Edit Operation")
    print_operations(batch)
    position = input_position(len(batch.operations), "Operation to edit")
    if position is None:
        return
    print(f"Example name before this operation: {batch.example_name(upto=position)}")
    current = batch.operations[position]
    edited = prompt_operation(_kind_of(current), current)
    batch.replace_operation(position, edited)
    print(f"\nNow: {edited.describe()}")
    pause()


def menu_remove_operation(batch: RenameBatch):
    print_operations(batch)
    position = input_position(len(batch.operations), "Operation to remove")
    if position is not None:
        removed = batch.remove_operation(position)
        print(f"Removed: {removed.describe()}")
        pause()


def menu_move_operation(batch: RenameBatch):
    print_operations(batch)
    position = input_position(len(batch.operations), "Operation to move")
    if position is None:
        return
    direction = input_choice("Direction", ["up", "down"], "up")
    if direction == "up":
        batch.move_operation_up(position)
    elif direction == "down":
        batch.move_operation_down(position)
    print_operations(batch)
    pause()


def menu_toggle_files(batch: RenameBatch):
    print_header("Select Files")
    print_files(batch, limit=len(batch.entries))
    value = input("File numbers to toggle (space separated, 'all' or 'none'): ").strip().lower()
    if value == "all":
        batch.select_all(True)
    elif value == "none":
        batch.select_all(False)
    else:
        entries = batch.entries
        for token in value.split():
            if token.isdigit() and 1 <= int(token) <= len(entries):
                i = int(token) - 1
                batch.set_selected(i, not entries[i].selected)
            else:
                print(f"Ignored: {token}")
    print_files(batch)
    pause()


def menu_preview(batch: RenameBatch):
    print_header("Preview")
    print_operations(batch)
    print()
    print_files(batch)
    if batch.can_rename:
        print("Ready to rename")
    else:
        print("Cannot rename:")
        for problem in batch.problems():
            print(f"  - {problem}")
    pause()


def menu_rename(batch: RenameBatch):
    print_header("Rename")
    if not batch.can_rename:
        print("Cannot rename:")
        for problem in batch.problems():
            print(f"  - {problem}")
        pause()
        return

    print_files(batch)
    count = sum(1 for e in batch.selected_entries if e.is_changed)
    if not input_bool(f"Rename {count} files", default=False):
        print("Cancelled")
        pause()
        return

    print("\nExecuting...")
    try:
        result = batch.commit()
    except RenameToolError as e:
        print(f"Error: {e}")
    else:
        print()
        print(result.summary())
    pause()


def interactive_mode() -> int:
    """Interactive mode main loop"""
    batch = RenameBatch()

    while True:
        clear_screen()
        print_header("File Renamer")

        folder = batch.folder or "(none)"
        print(f"Folder: {folder}  ({len(batch.selected_entries)} of {len(batch.entries)} files selected)")
        print("Operations:")
        print_operations(batch)
        print()
        print("Please select function:")
        print()
        print("  1. Open folder")
        print("  2. Add operation")
        print("  3. Edit operation")
        print("  4. Remove operation")
        print("  5. Move operation")
        print("  6. Clear operations")
        print("  7. Select files")
        print("  8. Preview")
        print("  9. Rename")
        print("  r. Refresh folder")
        print()
        print("  q. Exit")
        print()

        choice = input("Please select: ").strip().lower()

        if choice == 'q':
            print("Goodbye!")
            return 0
        elif choice == '1':
            directory = input_directory("Please enter folder")
            if directory is not None:
                batch.load_folder(directory)
        elif choice == '2':
            menu_add_operation(batch)
        elif choice == '3':
            menu_edit_operation(batch)
        elif choice == '4':
            menu_remove_operation(batch)
        elif choice == '5':
            menu_move_operation(batch)
        elif choice == '6':
            batch.clear_operations()
        elif choice == '7':
            menu_toggle_files(batch)
        elif choice == '8':
            menu_preview(batch)
        elif choice == '9':
            menu_rename(batch)
        elif choice == 'r':
            batch.refresh()
        else:
            print("Invalid choice")
            input("Press Enter to continue...")


if __name__ == "__main__":
    raise SystemExit(interactive_mode())
