"""
core - File Renamer Core Module

Provides rename operations, the batch engine that previews and validates
new names, folder scanning and rename execution.
"""

from .errors import (
    RenameToolError,
    OperationConfigError,
    InvalidArgumentError,
    FolderNotFoundError,
    InvalidOperationError,
    DuplicateNameError,
)

from .models_fs import (
    FileEntry,
    RenameOptions,
    TextLocation,
    TextOccurrence,
    AddMode,
    RemoveMode,
    SortKey,
    ErrorPolicy,
)

from .operations import (
    Operation,
    AddOperation,
    RemoveOperation,
    ReplaceOperation,
    apply_operations,
    describe_operation,
    transform_name,
)

from .scan_files import (
    list_files,
    scan_directory,
)

from .sort_rules import (
    sort_entries,
    get_sort_key,
)

from .batch_engine import RenameBatch

from .exec_rename import (
    execute_commit,
    move_file,
    CommitResult,
    RenameRecord,
)

from .safety_checks import (
    check_writable,
    check_path_length,
    check_rename_op,
)

__all__ = [
    # Errors
    "RenameToolError",
    "OperationConfigError",
    "InvalidArgumentError",
    "FolderNotFoundError",
    "InvalidOperationError",
    "DuplicateNameError",

    # Data models
    "FileEntry",
    "RenameOptions",
    "TextLocation",
    "TextOccurrence",
    "AddMode",
    "RemoveMode",
    "SortKey",
    "ErrorPolicy",

    # Operations
    "Operation",
    "AddOperation",
    "RemoveOperation",
    "ReplaceOperation",
    "apply_operations",
    "describe_operation",
    "transform_name",

    # Scanning
    "list_files",
    "scan_directory",

    # Sorting
    "sort_entries",
    "get_sort_key",

    # Batch
    "RenameBatch",

    # Execution
    "execute_commit",
    "move_file",
    "CommitResult",
    "RenameRecord",

    # Safety checks
    "check_writable",
    "check_path_length",
    "check_rename_op",
]
