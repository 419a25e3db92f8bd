"""
errors.py - Exception Definitions

Contains:
- OperationConfigError: invalid operation parameters reached a transform
- InvalidArgumentError: bad constructor input
- FolderNotFoundError: scan target is missing
- InvalidOperationError: engine used in a state that forbids the call
- DuplicateNameError: two files would end up with the same name
"""


class RenameToolError(Exception):
    """Base class for all errors raised by the core"""


class OperationConfigError(RenameToolError):
    """An operation carries a value it cannot act on (programming error)"""


class InvalidArgumentError(RenameToolError, ValueError):
    """Invalid input given at construction time"""


class FolderNotFoundError(RenameToolError, ValueError):
    """Folder does not exist or is not a directory"""

    def __init__(self, folder):
        super().__init__(f"Directory does not exist: {folder}")
        self.folder = folder


class InvalidOperationError(RenameToolError, RuntimeError):
    """Call is not allowed in the current state"""


class DuplicateNameError(InvalidOperationError):
    """A new name collides with another file's name"""

    def __init__(self, name: str, message: str = ""):
        super().__init__(message or f"New name is not unique (case insensitive): {name}")
        self.name = name
