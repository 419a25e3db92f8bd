"""
models_fs.py - Core Data Structure Definitions

Contains:
- TextLocation / TextOccurrence: where and which match an operation acts on
- AddMode / RemoveMode: what an operation adds or removes
- FileEntry: File information and its pending new name
- RenameOptions: Rename options configuration
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Union
from enum import Enum
import logging
import os

from .errors import InvalidArgumentError, InvalidOperationError

logger = logging.getLogger(__name__)


class TextLocation(Enum):
    """Position in a name where text is added or removed"""
    START = "start"
    END = "end"
    INDEX = "index"      # Character offset, see the operation's offset field

    @property
    def label(self) -> str:
        return self.name.capitalize()


class TextOccurrence(Enum):
    """Which match of a substring search to act on"""
    FIRST = "first"
    LAST = "last"
    ALL = "all"

    @property
    def label(self) -> str:
        return self.name.capitalize()


class AddMode(Enum):
    """What an add operation inserts"""
    LITERAL_STRING = "string"
    INCREMENTING_NUMBER = "number"   # index + start value


class RemoveMode(Enum):
    """What a remove operation removes"""
    LITERAL_STRING = "string"
    CHARACTER_COUNT = "count"


class SortKey(Enum):
    """Sort key enumeration"""
    NAME = "name"        # Filename
    MTIME = "mtime"      # Modification time
    SIZE = "size"        # File size
    CTIME = "ctime"      # Creation time (varies across platforms)


class ErrorPolicy(Enum):
    """What a commit does after a rename fails"""
    STOP = "stop"
    CONTINUE = "continue"


PathLike = Union[str, Path]


@dataclass
class FileEntry:
    """One file found in the target folder"""
    path: Path                      # Full path, made absolute once
    new_name: Optional[str] = None  # Pending name (without suffix)
    selected: bool = True           # Participates in the batch
    size: int = 0                   # File size (bytes)
    mtime: float = 0.0              # Modification time (timestamp)
    ctime: float = 0.0              # Creation/change time (timestamp)

    def __post_init__(self):
        # Path("") is the current directory, not a file
        if self.path is None or self.path == Path("") or (isinstance(self.path, str) and not self.path.strip()):
            raise InvalidArgumentError("File path cannot be empty")
        try:
            self.path = Path(os.path.abspath(self.path))
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"The file path provided ({self.path}) is not valid: {e}") from e
        if self.new_name is None:
            self.new_name = self.current_name

    @classmethod
    def from_path(cls, p: PathLike) -> "FileEntry":
        """Create FileEntry from a path, reading its stat information"""
        entry = cls(path=p)
        stat = entry.path.stat()
        entry.size = stat.st_size
        entry.mtime = stat.st_mtime
        entry.ctime = stat.st_ctime
        return entry

    @property
    def current_name(self) -> str:
        """Filename on disk without its suffix"""
        return self.path.stem

    @property
    def extension(self) -> str:
        """Suffix including the leading dot (empty if none)"""
        return self.path.suffix

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def target_path(self) -> Path:
        """Path the file is moved to by rename()"""
        return self.path.parent / f"{self.new_name}{self.extension}"

    @property
    def is_changed(self) -> bool:
        return self.new_name != self.current_name

    def rename(self, mover: Optional[Callable[[Path, Path], None]] = None) -> Path:
        """
        Move the file on disk to its new name

        Args:
            mover: Function performing the move (defaults to move_file)

        Returns:
            The new path
        """
        if not self.new_name:
            raise InvalidOperationError(f"The new name for file {self.current_name} is empty")

        if mover is None:
            from .exec_rename import move_file
            mover = move_file

        new_path = self.target_path
        mover(self.path, new_path)
        logger.info(f"Renamed {self.file_name} -> {new_path.name}")

        self.path = new_path
        self.new_name = self.current_name
        return new_path


@dataclass
class RenameOptions:
    """Rename options configuration"""
    # Scanning options
    include_hidden: bool = False    # Whether to include hidden files
    sort_by: SortKey = SortKey.NAME
    reverse: bool = False

    # Execution options
    error_policy: ErrorPolicy = ErrorPolicy.STOP
    dry_run: bool = False           # Preview only, do not actually execute
    log_dir: Optional[Path] = None  # Where to save execution logs (None disables)


def normalize_for_comparison(name: str) -> str:
    """Key under which two file names count as the same (case insensitive)"""
    return name.lower()
