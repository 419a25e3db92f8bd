"""
scan_files.py - File Scanning Module

Lists the files of a single folder (non-recursive) and turns them into
FileEntry objects
"""

from pathlib import Path
from typing import List, Optional, Callable
import logging

from .errors import FolderNotFoundError
from .models_fs import FileEntry, RenameOptions, PathLike
from .sort_rules import sort_entries

logger = logging.getLogger(__name__)


def list_files(folder: PathLike, include_hidden: bool = True) -> List[Path]:
    """
    List absolute paths of the regular files directly inside folder

    Args:
        folder: Target directory
        include_hidden: Whether to include hidden files

    Returns:
        File paths in name order

    Raises:
        FolderNotFoundError: folder is missing or not a directory
    """
    if folder is None or (isinstance(folder, str) and not folder.strip()):
        raise FolderNotFoundError(folder)

    directory = Path(folder).resolve()
    if not directory.is_dir():
        raise FolderNotFoundError(directory)

    results: List[Path] = []
    for item in directory.iterdir():
        # Only process files, not directories
        if not item.is_file():
            continue

        # Skip hidden files
        if not include_hidden and item.name.startswith('.'):
            continue

        results.append(item)

    results.sort(key=lambda p: p.name.lower())
    return results


def scan_directory(
    directory: PathLike,
    options: Optional[RenameOptions] = None,
    file_filter: Optional[Callable[[Path], bool]] = None
) -> List[FileEntry]:
    """
    Scan single directory (non-recursive) into file entries

    Args:
        directory: Target directory
        options: Rename options (hidden files, sort order)
        file_filter: Additional file filter function

    Returns:
        Entries in scan order
    """
    if options is None:
        options = RenameOptions()

    entries: List[FileEntry] = []
    for item in list_files(directory, include_hidden=options.include_hidden):
        # Additional filter
        if file_filter and not file_filter(item):
            continue

        try:
            entries.append(FileEntry.from_path(item))
        except OSError as e:
            # Skip inaccessible files
            logger.warning(f"Cannot access {item}: {e}")

    logger.debug(f"Scanned {directory}: {len(entries)} files")
    return sort_entries(entries, options.sort_by, options.reverse)
