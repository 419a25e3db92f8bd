"""
sort_rules.py - Sorting Rules Module

Decides the scan order of file entries, which is also the order in which
incrementing numbers are handed out
"""

from typing import List, Callable
from .models_fs import FileEntry, SortKey


def get_sort_key(sort_by: SortKey) -> Callable[[FileEntry], tuple]:
    """
    Get sort key function

    Args:
        sort_by: Sorting method

    Returns:
        Sort key function
    """
    if sort_by == SortKey.MTIME:
        return lambda f: (f.mtime, f.file_name.lower())
    elif sort_by == SortKey.SIZE:
        return lambda f: (f.size, f.file_name.lower())
    elif sort_by == SortKey.CTIME:
        return lambda f: (f.ctime, f.file_name.lower())
    else:
        return lambda f: (f.file_name.lower(),)


def sort_entries(
    entries: List[FileEntry],
    sort_by: SortKey = SortKey.NAME,
    reverse: bool = False
) -> List[FileEntry]:
    """
    Sort file entries

    Args:
        entries: File entries
        sort_by: Sorting method
        reverse: Whether to sort in reverse

    Returns:
        Sorted entries (new list)
    """
    return sorted(entries, key=get_sort_key(sort_by), reverse=reverse)
