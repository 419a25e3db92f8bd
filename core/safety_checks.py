"""
safety_checks.py - Safety Check Module

Checks run on a single file right before it is moved:
- the source is still a regular file in its folder
- the new file name is valid on every platform we support
- the folder allows renames
"""

from pathlib import Path
from typing import Tuple, Optional
import os
import platform
import re

WINDOWS_MAX_PATH = 260
MAX_NAME_LENGTH = 255

# Characters Windows refuses in file names, plus NUL and other control characters
_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

CheckResult = Tuple[bool, Optional[str]]


def is_valid_filename(name: str) -> CheckResult:
    """
    Check that name (with its extension) can be used as a file name

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    match = _INVALID_CHARS.search(name)
    if match:
        return False, f"Filename contains invalid character: {match.group()!r}"

    if name[-1] in " .":
        return False, "Filename cannot end with space or dot"

    device = name.split(".", 1)[0].upper()
    if device in _RESERVED_NAMES:
        return False, f"Filename is a Windows reserved name: {device}"

    if len(name) > MAX_NAME_LENGTH:
        return False, f"Filename exceeds {MAX_NAME_LENGTH} characters"

    return True, None


def check_writable(path: Path) -> CheckResult:
    """Check that the folder holding path lets us rename entries in it"""
    folder = path.parent
    if not folder.is_dir():
        return False, f"Parent directory does not exist: {folder}"
    if not os.access(folder, os.W_OK | os.X_OK):
        return False, f"Directory is not writable: {folder}"
    return True, None


def check_path_length(path: Path, max_length: int = WINDOWS_MAX_PATH) -> CheckResult:
    length = len(str(path))
    if length > max_length:
        return False, f"Path length ({length}) exceeds limit ({max_length}): {path}"
    return True, None


def check_rename_op(src: Path, dst: Path) -> CheckResult:
    """
    Check a single move of src to dst

    A target that already exists is not reported here; move_file refuses it.

    Args:
        src: Current path of the file
        dst: Path with the new name

    Returns:
        (is_safe, error_reason)
    """
    if not src.exists():
        return False, f"Source file does not exist: {src}"
    if not src.is_file():
        return False, f"Source path is not a file: {src}"

    # Renaming never moves a file to another folder
    if dst.parent != src.parent:
        return False, f"New name would move the file to another folder: {dst.name}"

    checks = [is_valid_filename(dst.name)]
    if platform.system() == "Windows":
        checks.append(check_path_length(dst))
    checks.append(check_writable(src))

    for valid, error in checks:
        if not valid:
            return False, error
    return True, None
