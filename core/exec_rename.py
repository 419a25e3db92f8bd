"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Moving a single file without overwriting another one
- Running the renames of a batch one at a time, in scan order
- Exception handling and logging
- dry_run support
"""

from pathlib import Path
from typing import List, Optional, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
import errno
import json
import logging
import os

from .models_fs import FileEntry, RenameOptions, ErrorPolicy
from .safety_checks import check_rename_op

logger = logging.getLogger(__name__)

Mover = Callable[[Path, Path], None]


@dataclass
class RenameRecord:
    """One file handled by a commit"""
    entry: FileEntry
    src: Path
    dst: Path
    error: str = ""


@dataclass
class CommitResult:
    """Rename execution result"""
    success: List[RenameRecord] = field(default_factory=list)
    failed: List[RenameRecord] = field(default_factory=list)
    skipped: List[RenameRecord] = field(default_factory=list)   # Unchanged names
    dry_run: bool = False
    stopped: bool = False   # Aborted by ErrorPolicy.STOP

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            "Execution Result:" if not self.dry_run else "Execution Result (preview):",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.failed_count}",
            f"  - Unchanged: {self.skipped_count}",
        ]
        if self.failed:
            lines.append("Failure Details:")
            for record in self.failed[:10]:  # Show at most 10
                lines.append(f"  - {record.src.name} -> {record.dst.name}: {record.error}")
            if len(self.failed) > 10:
                lines.append(f"  ... and {len(self.failed) - 10} more failures")
        if self.stopped:
            lines.append("Stopped after the first failure, remaining files were not renamed")
        return "\n".join(lines)


def move_file(src: Path, dst: Path) -> None:
    """
    Rename src to dst, refusing to replace a different existing file

    Raises:
        FileExistsError: dst already exists
        OSError: the OS refused the rename
    """
    src, dst = Path(src), Path(dst)
    if src == dst:
        return

    if dst.exists() and not _same_file(src, dst):
        raise FileExistsError(errno.EEXIST, "Target already exists", str(dst))

    os.rename(src, dst)


def _same_file(a: Path, b: Path) -> bool:
    # Case-only renames on case-insensitive filesystems
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _describe_os_error(e: OSError) -> str:
    if isinstance(e, FileExistsError):
        return "Target already exists"
    if isinstance(e, PermissionError):
        return "Permission denied"
    if isinstance(e, FileNotFoundError):
        return "Source file does not exist"
    if e.errno == errno.ENAMETOOLONG:
        return "File name too long"
    return e.strerror or str(e)


def execute_commit(
    entries: Iterable[FileEntry],
    options: Optional[RenameOptions] = None,
    mover: Optional[Mover] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None
) -> CommitResult:
    """
    Rename every selected entry to its new name, one at a time, in order

    Names must have been validated by the caller. Successful renames are not
    undone when a later one fails.

    Args:
        entries: Entries in scan order (unselected ones are ignored)
        options: Rename options (error policy, dry run, log directory)
        mover: Function performing a single move (defaults to move_file)
        progress_callback: Progress callback (current, total, message)

    Returns:
        Execution result
    """
    if options is None:
        options = RenameOptions()
    if mover is None:
        mover = move_file

    result = CommitResult(dry_run=options.dry_run)
    selected = [e for e in entries if e.selected]
    total = len(selected)

    for i, entry in enumerate(selected):
        record = RenameRecord(entry=entry, src=entry.path, dst=entry.target_path)

        if progress_callback:
            prefix = "[Preview] " if options.dry_run else ""
            progress_callback(i + 1, total, f"{prefix}{record.src.name} -> {record.dst.name}")

        if record.src == record.dst:
            result.skipped.append(record)
            continue

        if options.dry_run:
            result.success.append(record)
            continue

        valid, error = check_rename_op(record.src, record.dst)
        if valid:
            try:
                entry.rename(mover)
            except OSError as e:
                error = _describe_os_error(e)
                logger.debug(f"Rename of {record.src} failed", exc_info=True)

        if error:
            record.error = error
            result.failed.append(record)
            logger.error(f"Unable to rename '{record.src.name}': {error}")
            if options.error_policy == ErrorPolicy.STOP:
                result.stopped = i + 1 < total
                break
        else:
            result.success.append(record)

    # Save execution result log
    if options.log_dir and not options.dry_run and (result.success or result.failed):
        save_result_log(result, options.log_dir)

    return result


def save_result_log(result: CommitResult, log_dir: Path) -> Path:
    """Save execution result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"rename_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "success_count": result.success_count,
        "failed_count": result.failed_count,
        "skipped_count": result.skipped_count,
        "success": [
            {"src": str(r.src), "dst": str(r.dst)}
            for r in result.success
        ],
        "failed": [
            {"src": str(r.src), "dst": str(r.dst), "error": r.error}
            for r in result.failed
        ],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.info(f"Execution log written to {log_file}")
    return log_file
