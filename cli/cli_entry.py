"""
cli_entry.py - CLI Entry Point

Supports:
- Command-line argument mode
- Interactive mode
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core import (
    RenameBatch, RenameOptions, SortKey, ErrorPolicy, FileEntry,
    RenameToolError, list_files, FolderNotFoundError,
)
from core.log_setup import setup_logging

from .op_parser import parse_operations, OperationSyntaxError, OPERATION_HELP
from .cli_interactive import interactive_mode

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 20


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="file-renamer",
        description="Batch rename the files of a folder with a pipeline of operations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Operations (--op, applied in the given order):
{OPERATION_HELP}
Examples:
  # Interactive mode
  file-renamer

  # List files
  file-renamer list ./photos

  # Preview new names
  file-renamer preview ./photos --op "replace text=IMG with=holiday" --op "add counter=1 at=end"

  # Rename
  file-renamer rename ./photos --op "remove count=4 at=start" --yes
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    parser.add_argument("--log-file", type=str, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("directory", type=str, help="Target directory (non-recursive)")
    common.add_argument("--include-hidden", action="store_true", help="Include hidden files")
    common.add_argument("--sort", type=str, default="name",
                        choices=[k.value for k in SortKey], help="Scan order")
    common.add_argument("--reverse", "-r", action="store_true", help="Reverse scan order")

    # Options shared by preview and rename
    pipeline = argparse.ArgumentParser(add_help=False)
    pipeline.add_argument("--op", "-o", dest="ops", action="append", default=[], required=True,
                          metavar="OPERATION", help="Rename operation (repeatable, applied in order)")
    pipeline.add_argument("--exclude", "-x", action="append", default=[], metavar="FILENAME",
                          help="Leave this file out of the batch (repeatable)")

    # list subcommand
    subparsers.add_parser("list", parents=[common], help="List files")

    # preview subcommand
    subparsers.add_parser("preview", parents=[common, pipeline], help="Preview new names")

    # rename subcommand
    rename_parser = subparsers.add_parser("rename", parents=[common, pipeline], help="Rename files")
    rename_parser.add_argument("--dry-run", "-d", action="store_true", help="Preview only, do not execute")
    rename_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    rename_parser.add_argument("--continue-on-error", action="store_true",
                               help="Keep renaming after a file fails")
    rename_parser.add_argument("--log-dir", type=str, help="Save an execution log (JSON) in this directory")

    return parser


def options_from_args(args) -> RenameOptions:
    """Build rename options from parsed arguments"""
    options = RenameOptions(
        include_hidden=args.include_hidden,
        sort_by=SortKey(args.sort),
        reverse=args.reverse,
    )
    if getattr(args, "continue_on_error", False):
        options.error_policy = ErrorPolicy.CONTINUE
    if getattr(args, "dry_run", False):
        options.dry_run = True
    if getattr(args, "log_dir", None):
        options.log_dir = Path(args.log_dir)
    return options


def build_batch(args) -> Optional[RenameBatch]:
    """Scan the directory and set up the pipeline, None on error"""
    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        print(f"Error: Directory does not exist: {directory}")
        return None

    try:
        operations = parse_operations(args.ops)
    except OperationSyntaxError as e:
        print(f"Error: Invalid operation: {e}")
        return None

    batch = RenameBatch(options=options_from_args(args))
    batch.load_folder(directory)

    excluded = {name.lower() for name in args.exclude}
    for i, entry in enumerate(batch.entries):
        if entry.file_name.lower() in excluded:
            batch.set_selected(i, False)

    for op in operations:
        batch.add_operation(op)

    logger.debug(f"Loaded {len(batch.entries)} files and {len(operations)} operations")
    return batch


def print_preview(batch: RenameBatch, limit: int = PREVIEW_LIMIT) -> None:
    """Show the pipeline and the new names"""
    print("Operations:")
    for i, description in enumerate(batch.descriptions(), 1):
        print(f"  {i}. {description}")
    print()

    entries = batch.entries
    print(f"Files ({len(batch.selected_entries)} of {len(entries)} selected):")
    print("-" * 80)
    for entry in entries[:limit]:
        print(format_entry(entry))
    if len(entries) > limit:
        print(f"  ... and {len(entries) - limit} more files")
    print("-" * 80)

    if not batch.can_rename:
        print("Cannot rename:")
        for problem in batch.problems():
            print(f"  - {problem}")


def format_entry(entry: FileEntry) -> str:
    if not entry.selected:
        return f"  [ ] {entry.file_name:<40} (excluded)"
    new_file_name = f"{entry.new_name}{entry.extension}"
    marker = "->" if entry.is_changed else "=="
    return f"  [x] {entry.file_name:<40} {marker} {new_file_name}"


def cmd_list(args) -> int:
    """Handle list command"""
    try:
        files = list_files(args.directory, include_hidden=args.include_hidden)
    except FolderNotFoundError as e:
        print(f"Error: {e}")
        return 1

    if not files:
        print("No files found")
        return 0

    print(f"Found {len(files)} files:")
    print("-" * 80)
    for path in files:
        size_kb = path.stat().st_size / 1024
        print(f"  {path.name:<55} {size_kb:>10.1f} KB")
    print("-" * 80)
    return 0


def cmd_preview(args) -> int:
    """Handle preview command"""
    batch = build_batch(args)
    if batch is None:
        return 2

    print_preview(batch)
    return 0 if batch.can_rename else 1


def cmd_rename(args) -> int:
    """Handle rename command"""
    batch = build_batch(args)
    if batch is None:
        return 2

    print_preview(batch)
    if not batch.can_rename:
        return 1

    # Confirmation
    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    # Execute
    print("\nExecuting...")
    try:
        result = batch.commit()
    except RenameToolError as e:
        print(f"Error: {e}")
        return 1

    print(result.summary())
    return 0 if result.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    if args.command is None:
        # No subcommand, enter interactive mode
        return interactive_mode()

    # Handle subcommands
    if args.command == "list":
        return cmd_list(args)
    elif args.command == "preview":
        return cmd_preview(args)
    elif args.command == "rename":
        return cmd_rename(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
