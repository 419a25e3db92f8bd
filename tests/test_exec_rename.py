"""Tests for rename execution."""

import json
from unittest.mock import MagicMock

import pytest

from core import (
    FileEntry, RenameOptions, ErrorPolicy, execute_commit, move_file, check_rename_op,
)
from core.exec_rename import CommitResult, RenameRecord


@pytest.fixture
def entries(make_files):
    """Three real files with pending new names."""
    paths = make_files("a.txt", "b.txt", "c.txt")
    return [FileEntry(p, new_name=f"{p.stem}_new") for p in paths]


class TestMoveFile:
    """Tests for move_file."""

    def test_moves_file(self, make_files, tmp_path):
        (src,) = make_files("a.txt")

        move_file(src, tmp_path / "b.txt")

        assert (tmp_path / "b.txt").read_text(encoding="utf-8") == "a.txt"
        assert not src.exists()

    def test_refuses_to_overwrite(self, make_files):
        src, dst = make_files("a.txt", "b.txt")

        with pytest.raises(FileExistsError):
            move_file(src, dst)

        assert src.exists()
        assert dst.read_text(encoding="utf-8") == "b.txt"

    def test_same_path_is_noop(self, make_files):
        (src,) = make_files("a.txt")

        move_file(src, src)

        assert src.exists()

    def test_missing_source_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            move_file(tmp_path / "missing.txt", tmp_path / "b.txt")


class TestExecuteCommit:
    """Tests for execute_commit."""

    def test_renames_in_order(self, entries, tmp_path):
        result = execute_commit(entries)

        assert result.ok
        assert [r.dst.name for r in result.success] == ["a_new.txt", "b_new.txt", "c_new.txt"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a_new.txt", "b_new.txt", "c_new.txt"]

    def test_mover_called_in_scan_order(self, entries, tmp_path):
        mover = MagicMock()

        execute_commit(entries, mover=mover)

        assert [c.args[1].name for c in mover.call_args_list] == ["a_new.txt", "b_new.txt", "c_new.txt"]

    def test_unchanged_names_are_skipped(self, entries):
        entries[1].new_name = entries[1].current_name
        mover = MagicMock()

        result = execute_commit(entries, mover=mover)

        assert mover.call_count == 2
        assert result.skipped_count == 1

    def test_unselected_entries_are_ignored(self, entries):
        entries[0].selected = False
        mover = MagicMock()

        result = execute_commit(entries, mover=mover)

        assert mover.call_count == 2
        assert result.success_count == 2

    def test_dry_run_moves_nothing(self, entries, tmp_path):
        mover = MagicMock()

        result = execute_commit(entries, RenameOptions(dry_run=True), mover=mover)

        mover.assert_not_called()
        assert result.dry_run
        assert result.success_count == 3
        assert entries[0].current_name == "a"

    def test_stop_policy_keeps_earlier_renames(self, entries, tmp_path):
        mover = MagicMock(side_effect=[None, PermissionError(13, "denied"), None])

        result = execute_commit(entries, RenameOptions(error_policy=ErrorPolicy.STOP), mover=mover)

        assert mover.call_count == 2
        assert result.success_count == 1
        assert result.failed_count == 1
        assert result.failed[0].error == "Permission denied"
        assert result.stopped
        assert entries[0].current_name == "a_new"
        assert entries[1].current_name == "b"
        assert entries[2].current_name == "c"

    def test_continue_policy_tries_every_file(self, entries):
        mover = MagicMock(side_effect=[None, PermissionError(13, "denied"), None])

        result = execute_commit(entries, RenameOptions(error_policy=ErrorPolicy.CONTINUE), mover=mover)

        assert mover.call_count == 3
        assert result.success_count == 2
        assert result.failed_count == 1
        assert not result.stopped
        assert not result.ok

    def test_existing_target_fails(self, entries, make_files):
        make_files("b_new.txt")

        result = execute_commit(entries, RenameOptions(error_policy=ErrorPolicy.CONTINUE))

        assert result.failed_count == 1
        assert result.failed[0].src.name == "b.txt"
        assert result.failed[0].error == "Target already exists"
        assert entries[1].path.exists()

    def test_missing_source_fails_before_move(self, entries):
        entries[0].path.unlink()
        mover = MagicMock()

        result = execute_commit(entries, RenameOptions(error_policy=ErrorPolicy.CONTINUE), mover=mover)

        assert result.failed_count == 1
        assert "does not exist" in result.failed[0].error
        assert mover.call_count == 2

    def test_progress_callback(self, entries):
        progress = MagicMock()

        execute_commit(entries, RenameOptions(dry_run=True), progress_callback=progress)

        progress.assert_any_call(3, 3, "[Preview] c.txt -> c_new.txt")

    def test_log_dir_writes_json(self, entries, tmp_path):
        log_dir = tmp_path / "logs"

        execute_commit(entries, RenameOptions(log_dir=log_dir))

        (log_file,) = list(log_dir.glob("rename_result_*.json"))
        data = json.loads(log_file.read_text(encoding="utf-8"))
        assert data["success_count"] == 3
        assert data["failed_count"] == 0
        assert data["success"][0]["dst"].endswith("a_new.txt")

    def test_dry_run_writes_no_log(self, entries, tmp_path):
        log_dir = tmp_path / "logs"

        execute_commit(entries, RenameOptions(dry_run=True, log_dir=log_dir))

        assert not log_dir.exists()


class TestCommitResult:
    """Tests for CommitResult."""

    def test_summary_lists_failures(self, tmp_path):
        entry = FileEntry(tmp_path / "a.txt", new_name="b")
        record = RenameRecord(entry=entry, src=entry.path, dst=entry.target_path, error="Permission denied")
        result = CommitResult(failed=[record], stopped=True)

        summary = result.summary()

        assert "Failed: 1" in summary
        assert "a.txt -> b.txt: Permission denied" in summary
        assert "Stopped" in summary


class TestCheckRenameOp:
    """Tests for check_rename_op."""

    def test_valid(self, make_files, tmp_path):
        (src,) = make_files("a.txt")

        assert check_rename_op(src, tmp_path / "b.txt") == (True, None)

    def test_other_folder_is_rejected(self, make_files, tmp_path):
        (src,) = make_files("a.txt")

        valid, error = check_rename_op(src, tmp_path / "sub" / "b.txt")

        assert not valid
        assert "another folder" in error

    def test_invalid_name_is_rejected(self, make_files, tmp_path):
        (src,) = make_files("a.txt")

        valid, error = check_rename_op(src, tmp_path / "b?.txt")

        assert not valid
        assert "invalid character" in error

    def test_directory_source_is_rejected(self, tmp_path):
        (tmp_path / "dir").mkdir()

        valid, _ = check_rename_op(tmp_path / "dir", tmp_path / "b")

        assert not valid
