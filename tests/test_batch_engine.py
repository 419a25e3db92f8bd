"""Tests for RenameBatch."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core import (
    AddOperation, RemoveOperation, ReplaceOperation, FileEntry, RenameBatch, RenameOptions,
    AddMode, RemoveMode, TextLocation, TextOccurrence, ErrorPolicy,
    DuplicateNameError, InvalidOperationError,
)

COUNTER = AddOperation(mode=AddMode.INCREMENTING_NUMBER, increment_start=5, location=TextLocation.START)
CLEAR = RemoveOperation(mode=RemoveMode.CHARACTER_COUNT, count=99, location=TextLocation.START)


def _entries(folder: Path, *names: str):
    return [FileEntry(folder / name) for name in names]


@pytest.fixture
def batch(make_files) -> RenameBatch:
    """Batch over three real files, no operations."""
    paths = make_files("a.txt", "b.txt", "c.txt")
    return RenameBatch(entries=[FileEntry.from_path(p) for p in paths])


class TestRecompute:
    """Tests for new name computation."""

    def test_new_batch_cannot_rename(self):
        batch = RenameBatch()

        assert batch.can_rename is False
        assert batch.entries == []
        assert batch.operations == []

    def test_empty_pipeline_cannot_rename(self, batch):
        assert batch.can_rename is False
        assert [e.new_name for e in batch.entries] == ["a", "b", "c"]
        assert "No rename operations" in batch.problems()

    def test_adding_operation_recomputes(self, batch):
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))

        assert [e.new_name for e in batch.entries] == ["a_x", "b_x", "c_x"]
        assert batch.can_rename is True
        assert batch.problems() == []

    def test_index_counts_selected_entries_only(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "x.txt", "y.txt", "z.txt"))
        batch.set_selected(1, False)

        batch.add_operation(CLEAR)
        batch.add_operation(COUNTER)

        names = [e.new_name for e in batch.entries]
        assert names == ["5", "y", "6"]
        assert batch.can_rename is True

    def test_unselected_entries_keep_their_name(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "x.txt", "y.txt"),
                            operations=[AddOperation(text="_v2", location=TextLocation.END)])
        batch.set_selected(0, False)

        assert batch.entries[0].new_name == "x"
        assert batch.entries[1].new_name == "y_v2"

    def test_case_insensitive_duplicates_block_rename(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "one.txt", "two.txt", "three.txt"))
        batch.add_operation(ReplaceOperation(text="one", replacement="a"))
        batch.add_operation(ReplaceOperation(text="two", replacement="A"))
        batch.add_operation(ReplaceOperation(text="three", replacement="b"))

        assert [e.new_name for e in batch.entries] == ["a", "A", "b"]
        assert batch.can_rename is False
        assert any("collision" in p for p in batch.problems())

        # Changing the third name alone leaves the collision in place
        batch.replace_operation(2, ReplaceOperation(text="three", replacement="c"))

        assert [e.new_name for e in batch.entries] == ["a", "A", "c"]
        assert batch.can_rename is False

    def test_unique_names_allow_rename(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "one.txt", "two.txt"))
        batch.add_operation(ReplaceOperation(text="one", replacement="a"))
        batch.add_operation(ReplaceOperation(text="two", replacement="b"))

        assert batch.can_rename is True

    def test_empty_new_name_blocks_rename(self, batch):
        batch.add_operation(CLEAR)

        assert [e.new_name for e in batch.entries] == ["", "", ""]
        assert batch.can_rename is False

    def test_nothing_selected_cannot_rename(self, batch):
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))

        batch.select_all(False)

        assert batch.can_rename is False
        assert "No files selected" in batch.problems()

    def test_reselecting_restores_rename(self, batch):
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))
        batch.select_all(False)

        batch.select_all(True)

        assert batch.can_rename is True

    def test_entries_returns_copy(self, batch):
        batch.entries.clear()

        assert len(batch.entries) == 3


class TestOperationList:
    """Tests for editing the ordered operation list."""

    def test_insert_and_remove(self, batch):
        first = AddOperation(text="1", location=TextLocation.END)
        second = AddOperation(text="2", location=TextLocation.END)
        batch.add_operation(second)

        batch.insert_operation(0, first)
        assert batch.operations == [first, second]
        assert batch.entries[0].new_name == "a12"

        removed = batch.remove_operation(0)
        assert removed is first
        assert batch.entries[0].new_name == "a2"

    def test_replace_operation_swaps_snapshot(self, batch):
        op = AddOperation(text="_x", location=TextLocation.END)
        batch.add_operation(op)

        batch.replace_operation(0, op.with_changes(text="_y"))

        assert batch.entries[0].new_name == "a_y"
        assert op.text == "_x"

    def test_move_up_and_down(self, batch):
        add = AddOperation(text="ab", location=TextLocation.END)
        remove = RemoveOperation(text="a", occurrence=TextOccurrence.ALL)
        batch.add_operation(add)
        batch.add_operation(remove)
        assert batch.entries[0].new_name == "b"

        assert batch.move_operation_up(1) == 0
        assert batch.operations == [remove, add]
        assert batch.entries[0].new_name == "ab"

        assert batch.move_operation_down(0) == 1
        assert batch.operations == [add, remove]

    def test_move_out_of_range_is_noop(self, batch):
        op = AddOperation(text="x")
        batch.add_operation(op)

        assert batch.move_operation_up(0) == 0
        assert batch.move_operation_down(0) == 0
        assert batch.operations == [op]

    def test_descriptions(self, batch):
        batch.add_operation(ReplaceOperation(text="IMG", replacement="photo"))

        assert batch.descriptions() == ["Replace First 'IMG' with 'photo'"]

    def test_clear_operations(self, batch):
        batch.add_operation(AddOperation(text="x"))

        batch.clear_operations()

        assert batch.can_rename is False
        assert batch.entries[0].new_name == "a"


class TestExampleName:
    """Tests for example_name."""

    def test_example_uses_first_selected_entry(self, batch):
        batch.add_operation(COUNTER)
        batch.set_selected(0, False)

        assert batch.example_name() == "5b"

    def test_example_upto(self, batch):
        batch.add_operation(AddOperation(text="1", location=TextLocation.END))
        batch.add_operation(AddOperation(text="2", location=TextLocation.END))

        assert batch.example_name(0, upto=1) == "a1"
        assert batch.example_name(2) == "c12"

    def test_example_without_entries(self):
        assert RenameBatch().example_name() == ""


class TestLoadFolder:
    """Tests for loading entries from disk."""

    def test_load_folder(self, make_files, tmp_path):
        make_files("b.txt", "a.txt")
        batch = RenameBatch()

        entries = batch.load_folder(tmp_path)

        assert [e.file_name for e in entries] == ["a.txt", "b.txt"]
        assert batch.folder == tmp_path

    def test_missing_folder_gives_no_entries(self, tmp_path):
        batch = RenameBatch()

        entries = batch.load_folder(tmp_path / "missing")

        assert entries == []
        assert batch.can_rename is False

    def test_refresh_sees_new_files(self, make_files, tmp_path):
        batch = RenameBatch()
        batch.load_folder(tmp_path)
        make_files("new.txt")

        entries = batch.refresh()

        assert [e.file_name for e in entries] == ["new.txt"]


class TestCommit:
    """Tests for RenameBatch.commit."""

    def test_commit_renames_files(self, batch, tmp_path):
        batch.add_operation(AddOperation(text="_v2", location=TextLocation.END))

        result = batch.commit()

        assert result.success_count == 3
        assert result.ok
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a_v2.txt", "b_v2.txt", "c_v2.txt"]
        entry = batch.entries[0]
        assert entry.path == tmp_path / "a_v2.txt"
        assert entry.current_name == "a_v2"
        assert entry.new_name == entry.current_name

    def test_commit_does_not_recompute(self, batch):
        batch.add_operation(AddOperation(text="_v2", location=TextLocation.END))
        batch.commit()

        assert [e.new_name for e in batch.entries] == ["a_v2", "b_v2", "c_v2"]
        assert batch.can_rename is True

        mover = MagicMock()
        result = batch.commit(mover)
        mover.assert_not_called()
        assert result.skipped_count == 3

    def test_commit_with_duplicates_moves_nothing(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "one.txt", "two.txt"))
        batch.add_operation(ReplaceOperation(text="one", replacement="x"))
        batch.add_operation(ReplaceOperation(text="two", replacement="X"))
        # Bypass the preview check to exercise commit-time validation
        batch.can_rename = True
        mover = MagicMock()

        with pytest.raises(DuplicateNameError) as exc_info:
            batch.commit(mover)

        mover.assert_not_called()
        assert exc_info.value.name == "X"

    def test_commit_with_invalid_name_moves_nothing(self, batch, tmp_path):
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))
        batch.add_operation(ReplaceOperation(text="b", replacement="b?"))
        assert batch.can_rename is True
        mover = MagicMock()

        with pytest.raises(InvalidOperationError, match="b.txt"):
            batch.commit(mover)

        mover.assert_not_called()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt", "b.txt", "c.txt"]

    def test_commit_into_other_folder_moves_nothing(self, batch):
        batch.add_operation(AddOperation(text="sub/", location=TextLocation.START))
        mover = MagicMock()

        with pytest.raises(InvalidOperationError, match="another folder"):
            batch.commit(mover)

        mover.assert_not_called()

    def test_commit_when_cannot_rename_raises(self, batch):
        mover = MagicMock()

        with pytest.raises(InvalidOperationError):
            batch.commit(mover)
        mover.assert_not_called()

    def test_commit_rejects_collision_with_unselected_file(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "a.txt", "b.txt"))
        batch.set_selected(1, False)
        batch.add_operation(ReplaceOperation(text="a", replacement="B"))
        mover = MagicMock()

        with pytest.raises(DuplicateNameError):
            batch.commit(mover)
        mover.assert_not_called()

    def test_collision_with_unselected_file_of_other_extension_is_allowed(self, make_files, tmp_path):
        batch = RenameBatch(entries=[FileEntry(p) for p in make_files("a.txt", "b.jpg")])
        batch.set_selected(1, False)
        batch.add_operation(ReplaceOperation(text="a", replacement="b"))
        mover = MagicMock()

        result = batch.commit(mover)

        mover.assert_called_once_with(tmp_path / "a.txt", tmp_path / "b.txt")
        assert result.success_count == 1

    def test_commit_stop_policy(self, tmp_path):
        batch = RenameBatch(entries=_entries(tmp_path, "a.txt", "b.txt", "c.txt"),
                            options=RenameOptions(error_policy=ErrorPolicy.STOP))
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))

        # None of the files exist on disk, so the first one fails
        result = batch.commit()

        assert result.failed_count == 1
        assert result.success_count == 0
        assert result.stopped

    def test_commit_unselected_entries_are_not_moved(self, batch, tmp_path):
        batch.set_selected(1, False)
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))

        batch.commit()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["a_x.txt", "b.txt", "c_x.txt"]

    def test_progress_callback(self, batch):
        batch.add_operation(AddOperation(text="_x", location=TextLocation.END))
        progress = MagicMock()

        batch.commit(progress_callback=progress)

        assert progress.call_count == 3
        progress.assert_any_call(1, 3, "a.txt -> a_x.txt")
