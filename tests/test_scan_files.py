"""Tests for folder scanning and sorting."""

import os

import pytest

from core import (
    FileEntry, FolderNotFoundError, RenameOptions, SortKey, list_files, scan_directory, sort_entries,
)


class TestListFiles:
    """Tests for list_files."""

    def test_lists_files_in_name_order(self, make_files, tmp_path):
        make_files("b.txt", "A.txt", "c.txt")

        files = list_files(tmp_path)

        assert [p.name for p in files] == ["A.txt", "b.txt", "c.txt"]
        assert all(p.is_absolute() for p in files)

    def test_skips_directories(self, make_files, tmp_path):
        make_files("a.txt")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "nested.txt").write_text("x", encoding="utf-8")

        files = list_files(tmp_path)

        assert [p.name for p in files] == ["a.txt"]

    def test_hidden_files(self, make_files, tmp_path):
        make_files("a.txt", ".hidden")

        assert [p.name for p in list_files(tmp_path)] == [".hidden", "a.txt"]
        assert [p.name for p in list_files(tmp_path, include_hidden=False)] == ["a.txt"]

    def test_empty_folder(self, tmp_path):
        assert list_files(tmp_path) == []

    def test_missing_folder_raises(self, tmp_path):
        missing = tmp_path / "missing"

        with pytest.raises(FolderNotFoundError) as exc_info:
            list_files(missing)

        assert exc_info.value.folder == missing.resolve()

    @pytest.mark.parametrize("folder", [None, ""])
    def test_empty_folder_argument_raises(self, folder):
        with pytest.raises(FolderNotFoundError):
            list_files(folder)

    def test_file_instead_of_folder_raises(self, make_files):
        (path,) = make_files("a.txt")

        with pytest.raises(FolderNotFoundError):
            list_files(path)


class TestScanDirectory:
    """Tests for scan_directory."""

    def test_scan_builds_entries(self, make_files, tmp_path):
        make_files("photo.jpg", "notes.txt")

        entries = scan_directory(tmp_path)

        assert [e.file_name for e in entries] == ["notes.txt", "photo.jpg"]
        assert all(e.selected for e in entries)
        assert entries[1].new_name == "photo"

    def test_scan_excludes_hidden_by_default(self, make_files, tmp_path):
        make_files("a.txt", ".hidden")

        assert [e.file_name for e in scan_directory(tmp_path)] == ["a.txt"]
        assert len(scan_directory(tmp_path, RenameOptions(include_hidden=True))) == 2

    def test_scan_reverse(self, make_files, tmp_path):
        make_files("a.txt", "b.txt")

        entries = scan_directory(tmp_path, RenameOptions(reverse=True))

        assert [e.file_name for e in entries] == ["b.txt", "a.txt"]

    def test_scan_with_filter(self, make_files, tmp_path):
        make_files("a.txt", "b.jpg")

        entries = scan_directory(tmp_path, file_filter=lambda p: p.suffix == ".jpg")

        assert [e.file_name for e in entries] == ["b.jpg"]

    def test_scan_by_mtime(self, make_files, tmp_path):
        old, new = make_files("z_old.txt", "a_new.txt")
        os.utime(old, (1_000_000, 1_000_000))
        os.utime(new, (2_000_000, 2_000_000))

        entries = scan_directory(tmp_path, RenameOptions(sort_by=SortKey.MTIME))

        assert [e.file_name for e in entries] == ["z_old.txt", "a_new.txt"]


class TestSortEntries:
    """Tests for sort_entries."""

    def test_sort_by_size_then_name(self, tmp_path):
        entries = [
            FileEntry(tmp_path / "b.txt", size=10),
            FileEntry(tmp_path / "a.txt", size=10),
            FileEntry(tmp_path / "c.txt", size=1),
        ]

        result = sort_entries(entries, SortKey.SIZE)

        assert [e.file_name for e in result] == ["c.txt", "a.txt", "b.txt"]
        assert result is not entries

    def test_sort_by_name_ignores_case(self, tmp_path):
        entries = [FileEntry(tmp_path / "b.txt"), FileEntry(tmp_path / "A.txt")]

        assert [e.file_name for e in sort_entries(entries)] == ["A.txt", "b.txt"]
