"""Tests for child folder enumeration."""

from __future__ import annotations

import os
import stat

import pytest
from conftest import FakeEntry

from foldersize.core.lister import PathNotFoundError, is_junction, list_child_dirs

JUNCTION_ATTRIBUTES = stat.FILE_ATTRIBUTE_REPARSE_POINT | stat.FILE_ATTRIBUTE_DIRECTORY


class TestListChildDirs:
    def test_lists_only_directories(self, data_root):
        children = list_child_dirs(data_root)
        assert sorted(p.name for p in children) == ["a", "b"]

    def test_includes_hidden_folders(self, tmp_path):
        (tmp_path / ".hidden").mkdir()
        (tmp_path / "visible").mkdir()
        assert {p.name for p in list_child_dirs(tmp_path)} == {".hidden", "visible"}

    def test_empty_root(self, tmp_path):
        assert list_child_dirs(tmp_path) == []

    def test_returns_full_paths(self, data_root):
        assert all(p.parent == data_root for p in list_child_dirs(data_root))

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc_info:
            list_child_dirs(tmp_path / "nope")
        assert exc_info.value.path == tmp_path / "nope"

    def test_file_root_raises(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("hi")
        with pytest.raises(PathNotFoundError):
            list_child_dirs(f)

    def test_not_found_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_child_dirs(tmp_path / "nope")

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs POSIX symlinks")
    def test_symlinked_folders_skipped(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(real, target_is_directory=True)
        assert list_child_dirs(root) == []

    def test_junctions_skipped_without_is_junction(self, tmp_path, fake_scandir):
        fake_scandir[str(tmp_path)] = [
            FakeEntry(tmp_path / "Documents and Settings", is_dir=True, attributes=JUNCTION_ATTRIBUTES),
            FakeEntry(tmp_path / "Users", is_dir=True, attributes=stat.FILE_ATTRIBUTE_DIRECTORY),
        ]
        assert list_child_dirs(tmp_path) == [tmp_path / "Users"]


class TestIsJunction:
    def test_reparse_point_attribute(self, tmp_path):
        entry = FakeEntry(tmp_path / "link", is_dir=True, attributes=JUNCTION_ATTRIBUTES)
        assert is_junction(entry)

    def test_plain_directory(self, tmp_path):
        entry = FakeEntry(tmp_path / "dir", is_dir=True, attributes=stat.FILE_ATTRIBUTE_DIRECTORY)
        assert not is_junction(entry)

    def test_prefers_native_check(self, tmp_path):
        entry = FakeEntry(tmp_path / "dir", is_dir=True, attributes=JUNCTION_ATTRIBUTES)
        entry.is_junction = lambda: False
        assert not is_junction(entry)

    def test_stat_error_is_not_junction(self, tmp_path):
        entry = FakeEntry(tmp_path / "gone", is_dir=True)

        def fail(follow_symlinks=True):
            raise FileNotFoundError("gone")

        entry.stat = fail
        assert not is_junction(entry)
