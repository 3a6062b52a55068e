"""Tests for directory scanner."""

import os
from contextlib import nullcontext
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from projdash.scanner import (
    IGNORE_NAMES,
    ScanFailure,
    get_directory_size,
    ignored_names,
    list_project_dirs,
)


def set_mtime(path: Path, mtime: int) -> None:
    os.utime(path, (mtime, mtime))


class FakeEntry:
    """Stand-in for os.DirEntry whose stat() can be made to fail."""

    def __init__(self, parent: Path, name: str, size: int = 10, fail: bool = False):
        self.name = name
        self.path = str(parent / name)
        self.size = size
        self.fail = fail

    def is_dir(self, follow_symlinks=True):
        return False

    def stat(self):
        if self.fail:
            raise OSError(5, "Input/output error", self.path)
        return SimpleNamespace(st_size=self.size)


class TestIgnoredNames:
    def test_includes_fixed_names(self):
        names = ignored_names()
        assert IGNORE_NAMES <= names
        assert ".git" in names
        assert "node_modules" in names

    def test_adds_own_files(self):
        names = ignored_names("_dashboard_cache.json", "index.html")
        assert "_dashboard_cache.json" in names
        assert "index.html" in names

    def test_skips_empty_names(self):
        assert ignored_names("") == IGNORE_NAMES


class TestListProjectDirs:
    def test_lists_directories_only(self, tmp_path):
        (tmp_path / "alpha").mkdir()
        (tmp_path / "beta").mkdir()
        (tmp_path / "notes.txt").write_text("not a project")

        names = [name for name, _ in list_project_dirs(tmp_path)]
        assert names == ["alpha", "beta"]

    def test_sorted_by_name(self, tmp_path):
        for name in ["zeta", "alpha", "mid"]:
            (tmp_path / name).mkdir()

        names = [name for name, _ in list_project_dirs(tmp_path)]
        assert names == ["alpha", "mid", "zeta"]

    def test_reports_integer_mtime(self, tmp_path):
        project = tmp_path / "project"
        project.mkdir()
        set_mtime(project, 1700000000)

        assert list_project_dirs(tmp_path) == [("project", 1700000000)]

    def test_skips_ignored_names(self, tmp_path):
        for name in [".git", ".vscode", "node_modules", "xampp", "project"]:
            (tmp_path / name).mkdir()

        names = [name for name, _ in list_project_dirs(tmp_path)]
        assert names == ["project"]

    def test_skips_directory_named_like_cache_file(self, tmp_path):
        """A directory that shares the cache file's name is never listed."""
        (tmp_path / "_dashboard_cache.json").mkdir()
        (tmp_path / "project").mkdir()

        ignore = ignored_names("_dashboard_cache.json", "index.html")
        names = [name for name, _ in list_project_dirs(tmp_path, ignore)]
        assert names == ["project"]

    def test_keeps_other_hidden_directories(self, tmp_path):
        (tmp_path / ".config").mkdir()

        names = [name for name, _ in list_project_dirs(tmp_path)]
        assert names == [".config"]

    def test_follows_directory_symlinks(self, tmp_path):
        target = tmp_path / "real"
        target.mkdir()
        (tmp_path / "link").symlink_to(target, target_is_directory=True)

        names = [name for name, _ in list_project_dirs(tmp_path)]
        assert names == ["link", "real"]

    def test_empty_root(self, tmp_path):
        assert list_project_dirs(tmp_path) == []

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ScanFailure):
            list_project_dirs(tmp_path / "missing")

    def test_file_root_raises(self, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(ScanFailure):
            list_project_dirs(file_path)

    def test_permission_error_raises(self, tmp_path):
        with patch("projdash.scanner.os.scandir", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(ScanFailure, match="Permission denied"):
                list_project_dirs(tmp_path)


class TestGetDirectorySize:
    def test_empty_directory(self, tmp_path):
        result = get_directory_size(tmp_path)
        assert result.size_bytes == 0
        assert result.ok

    def test_directory_with_files(self, tmp_path):
        (tmp_path / "a.txt").write_text("Hello, World!")
        (tmp_path / "b.bin").write_bytes(b"\0" * 100)

        result = get_directory_size(tmp_path)
        assert result.size_bytes == len("Hello, World!") + 100
        assert result.ok

    def test_nested_directories(self, tmp_path):
        deep = tmp_path / "a" / "b" / "c"
        deep.mkdir(parents=True)
        (deep / "file.txt").write_text("test")
        (tmp_path / "a" / "top.txt").write_text("12345")

        assert get_directory_size(tmp_path).size_bytes == 9

    def test_does_not_descend_directory_symlinks(self, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"\0" * 5000)

        project = tmp_path / "project"
        project.mkdir()
        (project / "small.txt").write_text("abc")
        (project / "shared").symlink_to(outside, target_is_directory=True)

        result = get_directory_size(project)
        assert result.ok
        assert result.size_bytes < 5000

    def test_unreadable_file_is_skipped(self, tmp_path):
        """Files failing the readability check contribute nothing."""
        (tmp_path / "readable.txt").write_text("12345")
        (tmp_path / "secret.txt").write_text("1234567890")

        real_access = os.access

        def fake_access(path, mode):
            if str(path).endswith("secret.txt"):
                return False
            return real_access(path, mode)

        with patch("projdash.scanner.os.access", side_effect=fake_access):
            result = get_directory_size(tmp_path)

        assert result.ok
        assert result.size_bytes == 5

    def test_broken_symlink_is_skipped(self, tmp_path):
        (tmp_path / "data.txt").write_text("123")
        (tmp_path / "dangling").symlink_to(tmp_path / "gone.txt")

        result = get_directory_size(tmp_path)
        assert result.ok
        assert result.size_bytes == 3

    def test_unlistable_subdirectory_zeroes_whole_size(self, tmp_path):
        """One failure anywhere collapses the total, not just that subtree."""
        (tmp_path / "big.bin").write_bytes(b"\0" * 10_000)
        locked = tmp_path / "locked"
        locked.mkdir()
        (locked / "inner.txt").write_text("hidden")

        real_scandir = os.scandir

        def fake_scandir(path):
            if str(path) == str(locked):
                raise PermissionError(13, "Permission denied", str(locked))
            return real_scandir(path)

        with patch("projdash.scanner.os.scandir", side_effect=fake_scandir):
            result = get_directory_size(tmp_path)

        assert result.size_bytes == 0
        assert not result.ok
        assert "locked" in result.error
        assert "Permission denied" in result.error

    def test_stat_failure_zeroes_whole_size(self, tmp_path):
        entries = [FakeEntry(tmp_path, "one.txt"), FakeEntry(tmp_path, "two.txt", fail=True)]

        with patch("projdash.scanner.os.scandir", return_value=nullcontext(entries)):
            with patch("projdash.scanner.os.access", return_value=True):
                result = get_directory_size(tmp_path)

        assert result.size_bytes == 0
        assert "two.txt" in result.error
        assert "Input/output error" in result.error

    def test_missing_directory(self, tmp_path):
        result = get_directory_size(tmp_path / "missing")
        assert result.size_bytes == 0
        assert not result.ok

    def test_deep_tree_does_not_hit_recursion_limit(self, tmp_path):
        deep = tmp_path
        for i in range(60):
            deep = deep / f"d{i}"
        deep.mkdir(parents=True)
        (deep / "leaf.txt").write_text("leaf")

        assert get_directory_size(tmp_path).size_bytes == 4
