"""Tests for filesystem traversal utilities."""

import os
from contextlib import contextmanager
from pathlib import Path

import pytest

from driveindex.scanner.filesystem import (
    is_junk,
    is_system_directory,
    normalize_path,
    walk_directory,
)


def _paths(root: Path) -> set[str]:
    return {record.file_path for record in walk_directory(root)}


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_backslashes_become_forward_slashes(self):
        assert normalize_path("E:\\Projects\\Footage") == "E:/Projects/Footage"

    def test_strips_whitespace_and_trailing_separator(self):
        assert normalize_path("  /media/me/DRIVE/ ") == "/media/me/DRIVE"

    def test_keeps_posix_root(self):
        assert normalize_path("/") == "/"

    def test_keeps_lettered_root(self):
        assert normalize_path("E:\\") == "E:/"
        assert normalize_path("E:") == "E:/"

    def test_blank(self):
        assert normalize_path("   ") == ""


class TestFilters:
    """Tests for junk and system directory filters."""

    @pytest.mark.parametrize(
        "name",
        [".DS_Store", "Thumbs.db", "desktop.ini", ".Trashes", "._clip.mov", "~$report.docx"],
    )
    def test_junk_names(self, name: str):
        assert is_junk(name)

    def test_ordinary_names_are_not_junk(self):
        assert not is_junk("clip.mov")
        assert not is_junk(".hidden_draft.png")

    @pytest.mark.parametrize("name", [".git", "System Volume Information", "$RECYCLE.BIN"])
    def test_system_directories(self, name: str):
        assert is_system_directory(name)

    def test_ordinary_directory(self):
        assert not is_system_directory("Footage")


class TestWalkDirectory:
    """Tests for walk_directory function."""

    def test_walks_empty_directory(self, tmp_path: Path):
        assert list(walk_directory(tmp_path)) == []

    def test_relative_paths_use_forward_slashes(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"a/b/clip.mp4": "x", "top.txt": "y"})
        assert _paths(tmp_path) == {"a/b/clip.mp4", "top.txt"}

    def test_record_fields(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"Footage/Intro.MP4": "12345"})
        (record,) = list(walk_directory(tmp_path))

        assert record.file_name == "Intro.MP4"
        assert record.file_path == "Footage/Intro.MP4"
        assert record.file_size == 5
        assert record.file_type == ".MP4"
        assert record.category == "Video (MP4)"
        assert record.modified_at_unix == pytest.approx(
            (tmp_path / "Footage" / "Intro.MP4").stat().st_mtime
        )

    def test_file_without_extension(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"README": "x"})
        (record,) = list(walk_directory(tmp_path))
        assert record.file_type == ""
        assert record.category == "Other"

    def test_skips_junk_files_and_folders(self, tmp_path: Path, build_tree):
        build_tree(
            tmp_path,
            {
                "keep.psd": "k",
                ".DS_Store": "j",
                "._keep.psd": "j",
                "Thumbs.db": "j",
                "Footage/clip.mov": "k",
                "Footage/.DS_Store": "j",
                ".Spotlight-V100/store.db": "j",
                "$RECYCLE.BIN/old.mov": "j",
                "System Volume Information/tracking.log": "j",
            },
        )
        assert _paths(tmp_path) == {"keep.psd", "Footage/clip.mov"}

    def test_does_not_descend_into_dot_directories(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {".git/config": "x", ".cache/a/b.png": "x", "src/main.c": "x"})
        assert _paths(tmp_path) == {"src/main.c"}

    def test_includes_hidden_files(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {".hidden.png": "x", "visible.png": "y"})
        assert _paths(tmp_path) == {".hidden.png", "visible.png"}

    def test_skips_symlinks(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"real.txt": "real"})
        (tmp_path / "link.txt").symlink_to(tmp_path / "real.txt")
        assert _paths(tmp_path) == {"real.txt"}

    def test_depth_first_sorted_order(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"b.txt": "", "a.txt": "", "sub/c.txt": ""})
        assert [r.file_path for r in walk_directory(tmp_path)] == ["a.txt", "b.txt", "sub/c.txt"]

    def test_restartable(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"one.txt": "1", "dir/two.txt": "2"})
        assert list(walk_directory(tmp_path)) == list(walk_directory(tmp_path))

    def test_directory_visited_hook(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"a/x.txt": "", "a/b/y.txt": "", ".git/z": ""})
        visited: list[str] = []
        list(walk_directory(tmp_path, directory_visited=visited.append))
        assert visited == ["", "a", "a/b"]

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permissions are not enforced for root",
    )
    def test_unreadable_directory_is_skipped(self, tmp_path: Path, build_tree):
        build_tree(tmp_path, {"ok/a.txt": "a", "locked/b.txt": "b", "z.txt": "z"})
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            assert _paths(tmp_path) == {"ok/a.txt", "z.txt"}
        finally:
            locked.chmod(0o755)

    def test_entry_errors_do_not_abort_walk(self, tmp_path: Path, build_tree, monkeypatch):
        build_tree(tmp_path, {"a.txt": "a", "b.txt": "b", "c.txt": "c"})
        real_scandir = os.scandir

        @contextmanager
        def flaky_scandir(path):
            with real_scandir(path) as entries:
                yield [_FlakyEntry(entry, fail_on="b.txt") for entry in entries]

        monkeypatch.setattr(os, "scandir", flaky_scandir)
        assert _paths(tmp_path) == {"a.txt", "c.txt"}


class _FlakyEntry:
    """DirEntry stand-in whose stat fails for one name."""

    def __init__(self, entry: os.DirEntry, fail_on: str):
        self._entry = entry
        self._fail_on = fail_on
        self.name = entry.name
        self.path = entry.path

    def is_symlink(self) -> bool:
        return self._entry.is_symlink()

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        return self._entry.is_dir(follow_symlinks=follow_symlinks)

    def is_file(self, follow_symlinks: bool = True) -> bool:
        return self._entry.is_file(follow_symlinks=follow_symlinks)

    def stat(self, follow_symlinks: bool = True) -> os.stat_result:
        if self.name == self._fail_on:
            raise PermissionError(f"Permission denied: {self.path}")
        return self._entry.stat(follow_symlinks=follow_symlinks)
