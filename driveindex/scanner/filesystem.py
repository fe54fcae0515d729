"""Filesystem traversal utilities for scanning drives."""

import logging
import os
import re
from collections.abc import Callable, Iterator
from pathlib import Path

from driveindex.database.models import FileRecord
from driveindex.scanner.categories import classify

logger = logging.getLogger(__name__)

# OS-generated housekeeping entries, skipped whether they are files or folders
JUNK_NAMES = frozenset(
    {
        ".DS_Store",
        ".Spotlight-V100",
        ".Trashes",
        ".fseventsd",
        ".TemporaryItems",
        ".DocumentRevisions-V100",
        ".AppleDouble",
        ".AppleDB",
        ".AppleDesktop",
        "Thumbs.db",
        "ehthumbs.db",
        "desktop.ini",
        "$RECYCLE.BIN",
        "System Volume Information",
    }
)
JUNK_PREFIXES = ("._", "~$")

SYSTEM_DIRECTORIES = frozenset(
    {
        "System Volume Information",
        "$RECYCLE.BIN",
        "RECYCLER",
        "lost+found",
    }
)

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:$")


def normalize_path(path: str) -> str:
    """Normalize a user supplied path for storage and comparison.

    Backslashes become forward slashes and trailing separators are dropped,
    except on a bare root such as ``/`` or ``E:/``.
    """
    normalized = path.strip().replace("\\", "/")
    stripped = normalized.rstrip("/")
    if not stripped:
        return "/" if normalized else ""
    if _DRIVE_LETTER.match(stripped):
        return stripped + "/"
    return stripped


def to_fs_path(path: str) -> Path:
    return Path(os.path.normpath(path))


def is_junk(name: str) -> bool:
    return name in JUNK_NAMES or name.startswith(JUNK_PREFIXES)


def is_system_directory(name: str) -> bool:
    return name.startswith(".") or name in SYSTEM_DIRECTORIES


def walk_directory(
    source_root: Path,
    directory_visited: Callable[[str], None] | None = None,
) -> Iterator[FileRecord]:
    """Yield a FileRecord for every indexable file below source_root.

    ``directory_visited`` is called with each directory's relative path before
    the directory is listed.
    """
    yield from _walk_recursive(source_root, source_root, directory_visited)


def _walk_recursive(
    current_dir: Path,
    source_root: Path,
    directory_visited: Callable[[str], None] | None,
) -> Iterator[FileRecord]:
    if directory_visited is not None:
        directory_visited(_get_relative_path(current_dir, source_root))

    subdirs: list[Path] = []
    for entry in _list_entries(current_dir):
        if is_junk(entry.name):
            continue
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                if not is_system_directory(entry.name):
                    subdirs.append(Path(entry.path))
                continue
        except OSError as e:
            logger.warning("Cannot determine type of %s: %s", entry.path, e)
            continue

        record = _process_entry(entry, source_root)
        if record:
            yield record

    for subdir in subdirs:
        yield from _walk_recursive(subdir, source_root, directory_visited)


def _get_relative_path(path: Path, root: Path) -> str:
    try:
        relative = path.relative_to(root)
        return relative.as_posix() if str(relative) != "." else ""
    except ValueError:
        return path.as_posix()


def _list_entries(directory: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda e: e.name)
    except PermissionError:
        logger.warning("Permission denied listing directory: %s", directory)
    except OSError as e:
        logger.warning("Error listing directory %s: %s", directory, e)
    return []


def _process_entry(entry: os.DirEntry, source_root: Path) -> FileRecord | None:
    try:
        if not entry.is_file(follow_symlinks=False):
            return None

        stat_result = entry.stat(follow_symlinks=False)
        extension = os.path.splitext(entry.name)[1]

        return FileRecord(
            file_name=entry.name,
            file_path=_get_relative_path(Path(entry.path), source_root),
            file_size=stat_result.st_size,
            file_type=extension,
            category=classify(extension),
            modified_at_unix=stat_result.st_mtime,
        )

    except PermissionError:
        logger.warning("Permission denied: %s", entry.path)
        return None
    except FileNotFoundError:
        logger.warning("File disappeared during scan: %s", entry.path)
        return None
    except OSError as e:
        logger.warning("Error processing %s: %s", entry.path, e)
        return None
