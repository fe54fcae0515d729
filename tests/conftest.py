"""Shared fixtures for driveindex tests."""

# pylint: disable=redefined-outer-name

from collections.abc import Iterator
from pathlib import Path

import pytest

from driveindex.catalog import Catalog
from driveindex.database import Database
from driveindex.database.models import DiskUsage


def _build_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files below root from a mapping of relative path to content."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def build_tree():
    return _build_tree


@pytest.fixture
def db(tmp_path: Path) -> Iterator[Database]:
    with Database(tmp_path / "index" / "test.db") as database:
        yield database


@pytest.fixture
def fixed_disk_probe(monkeypatch):
    """Report a fixed 1 GB volume with 250 MB free for every scan."""
    usage = DiskUsage(total=1_000_000_000, free=250_000_000, used=750_000_000)
    monkeypatch.setattr(
        "driveindex.scanner.scanner.probe_disk_space", lambda _path: usage
    )
    return usage


@pytest.fixture
def catalog(db: Database, fixed_disk_probe) -> Catalog:
    return Catalog(db, enumerate_roots=lambda: [])


@pytest.fixture
def creative_tree(tmp_path: Path) -> Path:
    """Twelve files across three subdirectories, two of them in .Trashes."""
    return _build_tree(
        tmp_path / "volume",
        {
            "project_intro.mp4": "intro",
            "notes.txt": "notes",
            "Footage/proj_a.mp4": "a" * 10,
            "Footage/proj_b.MOV": "b" * 20,
            "Footage/broll.mp4": "c" * 30,
            "Footage/interview.wav": "d" * 40,
            "Design/poster.psd": "e" * 50,
            "Design/logo.ai": "f" * 60,
            "Design/font.otf": "g" * 70,
            "Design/.hidden_draft.png": "h" * 80,
            ".Trashes/deleted.mp4": "x",
            ".Trashes/old.psd": "y",
        },
    )
