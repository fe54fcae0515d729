"""Data models for the database."""

import sqlite3
from dataclasses import dataclass


@dataclass
class Drive:
    """Represents a registered drive record."""

    id: str
    name: str
    description: str
    scan_path: str | None
    file_count: int
    total_size: int
    free_space: int
    last_scanned_at_unix: float | None
    created_at_unix: float

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Drive":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            scan_path=row["scan_path"],
            file_count=row["file_count"] or 0,
            total_size=row["total_size"] or 0,
            free_space=row["free_space"] or 0,
            last_scanned_at_unix=row["last_scanned_at_unix"],
            created_at_unix=row["created_at_unix"],
        )

    @property
    def is_scanned(self) -> bool:
        return bool(self.file_count)


@dataclass
class FileRecord:
    """A file found by the directory walker, not yet persisted."""

    file_name: str
    file_path: str
    file_size: int
    file_type: str
    category: str
    modified_at_unix: float | None


@dataclass
class IndexedFile:
    """Represents a persisted file row joined with its drive name."""

    id: int
    drive_id: str
    drive_name: str
    file_name: str
    file_path: str
    file_size: int
    file_type: str | None
    category: str
    modified_at_unix: float | None
    scanned_at_unix: float

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "IndexedFile":
        return cls(
            id=row["id"],
            drive_id=row["drive_id"],
            drive_name=row["drive_name"],
            file_name=row["file_name"],
            file_path=row["file_path"],
            file_size=row["file_size"],
            file_type=row["file_type"],
            category=row["category"],
            modified_at_unix=row["modified_at_unix"],
            scanned_at_unix=row["scanned_at_unix"],
        )


@dataclass
class CategoryStats:
    """Per-category aggregate for a single drive."""

    category: str
    count: int
    total_size: int


@dataclass
class DiskUsage:
    """Capacity of the volume holding a path, in bytes."""

    total: int
    free: int
    used: int


@dataclass
class ScanSummary:
    """Result of a completed scan."""

    drive_id: str
    file_count: int
    total_size: int
    free_space: int
    last_scanned_at_unix: float
    indexed_bytes: int
    scan_path: str


@dataclass
class DriveLocation:
    """Whether a drive is reachable and at which root."""

    connected: bool
    location: str | None = None
