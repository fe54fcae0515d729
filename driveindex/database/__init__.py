"""Database module for driveindex."""

from .connection import Database
from .drives import DriveNotFoundError, DriveStore, DuplicateNameError
from .files import FileStore
from .models import (
    CategoryStats,
    DiskUsage,
    Drive,
    DriveLocation,
    FileRecord,
    IndexedFile,
    ScanSummary,
)
from .schema import create_schema

__all__ = [
    "Database",
    "create_schema",
    "DriveStore",
    "FileStore",
    "DriveNotFoundError",
    "DuplicateNameError",
    "Drive",
    "FileRecord",
    "IndexedFile",
    "CategoryStats",
    "DiskUsage",
    "ScanSummary",
    "DriveLocation",
]
