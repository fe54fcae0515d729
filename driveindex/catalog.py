"""Operations offered to user interfaces of the drive index."""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from driveindex.config import Config
from driveindex.database import (
    CategoryStats,
    Database,
    DiskUsage,
    Drive,
    DriveLocation,
    DriveStore,
    FileStore,
    IndexedFile,
    ScanSummary,
)
from driveindex.locator import DriveLocator, enumerate_volume_roots, join_root
from driveindex.scanner import CancellationToken, Scanner, probe_disk_space
from driveindex.scanner.filesystem import to_fs_path
from driveindex.scanner.progress import ScanProgress

logger = logging.getLogger(__name__)


class Catalog:
    """Entry point for listing, scanning, searching and locating drives."""

    def __init__(
        self,
        db: Database,
        config: Config | None = None,
        enumerate_roots: Callable[[], list[str]] | None = None,
    ):
        self.db = db
        self.config = config or Config()
        self.drives = DriveStore(db)
        self.files = FileStore(db)
        self.scanner = Scanner(db, batch_size=self.config.scanner.batch_size)
        self.locator = DriveLocator(
            self.files,
            enumerate_roots=enumerate_roots or enumerate_volume_roots,
            sample_size=self.config.locator.sample_size,
        )

    def list_drives(self) -> list[Drive]:
        return self.drives.list_drives()

    def get_drive(self, drive_id: str) -> Drive:
        return self.drives.get(drive_id)

    def find_drive(self, name_or_id: str) -> Drive:
        return self.drives.find(name_or_id)

    def create_drive(self, name: str, description: str | None = None) -> Drive:
        return self.drives.create(name, description)

    def update_drive(self, drive_id: str, **fields: str | None) -> Drive:
        return self.drives.update(drive_id, **fields)

    def delete_drive(self, drive_id: str) -> None:
        self.drives.delete(drive_id)

    def scan_drive(
        self,
        drive_id: str,
        root_path: str,
        on_progress: Callable[[ScanProgress], None] | None = None,
        cancel: CancellationToken | None = None,
    ) -> ScanSummary:
        return self.scanner.scan(drive_id, root_path, on_progress=on_progress, cancel=cancel)

    def clear_drive_index(self, drive_id: str) -> int:
        """Delete every indexed file of a drive and return how many were removed."""
        self.drives.get(drive_id)
        with self.db.transaction():
            deleted = self.files.delete_for_drive(drive_id)
            self.drives.reset_stats(drive_id)
        logger.info("Cleared %d files for drive %s", deleted, drive_id)
        return deleted

    def search_files(
        self,
        query: str | None,
        categories: Sequence[str] | None = None,
        drive_ids: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> list[IndexedFile]:
        """Search file names, returning at most ``config.search_limit`` rows."""
        if limit is None:
            limit = self.config.search_limit
        elif limit < 1:
            raise ValueError(f"Search limit must be at least 1, got {limit}")
        limit = min(limit, self.config.search_limit)
        return self.files.search(query, categories=categories, drive_ids=drive_ids, limit=limit)

    def get_file_stats(self, drive_id: str) -> list[CategoryStats]:
        return self.files.category_stats(drive_id)

    def locate_drive(self, drive_id: str) -> DriveLocation:
        """Check whether a drive is plugged in, remembering where it was found."""
        drive = self.drives.get(drive_id)
        location = self.locator.locate(drive)
        if location.connected and location.location != drive.scan_path:
            logger.info(
                "Drive %s moved from %s to %s", drive.name, drive.scan_path, location.location
            )
            self.drives.set_scan_path(drive_id, location.location)
        return location

    def resolve_file(self, file_id: int) -> Path | None:
        """Return the current absolute path of an indexed file, if its drive is connected."""
        indexed = self.files.get(file_id)
        if indexed is None:
            return None
        location = self.locate_drive(indexed.drive_id)
        if not location.connected or location.location is None:
            return None
        return to_fs_path(join_root(location.location, indexed.file_path))

    def probe_disk_space(self, root_path: str) -> DiskUsage:
        return probe_disk_space(root_path)

    def list_volume_roots(self) -> list[str]:
        return self.locator.enumerate_roots()
