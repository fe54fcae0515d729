"""Main scanner implementation."""

import logging
import os
import threading
import time
from collections.abc import Callable
from pathlib import Path

from driveindex.database import (
    Database,
    DiskUsage,
    DriveNotFoundError,
    DriveStore,
    FileStore,
    ScanSummary,
)
from driveindex.scanner.disk import CapacityProbeError, probe_disk_space
from driveindex.scanner.filesystem import normalize_path, to_fs_path, walk_directory
from driveindex.scanner.leases import SCAN_LEASES, ScanLeases
from driveindex.scanner.progress import SCAN_COMPLETE_STATUS, ScanProgress
from driveindex.scanner.writer import DEFAULT_BATCH_SIZE, BatchWriter

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]


class InvalidPathError(Exception):
    """Raised when a scan root is empty, not a string, or not a directory."""


class PathNotFoundError(Exception):
    """Raised when a scan root does not exist."""


class ScanCancelledError(Exception):
    """Raised when a scan is stopped through its cancellation token."""


class CancellationToken:
    """Thread-safe flag a caller sets to stop a running scan."""

    def __init__(self) -> None:
        self._evt = threading.Event()

    def set(self) -> None:
        self._evt.set()

    def is_set(self) -> bool:
        return self._evt.is_set()


class Scanner:
    """Walks a drive and replaces its file index in the database."""

    def __init__(
        self,
        db: Database,
        batch_size: int = DEFAULT_BATCH_SIZE,
        leases: ScanLeases = SCAN_LEASES,
        disk_probe: Callable[[str], DiskUsage] | None = None,
    ):
        self.db = db
        self.drives = DriveStore(db)
        self.files = FileStore(db)
        self.batch_size = batch_size
        self.leases = leases
        self.disk_probe = disk_probe or probe_disk_space

    def scan(
        self,
        drive_id: str,
        root_path: str,
        on_progress: ProgressCallback | None = None,
        cancel: CancellationToken | None = None,
    ) -> ScanSummary:
        """Index every file below root_path for the drive.

        Validation happens before anything is written. The walk fills this
        connection's staging table without locking the shared index, so scans
        of other drives proceed meanwhile. Only the final swap (clear the old
        rows, copy the staged ones, update drive statistics) is a write
        transaction; a scan that fails or is cancelled leaves the previous
        index in place.
        """
        scan_path = self._validate_root(root_path)
        if not self.drives.exists(drive_id):
            raise DriveNotFoundError(f"No drive with id: {drive_id}")

        with self.leases.hold(drive_id):
            usage = self._probe_capacity(scan_path)
            logger.info("Starting scan of %s for drive %s", scan_path, drive_id)

            writer = BatchWriter(
                self.files,
                drive_id,
                scanned_at_unix=time.time(),
                batch_size=self.batch_size,
                on_progress=on_progress,
            )

            try:
                self.files.discard_staged(drive_id)
                self._stage_files(scan_path, writer, cancel)
                last_scanned = time.time()
                total_size = usage.total or writer.indexed_bytes
                with self.db.transaction():
                    deleted = self.files.delete_for_drive(drive_id)
                    self.files.promote_staged(drive_id)
                    self.drives.record_scan(
                        drive_id,
                        file_count=writer.file_count,
                        total_size=total_size,
                        free_space=usage.free,
                        last_scanned_at_unix=last_scanned,
                        scan_path=scan_path,
                    )
            except BaseException:
                logger.warning("Scan of %s aborted, previous index kept", scan_path)
                raise
            finally:
                self.files.discard_staged(drive_id)

        logger.debug("Replaced %d previously indexed files for drive %s", deleted, drive_id)
        logger.info("Scan of %s complete: %d files", scan_path, writer.file_count)
        if on_progress is not None:
            on_progress(
                ScanProgress(
                    drive_id=drive_id,
                    file_count=writer.file_count,
                    status=SCAN_COMPLETE_STATUS,
                )
            )

        return ScanSummary(
            drive_id=drive_id,
            file_count=writer.file_count,
            total_size=total_size,
            free_space=usage.free,
            last_scanned_at_unix=last_scanned,
            indexed_bytes=writer.indexed_bytes,
            scan_path=scan_path,
        )

    def _validate_root(self, root_path: str) -> str:
        if not isinstance(root_path, str) or not root_path.strip():
            raise InvalidPathError("Invalid drive path")

        fs_root = Path(os.path.abspath(normalize_path(root_path)))
        scan_path = normalize_path(fs_root.as_posix())
        if not fs_root.exists():
            raise PathNotFoundError(f"Path does not exist: {scan_path}")
        if not fs_root.is_dir():
            raise InvalidPathError(f"Path is not a directory: {scan_path}")
        return scan_path

    def _probe_capacity(self, scan_path: str) -> DiskUsage:
        try:
            return self.disk_probe(scan_path)
        except CapacityProbeError as e:
            logger.warning("Capacity probe failed, continuing without it: %s", e)
            return DiskUsage(total=0, free=0, used=0)

    def _stage_files(
        self,
        scan_path: str,
        writer: BatchWriter,
        cancel: CancellationToken | None,
    ) -> None:
        def check_cancelled(relative_dir: str) -> None:
            if cancel is not None and cancel.is_set():
                raise ScanCancelledError(f"Scan cancelled at {relative_dir or '/'}")

        for record in walk_directory(to_fs_path(scan_path), directory_visited=check_cancelled):
            writer.add(record)
        writer.flush()
