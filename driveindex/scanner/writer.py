"""Batched persistence of walker output."""

import logging
import sqlite3
from collections.abc import Callable

from driveindex.database import FileRecord, FileStore
from driveindex.scanner.progress import ScanProgress

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class BatchWriteError(Exception):
    """Raised when a batch of file rows cannot be written."""


class BatchWriter:
    """Buffers file records and stages them in fixed-size batches."""

    def __init__(
        self,
        files: FileStore,
        drive_id: str,
        scanned_at_unix: float,
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_progress: Callable[[ScanProgress], None] | None = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.files = files
        self.drive_id = drive_id
        self.scanned_at_unix = scanned_at_unix
        self.batch_size = batch_size
        self.on_progress = on_progress
        self.file_count = 0
        self.indexed_bytes = 0
        self.batches_written = 0
        self._buffer: list[FileRecord] = []

    def add(self, record: FileRecord) -> None:
        self._buffer.append(record)
        if len(self._buffer) >= self.batch_size:
            self._write_buffer()
            self._report()

    def flush(self) -> None:
        """Write whatever is left in the buffer."""
        if self._buffer:
            self._write_buffer()

    def _write_buffer(self) -> None:
        batch = self._buffer
        try:
            self.files.stage_batch(self.drive_id, batch, self.scanned_at_unix)
        except sqlite3.Error as e:
            raise BatchWriteError(
                f"Failed to write {len(batch)} files after {self.file_count} indexed: {e}"
            ) from e

        self.file_count += len(batch)
        self.indexed_bytes += sum(r.file_size for r in batch)
        self.batches_written += 1
        self._buffer = []
        logger.debug("Batch %d written, %d files so far", self.batches_written, self.file_count)

    def _report(self) -> None:
        if self.on_progress is not None:
            self.on_progress(
                ScanProgress(
                    drive_id=self.drive_id,
                    file_count=self.file_count,
                    status=f"Scanned {self.file_count} files...",
                )
            )
