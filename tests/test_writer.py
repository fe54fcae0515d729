"""Tests for batched persistence."""

# pylint: disable=redefined-outer-name

import sqlite3

import pytest

from driveindex.database import Database, DriveStore, FileRecord, FileStore
from driveindex.scanner.progress import ScanProgress
from driveindex.scanner.writer import BatchWriteError, BatchWriter


def _record(index: int, size: int = 10) -> FileRecord:
    return FileRecord(
        file_name=f"clip_{index:04d}.mp4",
        file_path=f"Footage/clip_{index:04d}.mp4",
        file_size=size,
        file_type=".mp4",
        category="Video (MP4)",
        modified_at_unix=1_700_000_000.0,
    )


@pytest.fixture
def drive_id(db: Database) -> str:
    return DriveStore(db).create("Footage A").id


class TestBatchWriter:
    """Tests for BatchWriter class."""

    def test_flushes_every_batch_size_records(self, db: Database, drive_id: str):
        files = FileStore(db)
        updates: list[ScanProgress] = []
        writer = BatchWriter(files, drive_id, 1.0, batch_size=100, on_progress=updates.append)

        for i in range(250):
            writer.add(_record(i))

        assert writer.batches_written == 2
        assert files.count_staged(drive_id) == 200
        assert [u.file_count for u in updates] == [100, 200]
        assert updates[0].status == "Scanned 100 files..."

        writer.flush()
        assert files.count_staged(drive_id) == 250
        assert writer.file_count == 250
        assert writer.indexed_bytes == 2500
        assert len(updates) == 2

    def test_flush_of_empty_buffer_is_noop(self, db: Database, drive_id: str):
        files = FileStore(db)
        updates: list[ScanProgress] = []
        writer = BatchWriter(files, drive_id, 1.0, on_progress=updates.append)

        writer.flush()

        assert writer.batches_written == 0
        assert writer.file_count == 0
        assert updates == []

    def test_rows_share_scan_timestamp(self, db: Database, drive_id: str):
        writer = BatchWriter(FileStore(db), drive_id, 1234.5, batch_size=3)
        for i in range(5):
            writer.add(_record(i))
        writer.flush()

        stamps = db.conn.execute(
            "SELECT DISTINCT scanned_at_unix FROM temp.staged_files WHERE drive_id = ?", (drive_id,)
        ).fetchall()
        assert [row[0] for row in stamps] == [1234.5]

    def test_progress_is_monotonic(self, db: Database, drive_id: str):
        updates: list[ScanProgress] = []
        writer = BatchWriter(FileStore(db), drive_id, 1.0, batch_size=7, on_progress=updates.append)
        for i in range(50):
            writer.add(_record(i))

        counts = [u.file_count for u in updates]
        assert counts == sorted(counts)
        assert counts[-1] == 49

    def test_failed_insert_raises_batch_write_error(self, db: Database, drive_id: str):
        writer = BatchWriter(FileStore(db), drive_id, 1.0, batch_size=2)
        writer.add(_record(1))

        with pytest.raises(BatchWriteError) as exc_info:
            writer.add(_record(1))

        assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)
        assert writer.file_count == 0

    def test_rejects_non_positive_batch_size(self, db: Database, drive_id: str):
        with pytest.raises(ValueError):
            BatchWriter(FileStore(db), drive_id, 1.0, batch_size=0)
