"""Drive record persistence."""

import logging
import sqlite3
import time
import uuid

from .connection import Database
from .models import Drive

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "description"})


class DuplicateNameError(Exception):
    """Raised when a drive name is already registered."""


class DriveNotFoundError(Exception):
    """Raised when a drive id or name does not match any registered drive."""


class DriveStore:
    """Reads and writes rows of the drives table."""

    def __init__(self, db: Database):
        self.db = db

    def list_drives(self) -> list[Drive]:
        rows = self.db.conn.execute(
            "SELECT * FROM drives ORDER BY created_at_unix DESC, name ASC"
        ).fetchall()
        return [Drive.from_row(row) for row in rows]

    def get(self, drive_id: str) -> Drive:
        row = self.db.conn.execute("SELECT * FROM drives WHERE id = ?", (drive_id,)).fetchone()
        if row is None:
            raise DriveNotFoundError(f"No drive with id: {drive_id}")
        return Drive.from_row(row)

    def find(self, name_or_id: str) -> Drive:
        row = self.db.conn.execute(
            "SELECT * FROM drives WHERE id = ? OR name = ? LIMIT 1",
            (name_or_id, name_or_id),
        ).fetchone()
        if row is None:
            raise DriveNotFoundError(f"No drive named or identified by: {name_or_id}")
        return Drive.from_row(row)

    def exists(self, drive_id: str) -> bool:
        row = self.db.conn.execute("SELECT 1 FROM drives WHERE id = ?", (drive_id,)).fetchone()
        return row is not None

    def create(self, name: str, description: str | None = None) -> Drive:
        name = name.strip()
        if not name:
            raise ValueError("Drive name must not be empty")

        drive_id = uuid.uuid4().hex
        try:
            with self.db.transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO drives (id, name, description, created_at_unix)
                    VALUES (?, ?, ?, ?)
                    """,
                    (drive_id, name, description or "", time.time()),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateNameError(f"A drive named '{name}' already exists") from e

        logger.info("Drive added: %s (%s)", name, drive_id)
        return self.get(drive_id)

    def update(self, drive_id: str, **fields: str | None) -> Drive:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update drive fields: {', '.join(sorted(unknown))}")

        current = self.get(drive_id)
        name = fields.get("name")
        name = current.name if name is None else name.strip()
        if not name:
            raise ValueError("Drive name must not be empty")
        description = fields.get("description", current.description)

        try:
            with self.db.transaction() as conn:
                conn.execute(
                    "UPDATE drives SET name = ?, description = ? WHERE id = ?",
                    (name, description or "", drive_id),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateNameError(f"A drive named '{name}' already exists") from e
        return self.get(drive_id)

    def delete(self, drive_id: str) -> None:
        with self.db.transaction() as conn:
            cursor = conn.execute("DELETE FROM drives WHERE id = ?", (drive_id,))
        if cursor.rowcount == 0:
            raise DriveNotFoundError(f"No drive with id: {drive_id}")
        logger.info("Drive deleted: %s", drive_id)

    def set_scan_path(self, drive_id: str, scan_path: str) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "UPDATE drives SET scan_path = ? WHERE id = ?",
                (scan_path, drive_id),
            )

    def reset_stats(self, drive_id: str) -> None:
        """Zero the file count after the index was cleared. Does not commit."""
        self.db.conn.execute(
            "UPDATE drives SET file_count = 0 WHERE id = ?",
            (drive_id,),
        )

    def record_scan(
        self,
        drive_id: str,
        file_count: int,
        total_size: int,
        free_space: int,
        last_scanned_at_unix: float,
        scan_path: str,
    ) -> None:
        """Overwrite the summary statistics of a drive. Does not commit."""
        self.db.conn.execute(
            """
            UPDATE drives
            SET file_count = ?, total_size = ?, free_space = ?,
                last_scanned_at_unix = ?, scan_path = ?
            WHERE id = ?
            """,
            (file_count, total_size, free_space, last_scanned_at_unix, scan_path, drive_id),
        )
