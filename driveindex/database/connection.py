"""Database connection management."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Self

from .schema import create_schema

# Readers in other processes may hold the index while a scan writes
BUSY_TIMEOUT_SECONDS = 30.0


class Database:
    """Owns the SQLite connection of one drive index file.

    Opening creates missing parent directories, enables foreign keys so that
    deleting a drive cascades to its files, and brings the schema up to date.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT_SECONDS)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            create_schema(conn)
            self._conn = conn
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit everything written inside the block, or nothing at all."""
        conn = self.conn
        try:
            yield conn
        except BaseException:
            conn.rollback()
            raise
        conn.commit()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> Self:
        _ = self.conn
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
