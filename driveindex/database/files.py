"""File index persistence and queries."""

from collections.abc import Sequence

from .connection import Database
from .models import CategoryStats, FileRecord, IndexedFile

# Eight parameters per row; a 100-row batch stays below SQLite's
# historical 999 host-parameter limit.
INSERT_COLUMNS = (
    "drive_id",
    "file_name",
    "file_path",
    "file_size",
    "file_type",
    "category",
    "modified_at_unix",
    "scanned_at_unix",
)

SELECT_INDEXED_FILE = """
    SELECT f.id, f.drive_id, d.name AS drive_name, f.file_name, f.file_path,
           f.file_size, f.file_type, f.category, f.modified_at_unix, f.scanned_at_unix
    FROM files f
    JOIN drives d ON f.drive_id = d.id
"""


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


class FileStore:
    """Reads and writes rows of the files table.

    Writes to ``files`` never commit; the caller owns the transaction. A scan
    stages its rows in the connection's temporary ``staged_files`` table
    first and moves them into ``files`` in one short transaction.
    """

    def __init__(self, db: Database):
        self.db = db

    def stage_batch(
        self,
        drive_id: str,
        records: Sequence[FileRecord],
        scanned_at_unix: float,
    ) -> None:
        """Add records to the staging table and commit straight away.

        Staged rows live in the temp schema, so committing here never takes
        a lock on the main database.
        """
        self._insert(drive_id, records, scanned_at_unix)
        self.db.conn.commit()

    def count_staged(self, drive_id: str) -> int:
        row = self.db.conn.execute(
            "SELECT COUNT(*) FROM temp.staged_files WHERE drive_id = ?",
            (drive_id,),
        ).fetchone()
        return row[0]

    def promote_staged(self, drive_id: str) -> int:
        """Copy a drive's staged rows into files, in walk order. Does not commit."""
        columns = ", ".join(INSERT_COLUMNS)
        cursor = self.db.conn.execute(
            f"""
            INSERT INTO files ({columns})
            SELECT {columns} FROM temp.staged_files
            WHERE drive_id = ?
            ORDER BY id
            """,
            (drive_id,),
        )
        return cursor.rowcount

    def discard_staged(self, drive_id: str) -> None:
        self.db.conn.execute("DELETE FROM temp.staged_files WHERE drive_id = ?", (drive_id,))
        self.db.conn.commit()

    def _insert(
        self,
        drive_id: str,
        records: Sequence[FileRecord],
        scanned_at_unix: float,
    ) -> None:
        if not records:
            return

        row_placeholder = f"({_placeholders(len(INSERT_COLUMNS))})"
        values_sql = ", ".join(row_placeholder for _ in records)
        params: list = []
        for r in records:
            params.extend(
                (
                    drive_id,
                    r.file_name,
                    r.file_path,
                    r.file_size,
                    r.file_type,
                    r.category,
                    r.modified_at_unix,
                    scanned_at_unix,
                )
            )

        self.db.conn.execute(
            f"INSERT INTO temp.staged_files ({', '.join(INSERT_COLUMNS)}) VALUES {values_sql}",
            params,
        )

    def delete_for_drive(self, drive_id: str) -> int:
        cursor = self.db.conn.execute("DELETE FROM files WHERE drive_id = ?", (drive_id,))
        return cursor.rowcount

    def count_for_drive(self, drive_id: str) -> int:
        row = self.db.conn.execute(
            "SELECT COUNT(*) FROM files WHERE drive_id = ?",
            (drive_id,),
        ).fetchone()
        return row[0]

    def sample_paths(self, drive_id: str, sample_size: int) -> list[str]:
        """Pick a random handful of relative paths indexed for a drive."""
        rows = self.db.conn.execute(
            "SELECT file_path FROM files WHERE drive_id = ? ORDER BY RANDOM() LIMIT ?",
            (drive_id, sample_size),
        ).fetchall()
        return [row["file_path"] for row in rows]

    def get(self, file_id: int) -> IndexedFile | None:
        row = self.db.conn.execute(
            SELECT_INDEXED_FILE + " WHERE f.id = ?",
            (file_id,),
        ).fetchone()
        return IndexedFile.from_row(row) if row else None

    def search(
        self,
        query: str | None,
        categories: Sequence[str] | None = None,
        drive_ids: Sequence[str] | None = None,
        limit: int = 1000,
    ) -> list[IndexedFile]:
        """Case-insensitive substring search on file names.

        ``None`` filters are ignored; an empty sequence matches nothing.
        """
        if (categories is not None and not categories) or (
            drive_ids is not None and not drive_ids
        ):
            return []

        sql = SELECT_INDEXED_FILE + " WHERE 1=1"
        params: list = []

        if query:
            sql += " AND f.file_name LIKE ? ESCAPE '\\'"
            params.append(f"%{_escape_like(query)}%")

        if categories is not None:
            sql += f" AND f.category IN ({_placeholders(len(categories))})"
            params.extend(categories)

        if drive_ids is not None:
            sql += f" AND f.drive_id IN ({_placeholders(len(drive_ids))})"
            params.extend(drive_ids)

        sql += " ORDER BY f.file_name ASC, f.id ASC LIMIT ?"
        params.append(limit)

        rows = self.db.conn.execute(sql, params).fetchall()
        return [IndexedFile.from_row(row) for row in rows]

    def category_stats(self, drive_id: str) -> list[CategoryStats]:
        rows = self.db.conn.execute(
            """
            SELECT category, COUNT(*) AS count, COALESCE(SUM(file_size), 0) AS total_size
            FROM files
            WHERE drive_id = ?
            GROUP BY category
            ORDER BY count DESC, category ASC
            """,
            (drive_id,),
        ).fetchall()
        return [
            CategoryStats(
                category=row["category"],
                count=row["count"],
                total_size=row["total_size"],
            )
            for row in rows
        ]

