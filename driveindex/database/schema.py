"""Database schema definition."""

import sqlite3

SCHEMA_SQL = """
-- Registered drives
CREATE TABLE IF NOT EXISTS drives (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    description TEXT DEFAULT '',
    scan_path TEXT,
    file_count INTEGER DEFAULT 0,
    total_size INTEGER DEFAULT 0,
    free_space INTEGER DEFAULT 0,
    last_scanned_at_unix REAL,
    created_at_unix REAL NOT NULL
);

-- File inventory, paths relative to the drive's scan root
CREATE TABLE IF NOT EXISTS files (
    id INTEGER PRIMARY KEY,
    drive_id TEXT NOT NULL REFERENCES drives(id) ON DELETE CASCADE,
    file_name TEXT NOT NULL,
    file_path TEXT NOT NULL,
    file_size INTEGER NOT NULL,
    file_type TEXT,
    category TEXT NOT NULL,
    modified_at_unix REAL,
    scanned_at_unix REAL NOT NULL,
    UNIQUE(drive_id, file_path)
);

-- Indexes for search and per-drive aggregation
CREATE INDEX IF NOT EXISTS idx_files_file_name ON files(file_name);
CREATE INDEX IF NOT EXISTS idx_files_file_type ON files(file_type);
CREATE INDEX IF NOT EXISTS idx_files_category ON files(category);
CREATE INDEX IF NOT EXISTS idx_files_drive ON files(drive_id);
"""

# Connection-local; rows of a running scan wait here until they replace the
# drive's index, so a walk never holds the main database's write lock.
STAGING_SQL = """
CREATE TEMP TABLE IF NOT EXISTS staged_files (
    id INTEGER PRIMARY KEY,
    drive_id TEXT NOT NULL,
    file_name TEXT NOT NULL,
    file_path TEXT NOT NULL,
    file_size INTEGER NOT NULL,
    file_type TEXT,
    category TEXT NOT NULL,
    modified_at_unix REAL,
    scanned_at_unix REAL NOT NULL,
    UNIQUE(drive_id, file_path)
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the persistent schema and this connection's staging table."""
    conn.executescript(SCHEMA_SQL)
    conn.executescript(STAGING_SQL)
    conn.commit()
