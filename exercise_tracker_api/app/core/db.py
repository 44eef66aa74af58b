"""
SQLite record store and its schema bootstrap.

This module provides the connection factory (``get_connection``), the
FastAPI dependency that hands a connection to each request
(``get_db``) and the migration runner applied on application start
(``init_db``).

Identifiers for users and exercises are generated by the database
itself: 12 random bytes rendered as 24 lowercase hex characters.  The
``username`` column is UNIQUE so that two concurrent first-time
registrations of the same name cannot both succeed; the loser gets an
``sqlite3.IntegrityError``.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: List[Tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(12)))),
            username TEXT UNIQUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS exercises (
            id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(12)))),
            user_id TEXT NOT NULL,
            username TEXT,
            description TEXT,
            duration INTEGER,
            date TEXT NOT NULL,
            -- ISO form of ``date`` so range filters compare strings in SQL
            logged_on TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_exercises_user_logged_on
            ON exercises (user_id, logged_on);
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the project root (the directory holding ``exercise_tracker_api``).
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(database_url: Optional[str] = None) -> sqlite3.Connection:
    """Open a new SQLite connection with rows accessible by column name.

    ``check_same_thread`` is disabled because FastAPI may open the
    connection in its threadpool and use it from the event loop.  A
    connection is never shared between requests.
    """
    conn = sqlite3.connect(get_database_path(database_url), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a connection for one request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


def init_db(database_url: Optional[str] = None) -> None:
    """Create the database if needed and apply pending migrations.

    Applied versions are stored in the ``migrations`` table.  To change
    the schema append a new ``(version, sql)`` pair to ``MIGRATIONS``.
    """
    conn = get_connection(database_url)
    try:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
        conn.commit()
    finally:
        conn.close()
