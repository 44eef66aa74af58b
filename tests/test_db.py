"""Tests for the SQLite store bootstrap and its constraints."""
import re
import sqlite3

import pytest

from exercise_tracker_api.app.core.db import MIGRATIONS, get_database_path, init_db


def test_init_db_is_idempotent(db_path, conn):
    init_db(db_path)
    versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    assert versions == [version for version, _ in MIGRATIONS]


def test_store_generates_hex_ids(conn):
    cursor = conn.execute("INSERT INTO users (username) VALUES ('alice')")
    row = conn.execute("SELECT id FROM users WHERE rowid = ?", (cursor.lastrowid,)).fetchone()
    assert re.fullmatch(r"[0-9a-f]{24}", row["id"])


def test_store_rejects_duplicate_username(conn):
    conn.execute("INSERT INTO users (username) VALUES ('alice')")
    conn.commit()
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO users (username) VALUES ('alice')")


def test_relative_database_path_resolves_to_project_root(tmp_path):
    assert get_database_path(str(tmp_path / "x.db")) == str(tmp_path / "x.db")
    assert get_database_path("rel.db").endswith("rel.db")
    assert get_database_path("rel.db") != "rel.db"
