"""
Business logic for users.

The ``UserService`` is the user directory: it maps a unique username
to a store-generated identifier.  Every method receives the SQLite
connection of the current request.
"""

import logging
import sqlite3
from typing import List, Optional

from ..schemas.user import UserRead


logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when a user identifier does not resolve to any user."""

    message = "This user doesn't exist!"

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserService:
    """Operations on registered users."""

    @classmethod
    async def register_or_fetch(cls, conn: sqlite3.Connection, username: str) -> UserRead:
        """Return the user called ``username``, creating it on first use.

        Calling this twice with the same name returns the same id.  The
        lookup and the insert are not atomic; if another request inserts
        the same name in between, the UNIQUE constraint makes this insert
        fail with ``sqlite3.IntegrityError``, which is propagated.
        """
        existing = await cls.find_by_username(conn, username)
        if existing is not None:
            return existing

        cursor = conn.cursor()
        logger.info("Registering user %r", username)
        try:
            cursor.execute("INSERT INTO users (username) VALUES (?)", (username,))
            row = cursor.execute(
                "SELECT id, username FROM users WHERE rowid = ?", (cursor.lastrowid,)
            ).fetchone()
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.warning("Could not register user %r", username)
            raise
        return UserRead(id=row["id"], username=row["username"])

    @classmethod
    async def find_by_username(cls, conn: sqlite3.Connection, username: str) -> Optional[UserRead]:
        """Exact-match lookup by username."""
        row = conn.execute(
            "SELECT id, username FROM users WHERE username = ?", (username,)
        ).fetchone()
        if row:
            return UserRead(id=row["id"], username=row["username"])
        return None

    @classmethod
    async def list_users(cls, conn: sqlite3.Connection) -> List[UserRead]:
        """Return all users in insertion order."""
        rows = conn.execute("SELECT id, username FROM users ORDER BY rowid").fetchall()
        return [UserRead(id=row["id"], username=row["username"]) for row in rows]

    @classmethod
    async def get_user_by_id(cls, conn: sqlite3.Connection, user_id: str) -> Optional[UserRead]:
        """Retrieve a user by ID."""
        row = conn.execute(
            "SELECT id, username FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if row:
            return UserRead(id=row["id"], username=row["username"])
        return None

    @classmethod
    async def require_user(cls, conn: sqlite3.Connection, user_id: str) -> UserRead:
        """Like ``get_user_by_id`` but raise ``UserNotFoundError`` if missing."""
        user = await cls.get_user_by_id(conn, user_id)
        if user is None:
            logger.warning("Unknown user id %r", user_id)
            raise UserNotFoundError(user_id)
        return user
