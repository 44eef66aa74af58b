"""
Business logic for the exercise log.

Entries are append-only.  Each one stores its date twice: ``date`` in
the display form clients expect (``"Mon Jan 01 1990"``) and
``logged_on`` in ISO form so that ``from``/``to`` filters can be
evaluated by SQLite.  Log order is insertion order.
"""

import datetime
import logging
import sqlite3
from typing import List, Optional

from ..schemas.exercise import ExerciseCreate, ExerciseLog, ExerciseRead, LogEntry
from .user_service import UserService


logger = logging.getLogger(__name__)

DATE_FORMAT = "%a %b %d"


def format_date(value: datetime.date) -> str:
    """Render a date as day-of-week, month, day and 4-digit year.

    The year is zero-padded by hand; ``%Y`` drops leading zeros on
    some platforms (``999`` instead of ``0999``).
    """
    return f"{value.strftime(DATE_FORMAT)} {value.year:04d}"


class ExerciseService:
    """Append to and read from a user's exercise log."""

    @classmethod
    async def append(
        cls, conn: sqlite3.Connection, user_id: str, data: ExerciseCreate
    ) -> ExerciseRead:
        """Log one exercise for ``user_id``.

        The date defaults to today.  Raises ``UserNotFoundError`` if the
        user does not exist, in which case nothing is written.
        """
        user = await UserService.require_user(conn, user_id)
        day = data.date or datetime.date.today()
        logger.info("Logging exercise for user %s on %s", user.id, day.isoformat())

        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO exercises (user_id, username, description, duration, date, logged_on)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                user.id,
                user.username,
                data.description,
                data.duration,
                format_date(day),
                day.isoformat(),
            ),
        )
        row = cursor.execute(
            "SELECT id, user_id, username, description, duration, date FROM exercises WHERE rowid = ?",
            (cursor.lastrowid,),
        ).fetchone()
        conn.commit()
        return ExerciseRead(
            id=row["id"],
            user_id=row["user_id"],
            username=row["username"],
            date=row["date"],
            duration=row["duration"],
            description=row["description"],
        )

    @classmethod
    async def query(
        cls,
        conn: sqlite3.Connection,
        user_id: str,
        date_from: Optional[datetime.date] = None,
        date_to: Optional[datetime.date] = None,
        limit: Optional[int] = None,
    ) -> ExerciseLog:
        """Return the log of ``user_id``.

        - ``date_from`` and ``date_to`` bound the entry date, both inclusive.
        - ``limit`` keeps at most that many entries, oldest first.

        ``count`` in the result is the number of entries returned.
        """
        user = await UserService.require_user(conn, user_id)

        query = "SELECT description, duration, date FROM exercises WHERE user_id = ?"
        params: list = [user.id]
        if date_from:
            query += " AND logged_on >= ?"
            params.append(date_from.isoformat())
        if date_to:
            query += " AND logged_on <= ?"
            params.append(date_to.isoformat())
        query += " ORDER BY rowid"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        rows = conn.execute(query, tuple(params)).fetchall()
        log: List[LogEntry] = [
            LogEntry(description=row["description"], duration=row["duration"], date=row["date"])
            for row in rows
        ]
        logger.debug("Returning %d log entries for user %s", len(log), user.id)
        return ExerciseLog(username=user.username, count=len(log), id=user.id, log=log)
