"""
User endpoints.

``POST /api/users`` registers a username (or returns the existing
user with that name) and ``GET /api/users`` lists every user.
"""

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.core.db import get_db
from exercise_tracker_api.app.schemas.user import UserCreate, UserRead
from exercise_tracker_api.app.services.user_service import UserService


router = APIRouter()


@router.post("", response_model=UserRead)
async def register_user(
    username: Optional[str] = Form(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> UserRead:
    """Register ``username`` and return ``{username, _id}``.

    Registration is idempotent: an existing username is returned
    unchanged.  In permissive mode a missing username is registered as
    the empty string.
    """
    if settings.strict_validation:
        try:
            username = UserCreate(username=username).username
        except ValidationError as exc:
            raise RequestValidationError(exc.errors())
    return await UserService.register_or_fetch(conn, username or "")


@router.get("", response_model=List[UserRead])
async def list_users(conn: sqlite3.Connection = Depends(get_db)) -> List[UserRead]:
    """Return every user as ``{username, _id}``."""
    return await UserService.list_users(conn)
