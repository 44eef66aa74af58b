"""
Exercise log endpoints.

An unknown user id is not an HTTP error here: both endpoints answer
with status 200 and ``{"error": "This user doesn't exist!"}``, which
existing clients of the service check for.
"""

import logging
import sqlite3
from typing import Optional, Union

from fastapi import APIRouter, Depends, Form, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.core.db import get_db
from exercise_tracker_api.app.schemas.exercise import (
    SQLITE_INT_MAX,
    ExerciseLog,
    ExerciseRead,
    IsoDate,
    parse_exercise_form,
)
from exercise_tracker_api.app.schemas.user import ErrorResponse
from exercise_tracker_api.app.services.exercise_service import ExerciseService
from exercise_tracker_api.app.services.user_service import UserNotFoundError


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{user_id}/exercises", response_model=Union[ExerciseRead, ErrorResponse])
async def add_exercise(
    user_id: str,
    description: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    date: Optional[str] = Form(None, description="yyyy-mm-dd; today when omitted"),
    conn: sqlite3.Connection = Depends(get_db),
) -> Union[ExerciseRead, ErrorResponse]:
    """Append an exercise to the user's log and return the stored entry."""
    try:
        data = parse_exercise_form(description, duration, date, strict=settings.strict_validation)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors())
    try:
        return await ExerciseService.append(conn, user_id, data)
    except UserNotFoundError as exc:
        return ErrorResponse(error=exc.message)


@router.get("/{user_id}/logs", response_model=Union[ExerciseLog, ErrorResponse])
async def get_log(
    user_id: str,
    date_from: Optional[IsoDate] = Query(None, alias="from", description="yyyy-mm-dd, inclusive"),
    date_to: Optional[IsoDate] = Query(None, alias="to", description="yyyy-mm-dd, inclusive"),
    limit: Optional[int] = Query(None, ge=0, le=SQLITE_INT_MAX, description="Maximum number of entries"),
    conn: sqlite3.Connection = Depends(get_db),
) -> Union[ExerciseLog, ErrorResponse]:
    """Return ``{username, count, _id, log}`` for the user.

    ``from``/``to`` restrict entries by date and ``limit`` caps how many
    are returned, oldest first.
    """
    logger.info("Log requested for user %s (from=%s, to=%s, limit=%s)", user_id, date_from, date_to, limit)
    try:
        return await ExerciseService.query(conn, user_id, date_from, date_to, limit)
    except UserNotFoundError as exc:
        return ErrorResponse(error=exc.message)
