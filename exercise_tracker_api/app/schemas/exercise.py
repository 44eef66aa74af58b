"""
Pydantic models for exercise entries and user logs.

``ExerciseCreate`` carries the form fields of a new entry.  In strict
mode the request is validated with ``StrictExerciseCreate`` which
makes ``description`` and ``duration`` mandatory; in permissive mode a
missing description or a duration that is not an integer is stored as
null, like the legacy service did.  The ``date`` field is always
validated as a calendar date in ``yyyy-mm-dd`` form.
"""

import datetime
import re
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, Field


# Largest value an SQLite INTEGER column can hold.
SQLITE_INT_MAX = 2**63 - 1

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value):
    """Accept ``yyyy-mm-dd`` strings (and date objects) only.

    Pydantic's own date parsing also takes Unix timestamps such as
    ``"0"``; those are rejected here.
    """
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and _ISO_DATE.fullmatch(value.strip()):
        return datetime.date.fromisoformat(value.strip())
    raise ValueError("date must be in yyyy-mm-dd format")


IsoDate = Annotated[datetime.date, BeforeValidator(parse_iso_date)]


class ExerciseCreate(BaseModel):
    """Schema for a new exercise entry (permissive mode)."""

    description: Optional[str] = Field(None, examples=["test"])
    duration: Optional[int] = Field(None, examples=[60])
    date: Optional[IsoDate] = Field(None, examples=["1990-01-01"])


class StrictExerciseCreate(ExerciseCreate):
    """Schema for a new exercise entry (strict mode)."""

    description: str = Field(..., examples=["test"])
    duration: int = Field(..., ge=0, le=SQLITE_INT_MAX, examples=[60])


class ExerciseRead(BaseModel):
    """An exercise entry as stored, returned after creation."""

    id: str = Field(..., alias="_id")
    user_id: str = Field(..., alias="userId")
    username: Optional[str] = None
    date: str = Field(..., examples=["Mon Jan 01 1990"])
    duration: Optional[int] = None
    description: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class LogEntry(BaseModel):
    """One item of a user's log; owner and entry ids are stripped."""

    description: Optional[str] = None
    duration: Optional[int] = None
    date: str


class ExerciseLog(BaseModel):
    """A user's (possibly filtered) exercise log."""

    username: Optional[str] = None
    count: int
    id: str = Field(..., alias="_id")
    log: List[LogEntry]

    model_config = {
        "populate_by_name": True,
    }


def _lenient_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    if abs(number) > SQLITE_INT_MAX:
        return None
    return number


def parse_exercise_form(
    description: Optional[str],
    duration: Optional[str],
    date: Optional[str],
    strict: bool = True,
) -> ExerciseCreate:
    """Build an ``ExerciseCreate`` from raw form values.

    Empty strings are treated as absent.  Raises
    ``pydantic.ValidationError`` when the values do not satisfy the
    selected mode.
    """
    raw = {
        "description": description,
        "duration": duration or None,
        "date": date or None,
    }
    if strict:
        return StrictExerciseCreate(**raw)
    raw["duration"] = _lenient_int(raw["duration"])
    return ExerciseCreate(**raw)
