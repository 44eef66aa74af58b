"""
Pydantic models for user data.

Users are exposed with the document-store style ``_id`` key.  Field
names starting with an underscore are private in pydantic, so the
attribute is called ``id`` and serialised through its alias.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user (strict mode)."""

    username: str = Field(..., min_length=1, examples=["fcc_test"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    username: str = Field(..., examples=["fcc_test"])
    id: str = Field(..., alias="_id", examples=["5fb5853f734231456ccb3b05"])

    model_config = {
        "populate_by_name": True,
    }


class ErrorResponse(BaseModel):
    """Body returned with status 200 when a referenced user is unknown."""

    error: str = Field(..., examples=["This user doesn't exist!"])
