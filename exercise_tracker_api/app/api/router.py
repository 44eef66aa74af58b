"""
Top‑level API router.

Aggregates the routers of the ``endpoints`` package.  Both modules
serve the ``/users`` resource: ``users`` registers and lists users,
``exercises`` appends to and reads a user's log.
"""

from fastapi import APIRouter

from .endpoints import exercises, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(exercises.router, prefix="/users", tags=["exercises"])
