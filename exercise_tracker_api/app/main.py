"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application, sets up logging and
includes the API router under ``/api``.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``, e.g.::

    uvicorn exercise_tracker_api.app.main:app --reload

The landing page at ``/`` and its assets under ``/public`` are served
from the ``views`` and ``static`` directories next to this file.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging


BASE_DIR = Path(__file__).resolve().parent


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")
    app.mount("/public", StaticFiles(directory=BASE_DIR / "static"), name="public")

    @app.get("/", include_in_schema=False)
    async def index() -> FileResponse:
        return FileResponse(BASE_DIR / "views" / "index.html")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies migrations.
        init_db()

    return app


app = create_app()
