"""Entry point for the Exercise Tracker API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as ``DATABASE_URL`` and ``PORT`` may be placed in a
``.env`` file in the same directory.  See ``.env.example`` for the
supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.main import app


logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API on ``settings.host``/``settings.port``."""
    # log_config=None keeps the handlers installed by setup_logging.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Your app is listening on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
