"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first with ``python-dotenv`` so local deployments can keep the
database path and port next to the code.  Defaults are provided for
all fields.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Exercise Tracker")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "exercise_tracker.db")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Strict mode rejects a blank username, a missing description and a
    # non-integer duration with 422.  Permissive mode stores them as the
    # legacy service did (empty username, null description/duration).
    strict_validation: bool = _env_flag("STRICT_VALIDATION", "true")

    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
