"""
Logging configuration for the API and the uvicorn server around it.

``setup_logging`` attaches the service's handlers to the root logger
and hands uvicorn's own loggers over to it, so request lines from
``uvicorn.access`` and server messages from ``uvicorn.error`` come out
in the same format as the application's records.  ``run.py`` starts
uvicorn with ``log_config=None`` so the server keeps this setup.
"""

import logging
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_handlers(logfile: Optional[str] = None) -> List[logging.Handler]:
    """Console handler, plus a UTF-8 file handler when ``logfile`` is set."""
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and route uvicorn's loggers through it.

    Handlers are only added when the root logger has none, e.g. pytest
    installs its own.  The level is applied every time.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        for handler in build_handlers(logfile):
            root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(numeric_level)
