"""Tests for the logging setup shared by the app and uvicorn."""
import logging

from exercise_tracker_api.app.core.logging_config import (
    LOG_FORMAT,
    UVICORN_LOGGERS,
    build_handlers,
    setup_logging,
)


def test_build_handlers_uses_service_format(tmp_path):
    logfile = tmp_path / "service.log"
    handlers = build_handlers(str(logfile))
    try:
        assert [type(handler) for handler in handlers] == [logging.StreamHandler, logging.FileHandler]
        for handler in handlers:
            assert handler.formatter._fmt == LOG_FORMAT
    finally:
        for handler in handlers:
            handler.close()


def test_setup_logging_routes_uvicorn_loggers_to_root():
    root = logging.getLogger()
    previous_level = root.level
    access = logging.getLogger("uvicorn.access")
    access.addHandler(logging.NullHandler())
    access.propagate = False
    try:
        setup_logging("DEBUG")
        assert root.level == logging.DEBUG
        for name in UVICORN_LOGGERS:
            server_logger = logging.getLogger(name)
            assert server_logger.handlers == []
            assert server_logger.propagate is True
            assert server_logger.level == logging.DEBUG
    finally:
        root.setLevel(previous_level)
