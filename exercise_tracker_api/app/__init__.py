"""
Application package initializer.

The service is split into a few small pieces: ``core`` holds settings,
logging and the SQLite store, ``schemas`` the request and response
models, ``services`` the user directory and exercise log, and ``api``
the routers that expose them under ``/api/users``.
"""

from .main import app  # noqa: F401
