"""
Pytest configuration and fixtures.

Every test gets its own SQLite file under ``tmp_path`` with the schema
applied, so nothing persists between tests.  The ``client`` fixture
points the ``get_db`` dependency at that file.
"""
import pytest
from fastapi.testclient import TestClient

from exercise_tracker_api.app.core.config import settings
from exercise_tracker_api.app.core.db import get_connection, get_db, init_db
from exercise_tracker_api.app.main import app


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "exercise_tracker_test.db")
    init_db(path)
    return path


@pytest.fixture
def conn(db_path):
    connection = get_connection(db_path)
    yield connection
    connection.close()


@pytest.fixture
def client(db_path):
    def _get_test_db():
        connection = get_connection(db_path)
        try:
            yield connection
        finally:
            connection.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def permissive(monkeypatch):
    """Switch the app to the legacy, permissive validation mode."""
    monkeypatch.setattr(settings, "strict_validation", False)


@pytest.fixture
def make_user(client):
    def _make_user(username="fcc_test"):
        response = client.post("/api/users", data={"username": username})
        assert response.status_code == 200
        return response.json()["_id"]

    return _make_user
