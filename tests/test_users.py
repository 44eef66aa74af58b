"""
Tests for user registration and listing.

Covers:
- register returns {username, _id} and is idempotent per username
- listing returns every user as {username, _id}
- strict vs permissive handling of a missing username
"""
import asyncio
import sqlite3

import pytest

from exercise_tracker_api.app.services.user_service import UserNotFoundError, UserService


def test_register_returns_username_and_id(client):
    response = client.post("/api/users", data={"username": "fcc_test"})
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "fcc_test"
    assert isinstance(body["_id"], str) and body["_id"]
    assert set(body) == {"username", "_id"}


def test_register_twice_returns_same_user(client, conn):
    first = client.post("/api/users", data={"username": "repeat"}).json()
    second = client.post("/api/users", data={"username": "repeat"}).json()
    assert first == second
    count = conn.execute("SELECT COUNT(*) FROM users WHERE username = 'repeat'").fetchone()[0]
    assert count == 1


def test_list_users(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    response = client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == [
        {"username": "alice", "_id": alice},
        {"username": "bob", "_id": bob},
    ]


def test_list_users_empty(client):
    assert client.get("/api/users").json() == []


def test_strict_mode_rejects_missing_username(client, conn):
    assert client.post("/api/users", data={}).status_code == 422
    assert client.post("/api/users", data={"username": ""}).status_code == 422
    assert conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 0


def test_permissive_mode_registers_missing_username_as_empty(client, permissive):
    response = client.post("/api/users", data={})
    assert response.status_code == 200
    assert response.json()["username"] == ""
    again = client.post("/api/users", data={"username": ""})
    assert again.json()["_id"] == response.json()["_id"]


def test_service_get_and_require_user(conn):
    user = asyncio.run(UserService.register_or_fetch(conn, "carol"))
    assert asyncio.run(UserService.get_user_by_id(conn, user.id)) == user
    assert asyncio.run(UserService.get_user_by_id(conn, "missing")) is None
    with pytest.raises(UserNotFoundError) as excinfo:
        asyncio.run(UserService.require_user(conn, "missing"))
    assert excinfo.value.user_id == "missing"
    assert excinfo.value.message == "This user doesn't exist!"


def test_concurrent_registration_loser_gets_integrity_error(conn, monkeypatch):
    # Another request registered "race" between our lookup and our insert.
    first = asyncio.run(UserService.register_or_fetch(conn, "race"))

    async def _lookup_misses(cls, conn, username):
        return None

    monkeypatch.setattr(UserService, "find_by_username", classmethod(_lookup_misses))
    with pytest.raises(sqlite3.IntegrityError):
        asyncio.run(UserService.register_or_fetch(conn, "race"))

    assert not conn.in_transaction
    other = asyncio.run(UserService.register_or_fetch(conn, "after-race"))
    assert [user.username for user in asyncio.run(UserService.list_users(conn))] == ["race", "after-race"]
    assert other.id != first.id
