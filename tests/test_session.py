from __future__ import annotations

from adventure.core.storage import SQLiteStorage
from adventure.domain.session import Session


async def test_create_account_logs_in(session, alice):
    assert session.is_authenticated
    assert session.current_user_id == alice.id
    assert alice.username == "alice"


async def test_duplicate_account_returns_false(session, alice, caplog):
    assert await session.create_account("alice", "other") is False
    assert "Username already exists" in caplog.text
    assert len(session.all_users()) == 1
    assert session.current_user_id == alice.id


async def test_login_logout(session, alice):
    session.logout()
    assert not session.is_authenticated
    assert session.current_user() is None

    assert await session.login("alice", "bad") is False
    assert not session.is_authenticated
    assert await session.login("alice", "pw1") is True
    assert session.current_user_id == alice.id


async def test_switch_user(session, alice):
    assert await session.create_account("bob", "pw2")
    bob_id = session.current_user_id
    assert session.switch_user(alice.id) is True
    assert session.current_user_id == alice.id
    assert session.switch_user("ghost") is False
    assert session.current_user_id == alice.id
    assert {u.id for u in session.all_users()} == {alice.id, bob_id}


async def test_current_user_survives_restart(tmp_path):
    path = str(tmp_path / "adventure.db")
    with SQLiteStorage.open(path) as store:
        assert await Session(store).create_account("alice", "pw1")
    with SQLiteStorage.open(path) as store:
        user = Session(store).current_user()
        assert user is not None and user.username == "alice"
