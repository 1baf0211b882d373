from __future__ import annotations

import json
import os

import pytest

from adventure.core.cli import run
from adventure.core.storage import SQLiteStorage


@pytest.fixture
def db(tmp_path):
    return str(tmp_path / "adventure.db")


async def _seed(db):
    with SQLiteStorage.open(db) as store:
        user = await store.create_user("alice", "pw1")
        store.add_gems(user.id, 12)
        store.set_current_user(user.id)
    return user


def test_init_creates_database(db, capsys):
    assert run(["--db", db, "init"]) == 0
    assert capsys.readouterr().out.startswith("OK: ")
    assert os.path.exists(db)


async def test_users_and_export(db, tmp_path, capsys):
    user = await _seed(db)
    assert run(["--db", db, "users"]) == 0
    out = capsys.readouterr().out
    assert "* alice" in out and user.id in out

    target = tmp_path / "dump.json"
    assert run(["--db", db, "export", "-o", str(target)]) == 0
    doc = json.loads(target.read_text(encoding="utf-8"))
    assert doc["users"][0]["totalGems"] == 12


async def test_import_into_fresh_db(db, tmp_path, capsys):
    await _seed(db)
    dump = tmp_path / "dump.json"
    run(["--db", db, "export", "-o", str(dump)])

    other = str(tmp_path / "other.db")
    assert run(["--db", other, "import", str(dump)]) == 0
    assert "1 utilisateur" in capsys.readouterr().out
    with SQLiteStorage.open(other) as store:
        assert [u.username for u in store.get_users()] == ["alice"]


def test_import_invalid_file(db, tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    assert run(["--db", db, "import", str(bad)]) == 1
    assert "Import impossible" in capsys.readouterr().err
    assert run(["--db", db, "import", str(tmp_path / "missing.json")]) == 1


async def test_reset_requires_yes(db, capsys):
    await _seed(db)
    assert run(["--db", db, "reset"]) == 1
    with SQLiteStorage.open(db) as store:
        assert len(store.get_users()) == 1

    assert run(["--db", db, "reset", "--yes"]) == 0
    with SQLiteStorage.open(db) as store:
        assert store.get_users() == []
        assert store.get_current_user_id() is None


async def test_health(db, capsys):
    await _seed(db)
    assert run(["--db", db, "health"]) == 0
    out = capsys.readouterr().out
    assert "journal=WAL" in out
    assert "math_adventure_version" in out
    assert "Utilisateurs: 1" in out
    assert "Catalogue   : 6 objets" in out
