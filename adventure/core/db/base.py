# adventure/core/db/base.py
from __future__ import annotations
import os, sqlite3
from contextlib import contextmanager

MEMORY = ":memory:"

def connect(path: str) -> sqlite3.Connection:
    if path != MEMORY:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    con = sqlite3.connect(path, check_same_thread=False, isolation_level=None, timeout=5.0)
    con.row_factory = sqlite3.Row
    if path != MEMORY:
        con.execute("PRAGMA journal_mode=WAL;")
    con.execute("PRAGMA synchronous=NORMAL;")
    con.execute("PRAGMA temp_store=MEMORY;")
    con.execute("PRAGMA busy_timeout=5000;")
    return con

@contextmanager
def atomic(con: sqlite3.Connection, immediate=True):
    try:
        con.execute("BEGIN IMMEDIATE;" if immediate else "BEGIN;")
        yield con
        con.execute("COMMIT;")
    except Exception:
        con.execute("ROLLBACK;")
        raise

def database_path(con: sqlite3.Connection) -> str | None:
    """Fichier principal de la connexion (None pour une base en mémoire)."""
    for _, name, file in con.execute("PRAGMA database_list;").fetchall():
        if name == "main":
            return file or None
    return None
