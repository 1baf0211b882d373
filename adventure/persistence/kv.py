from ..core.db.base import atomic

def get(con, key: str) -> str | None:
    row = con.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
    return None if row is None else str(row[0])

def put(con, key: str, value: str) -> None:
    con.execute(
        "INSERT INTO kv(key, value, updated_ts) VALUES(?,?, strftime('%s','now')) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_ts=excluded.updated_ts",
        (key, value)
    )

def remove(con, key: str) -> None:
    con.execute("DELETE FROM kv WHERE key=?", (key,))

def put_many(con, items: list[tuple[str, str]]) -> None:
    with atomic(con):
        for key, value in items:
            put(con, key, value)

def remove_many(con, keys: list[str]) -> None:
    with atomic(con):
        for key in keys:
            remove(con, key)

def keys(con) -> list[str]:
    rows = con.execute("SELECT key FROM kv ORDER BY key").fetchall()
    return [r[0] for r in rows]
