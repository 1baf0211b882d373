from . import v0001_base

LATEST = 1

def migrate_if_needed(con):
    (ver,) = con.execute("PRAGMA user_version").fetchone()
    ver = int(ver or 0)

    if ver < 1:
        v0001_base.apply(con); con.execute("PRAGMA user_version=1"); ver = 1
    return ver

def current_version(con) -> int:
    (ver,) = con.execute("PRAGMA user_version").fetchone()
    return int(ver or 0)
