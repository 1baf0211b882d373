# adventure/core/cli.py
from __future__ import annotations
import argparse, logging, os, platform, sys
from pathlib import Path

import psutil

from .config import settings
from .storage import SQLiteStorage
from ..domain.catalog import get_catalog
from ..domain.errors import InvalidData

# ── Logging
log = logging.getLogger("adventure")


def _fmt_bytes(n: float) -> str:
    for u in ("B", "KB", "MB", "GB"):
        if n < 1024.0:
            return f"{n:.1f} {u}"
        n /= 1024.0
    return f"{n:.1f} TB"


def cmd_init(store: SQLiteStorage, args) -> int:
    print(f"OK: {store.stats()['db_path'] or ':memory:'}")
    return 0


def cmd_users(store: SQLiteStorage, args) -> int:
    users = store.get_users()
    if not users:
        print("Aucun utilisateur.")
        return 0
    current = store.get_current_user_id()
    for u in users:
        mark = "*" if u.id == current else " "
        print(f"{mark} {u.username:<20} lvl {u.level:<3} gems {u.total_gems:<5} stars {u.total_stars:<5} {u.id}")
    return 0


def cmd_export(store: SQLiteStorage, args) -> int:
    data = store.export_data()
    if args.output:
        Path(args.output).write_text(data, encoding="utf-8")
        log.info("Export écrit dans %s", args.output)
    else:
        print(data)
    return 0


def cmd_import(store: SQLiteStorage, args) -> int:
    try:
        store.import_data(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, InvalidData) as e:
        print(f"Import impossible: {e}", file=sys.stderr)
        return 1
    print(f"Import OK: {len(store.get_users())} utilisateur(s)")
    return 0


def cmd_reset(store: SQLiteStorage, args) -> int:
    if not args.yes:
        print("⚠️ Ajoute --yes pour tout effacer.", file=sys.stderr)
        return 1
    store.clear_all_data()
    print("Données réinitialisées.")
    return 0


def cmd_health(store: SQLiteStorage, args) -> int:
    info = store.stats()
    db_path = info["db_path"]
    size = _fmt_bytes(os.path.getsize(db_path)) if db_path and os.path.exists(db_path) else "n/a"
    catalog = get_catalog(settings.catalog_path)

    print(f"DB          : {db_path or ':memory:'} ({size})")
    print(f"SQLite      : journal={info['journal_mode']} • user_version={info['schema_version']}")
    print(f"Stockage    : version={info['storage_version']} • clés: {', '.join(info['keys'])}")
    print(f"Utilisateurs: {info['users']} • fiches de progression: {info['progress']}")
    print(f"Catalogue   : {len(catalog.items)} objets • {len(catalog.badges)} badges • {len(catalog.quests)} quêtes")
    print(f"Mémoire     : {psutil.Process().memory_info().rss / 1024**2:.1f} MB")
    print(f"Python      : {platform.python_version()}")
    return 0


COMMANDS = {
    "init": cmd_init,
    "users": cmd_users,
    "export": cmd_export,
    "import": cmd_import,
    "reset": cmd_reset,
    "health": cmd_health,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="math-adventure", description="Administration du stockage local.")
    parser.add_argument("--db", default=None, help="Chemin de la base SQLite (défaut: ADVENTURE_DATA_DIR/ADVENTURE_DB_NAME).")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Crée la base et le marqueur de version.")
    sub.add_parser("users", help="Liste les utilisateurs.")
    p = sub.add_parser("export", help="Exporte un snapshot JSON.")
    p.add_argument("-o", "--output", default=None)
    p = sub.add_parser("import", help="Remplace toutes les données par un snapshot JSON.")
    p.add_argument("file")
    p = sub.add_parser("reset", help="Efface toutes les données.")
    p.add_argument("--yes", action="store_true")
    sub.add_parser("health", help="État de la base et du process.")
    return parser


def run(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")
    args = build_parser().parse_args(argv)

    # migrations au boot (dans open()), puis la commande
    with SQLiteStorage.open(args.db) as store:
        return COMMANDS[args.command](store, args)
