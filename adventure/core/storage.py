# adventure/core/storage.py: store persistant (kv SQLite) + cache deux slots
from __future__ import annotations
import asyncio, hashlib, json, logging, uuid
from typing import Any

from pydantic import ValidationError

from .config import settings
from .db.base import connect, atomic, database_path
from .db.migrations import migrate_if_needed, current_version
from ..persistence import kv
from ..domain.clock import now_ms
from ..domain.economy import as_amount, level_for_stars
from ..domain.errors import Collision, InvalidData, NotFound, NotOwned
from ..domain.models import (
    MUTABLE_USER_FIELDS,
    STORAGE_VERSION,
    QuestProgress,
    Snapshot,
    User,
    UserProgress,
)

log = logging.getLogger(__name__)

KEY_VERSION = "math_adventure_version"
KEY_USERS = "math_adventure_users"
KEY_CURRENT_USER = "math_adventure_current_user"
KEY_PROGRESS = "math_adventure_progress"
ALL_KEYS = (KEY_VERSION, KEY_USERS, KEY_CURRENT_USER, KEY_PROGRESS)

def _sha256_hex(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _users_json(users: list[User]) -> str:
    return json.dumps([u.dump() for u in users], ensure_ascii=False)


def _progress_json(progress: dict[str, UserProgress]) -> str:
    return json.dumps({uid: p.dump() for uid, p in progress.items()}, ensure_ascii=False)


class Storage:
    # API de stockage (les composants domain ne connaissent que cette interface)
    def initialize(self) -> None: ...
    def get_users(self) -> list[User]: ...
    def get_user(self, user_id: str) -> User | None: ...
    async def hash_password(self, password: str) -> str: ...
    async def create_user(self, username: str, password: str) -> User: ...
    async def authenticate_user(self, username: str, password: str) -> User | None: ...
    def update_user(self, user_id: str, **fields: Any) -> None: ...
    def get_current_user_id(self) -> str | None: ...
    def get_current_user(self) -> User | None: ...
    def set_current_user(self, user_id: str) -> None: ...
    def clear_current_user(self) -> None: ...
    def get_user_progress(self, user_id: str) -> UserProgress: ...
    def update_quest_progress(self, user_id: str, quest_id: str, progress: QuestProgress) -> None: ...
    def get_quest_progress(self, user_id: str, quest_id: str) -> QuestProgress | None: ...
    def add_gems(self, user_id: str, amount: int) -> None: ...
    def add_stars(self, user_id: str, amount: int) -> bool: ...
    def check_level_up(self, user_id: str) -> bool: ...
    def purchase_item(self, user_id: str, item_id: str, cost: int) -> bool: ...
    def equip_item(self, user_id: str, item_id: str) -> bool: ...
    def award_badge(self, user_id: str, badge_id: str) -> bool: ...
    def export_data(self) -> str: ...
    def import_data(self, data: str | bytes) -> None: ...
    def clear_all_data(self) -> None: ...


class SQLiteStorage(Storage):
    """
    Source de vérité unique pour les tables `users` et `progress`.

    Chaque table a exactement un slot de cache par instance: rempli à la
    première lecture, vidé de façon synchrone par toute écriture sur cette
    table. Une écriture remplace le document JSON complet en un seul `set`.
    Les getters publics rendent des copies: l'appelant ne touche jamais au cache.
    """

    def __init__(self, con):
        self._con = con
        self._users_cache: list[User] | None = None
        self._progress_cache: dict[str, UserProgress] | None = None

    @classmethod
    def open(cls, path: str | None = None) -> "SQLiteStorage":
        con = connect(path or settings.db_path())
        migrate_if_needed(con)
        store = cls(con)
        store.initialize()
        return store

    def close(self) -> None:
        self._con.close()

    def __enter__(self) -> "SQLiteStorage":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── Cache
    def _invalidate_users(self) -> None:
        self._users_cache = None

    def _invalidate_progress(self) -> None:
        self._progress_cache = None

    def initialize(self) -> None:
        if kv.get(self._con, KEY_VERSION) is not None:
            return
        kv.put_many(self._con, [
            (KEY_VERSION, STORAGE_VERSION),
            (KEY_USERS, "[]"),
            (KEY_PROGRESS, "{}"),
        ])
        self._invalidate_users()
        self._invalidate_progress()
        log.info("Stockage initialisé (version %s)", STORAGE_VERSION)

    # ── Tables brutes (partagées avec le cache, jamais exposées)
    def _load(self, key: str, label: str, empty: type):
        raw = kv.get(self._con, key)
        if not raw:
            return empty()
        try:
            data = json.loads(raw)
        except ValueError:
            log.exception("Error reading %s; treating table as empty", label)
            return empty()
        if not isinstance(data, empty):
            log.error("Error reading %s: expected %s, got %s; treating table as empty",
                      label, empty.__name__, type(data).__name__)
            return empty()
        return data

    def _users(self) -> list[User]:
        if self._users_cache is not None:
            return self._users_cache
        users: list[User] = []
        # un enregistrement invalide est ignoré, les autres restent lisibles
        for i, entry in enumerate(self._load(KEY_USERS, "users", list)):
            try:
                users.append(User.model_validate(entry))
            except ValidationError as e:
                log.warning("users[%d] ignoré (invalide): %s", i, e)
        self._users_cache = users
        return users

    def _all_progress(self) -> dict[str, UserProgress]:
        if self._progress_cache is not None:
            return self._progress_cache
        progress: dict[str, UserProgress] = {}
        for uid, entry in self._load(KEY_PROGRESS, "progress", dict).items():
            try:
                progress[uid] = UserProgress.model_validate(entry)
            except ValidationError as e:
                log.warning("progress[%s] ignoré (invalide): %s", uid, e)
        self._progress_cache = progress
        return progress

    def _progress_copy(self) -> dict[str, UserProgress]:
        return {uid: p.model_copy(deep=True) for uid, p in self._all_progress().items()}

    def _save_users(self, users: list[User]) -> None:
        kv.put(self._con, KEY_USERS, _users_json(users))
        self._invalidate_users()

    def _save_progress(self, progress: dict[str, UserProgress]) -> None:
        kv.put(self._con, KEY_PROGRESS, _progress_json(progress))
        self._invalidate_progress()

    # ── Utilisateurs
    def get_users(self) -> list[User]:
        return [u.model_copy(deep=True) for u in self._users()]

    def get_user(self, user_id: str) -> User | None:
        user = next((u for u in self._users() if u.id == user_id), None)
        return user.model_copy(deep=True) if user else None

    async def hash_password(self, password: str) -> str:
        # SHA-256 sans sel ni itérations: placeholder, pas un schéma de prod.
        return await asyncio.to_thread(_sha256_hex, password)

    async def create_user(self, username: str, password: str) -> User:
        if any(u.username == username for u in self._users()):
            raise Collision(username)

        password_hash = await self.hash_password(password)
        # le hash suspend l'appelant: on revérifie après la reprise
        if any(u.username == username for u in self._users()):
            raise Collision(username)

        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=password_hash,
            created_at=now_ms(),
        )
        users = self.get_users()
        users.append(user)
        progress = self._progress_copy()
        progress[user.id] = UserProgress.empty(user.id)
        with atomic(self._con):
            self._save_users(users)
            self._save_progress(progress)
        log.info("Utilisateur créé: %s (%s)", username, user.id)
        return user.model_copy(deep=True)

    async def authenticate_user(self, username: str, password: str) -> User | None:
        password_hash = await self.hash_password(password)
        user = next(
            (u for u in self._users() if u.username == username and u.password_hash == password_hash),
            None,
        )
        return user.model_copy(deep=True) if user else None

    def update_user(self, user_id: str, **fields: Any) -> None:
        ignored = sorted(set(fields) - set(MUTABLE_USER_FIELDS))
        if ignored:
            log.warning("update_user(%s): champs immuables ignorés %s", user_id, ignored)

        users = self.get_users()
        idx = next((i for i, u in enumerate(users) if u.id == user_id), None)
        if idx is None:
            raise NotFound("user", user_id)

        updates = {k: v for k, v in fields.items() if k in MUTABLE_USER_FIELDS and v is not None}
        users[idx] = User.model_validate({**users[idx].model_dump(), **updates})
        self._save_users(users)

    # ── Session
    def get_current_user_id(self) -> str | None:
        return kv.get(self._con, KEY_CURRENT_USER)

    def get_current_user(self) -> User | None:
        user_id = self.get_current_user_id()
        if not user_id:
            return None
        return self.get_user(user_id)

    def set_current_user(self, user_id: str) -> None:
        kv.put(self._con, KEY_CURRENT_USER, user_id)

    def clear_current_user(self) -> None:
        kv.remove(self._con, KEY_CURRENT_USER)

    # ── Progression
    def get_user_progress(self, user_id: str) -> UserProgress:
        record = self._all_progress().get(user_id)
        if record is not None:
            return record.model_copy(deep=True)

        # Rattrapage: utilisateur sans fiche de progression
        progress = self._progress_copy()
        progress[user_id] = UserProgress.empty(user_id)
        self._save_progress(progress)
        return UserProgress.empty(user_id)

    def update_quest_progress(self, user_id: str, quest_id: str, progress: QuestProgress) -> None:
        all_progress = self._progress_copy()
        record = all_progress.setdefault(user_id, UserProgress.empty(user_id))
        record.quest_progress[quest_id] = progress.model_copy(deep=True)
        self._save_progress(all_progress)

    def get_quest_progress(self, user_id: str, quest_id: str) -> QuestProgress | None:
        return self.get_user_progress(user_id).quest_progress.get(quest_id)

    # ── Gemmes / étoiles
    def add_gems(self, user_id: str, amount: int) -> None:
        user = self.get_user(user_id)
        if user is None:
            log.warning("add_gems: utilisateur inconnu %s", user_id)
            return
        self.update_user(user_id, total_gems=user.total_gems + as_amount(amount))

    def add_stars(self, user_id: str, amount: int) -> bool:
        user = self.get_user(user_id)
        if user is None:
            log.warning("add_stars: utilisateur inconnu %s", user_id)
            return False
        self.update_user(user_id, total_stars=user.total_stars + as_amount(amount))
        return self.check_level_up(user_id)

    def check_level_up(self, user_id: str) -> bool:
        user = self.get_user(user_id)
        if user is None:
            return False
        new_level = level_for_stars(user.total_stars)
        # le niveau ne redescend jamais
        if new_level > user.level:
            self.update_user(user_id, level=new_level)
            log.info("Niveau %d -> %d pour %s", user.level, new_level, user_id)
            return True
        return False

    # ── Objets & badges
    def purchase_item(self, user_id: str, item_id: str, cost: int) -> bool:
        cost = as_amount(cost)
        user = self.get_user(user_id)
        if user is None:
            return False
        if user.total_gems < cost:
            return False
        if item_id in self.get_user_progress(user_id).owned_items:
            return False

        users = self.get_users()
        for u in users:
            if u.id == user_id:
                u.total_gems -= cost
        progress = self._progress_copy()
        progress[user_id].owned_items.append(item_id)
        with atomic(self._con):
            self._save_users(users)
            self._save_progress(progress)
        log.info("Achat %s pour %d gemmes (%s)", item_id, cost, user_id)
        return True

    def equip_item(self, user_id: str, item_id: str) -> bool:
        if item_id not in self.get_user_progress(user_id).owned_items:
            raise NotOwned(item_id)

        progress = self._progress_copy()
        record = progress[user_id]
        if item_id in record.equipped_items:
            record.equipped_items = [i for i in record.equipped_items if i != item_id]
            equipped = False
        else:
            record.equipped_items.append(item_id)
            equipped = True
        self._save_progress(progress)
        return equipped

    def award_badge(self, user_id: str, badge_id: str) -> bool:
        if badge_id in self.get_user_progress(user_id).earned_badges:
            return False
        progress = self._progress_copy()
        progress[user_id].earned_badges.append(badge_id)
        self._save_progress(progress)
        log.info("Badge %s attribué à %s", badge_id, user_id)
        return True

    # ── Import / export / reset
    def export_data(self) -> str:
        snapshot = Snapshot(users=self._users(), progress=self._all_progress())
        return json.dumps(snapshot.dump(), ensure_ascii=False)

    def import_data(self, data: str | bytes) -> None:
        try:
            snapshot = Snapshot.model_validate_json(data)
        except ValidationError as e:
            log.error("Error importing data: %s", e)
            raise InvalidData("Invalid data format") from e

        kv.put_many(self._con, [
            (KEY_VERSION, snapshot.version or STORAGE_VERSION),
            (KEY_USERS, _users_json(snapshot.users)),
            (KEY_PROGRESS, _progress_json(snapshot.progress)),
        ])
        # caches vidés seulement une fois les trois écritures validées
        self._invalidate_users()
        self._invalidate_progress()
        log.info("Import: %d utilisateurs", len(snapshot.users))

    def clear_all_data(self) -> None:
        kv.remove_many(self._con, list(ALL_KEYS))
        self._invalidate_users()
        self._invalidate_progress()
        self.initialize()

    # Petit helper debug (commande `health`)
    def stats(self) -> dict:
        return {
            "db_path": database_path(self._con),
            "schema_version": current_version(self._con),
            "journal_mode": str(self._con.execute("PRAGMA journal_mode;").fetchone()[0]).upper(),
            "storage_version": kv.get(self._con, KEY_VERSION),
            "keys": kv.keys(self._con),
            "users": len(self._users()),
            "progress": len(self._all_progress()),
        }
