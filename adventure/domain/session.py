# adventure/domain/session.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .errors import Collision
from .models import User

if TYPE_CHECKING:
    from ..core.storage import Storage

log = logging.getLogger(__name__)


class Session:
    """Utilisateur « courant »; l'id est persisté sous la clé current_user."""

    def __init__(self, store: Storage):
        self.store = store

    def current_user(self) -> User | None:
        return self.store.get_current_user()

    @property
    def current_user_id(self) -> str | None:
        user = self.current_user()
        return user.id if user else None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    async def login(self, username: str, password: str) -> bool:
        user = await self.store.authenticate_user(username, password)
        if user is None:
            log.info("Échec de connexion pour %r", username)
            return False
        self.store.set_current_user(user.id)
        return True

    async def create_account(self, username: str, password: str) -> bool:
        try:
            user = await self.store.create_user(username, password)
        except Collision as e:
            log.warning("Create user error: %s", e)
            return False
        self.store.set_current_user(user.id)
        return True

    def logout(self) -> None:
        self.store.clear_current_user()

    def switch_user(self, user_id: str) -> bool:
        if self.store.get_user(user_id) is None:
            return False
        self.store.set_current_user(user_id)
        return True

    def all_users(self) -> list[User]:
        return self.store.get_users()
