# adventure/domain/economy.py
from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from ..core.storage import Storage
    from .session import Session

STARS_PER_LEVEL = 10


def as_amount(value: int | float) -> int:
    """Montant entier de gemmes ou d'étoiles; ValueError si non entier."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"amount must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"amount must be an integer, got {value!r}")
    return int(value)


def level_for_stars(total_stars: int) -> int:
    """Niveau dérivé: 10 étoiles par niveau, en partant du niveau 1."""
    return total_stars // STARS_PER_LEVEL + 1


def stars_to_next_level(total_stars: int) -> int:
    return STARS_PER_LEVEL - total_stars % STARS_PER_LEVEL


def level_progress(total_stars: int) -> float:
    """Pourcentage d'avancement dans le niveau courant (0 à 90)."""
    return (total_stars % STARS_PER_LEVEL) / STARS_PER_LEVEL * 100


class LevelUp(NamedTuple):
    leveled_up: bool
    new_level: int


class Ledger:
    """Gemmes et étoiles de l'utilisateur courant (aucun état propre)."""

    def __init__(self, store: Storage, session: Session):
        self.store = store
        self.session = session

    @property
    def level(self) -> int:
        user = self.session.current_user()
        return user.level if user else 1

    @property
    def total_gems(self) -> int:
        user = self.session.current_user()
        return user.total_gems if user else 0

    @property
    def total_stars(self) -> int:
        user = self.session.current_user()
        return user.total_stars if user else 0

    def add_gems(self, amount: int) -> None:
        user_id = self.session.current_user_id
        if not user_id:
            return
        self.store.add_gems(user_id, amount)

    def add_stars(self, amount: int) -> LevelUp | None:
        user_id = self.session.current_user_id
        if not user_id:
            return None
        old_level = self.level
        self.store.add_stars(user_id, amount)
        new_level = self.level
        return LevelUp(new_level > old_level, new_level)

    def can_purchase(self, cost: int) -> bool:
        return self.total_gems >= cost

    def spend_gems(self, amount: int) -> bool:
        amount = as_amount(amount)
        if not self.can_purchase(amount):
            return False
        user_id = self.session.current_user_id
        if not user_id:
            return False
        self.store.update_user(user_id, total_gems=self.total_gems - amount)
        return True
