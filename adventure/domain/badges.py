# adventure/domain/badges.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .catalog import UnlockType

if TYPE_CHECKING:
    from ..core.storage import Storage
    from .catalog import Badge
    from .economy import Ledger
    from .session import Session

log = logging.getLogger(__name__)


def _threshold(value: int | float | str) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class BadgeEvaluator:
    def __init__(self, store: Storage, session: Session, ledger: Ledger):
        self.store = store
        self.session = session
        self.ledger = ledger

    def earned(self) -> list[str]:
        user_id = self.session.current_user_id
        return self.store.get_user_progress(user_id).earned_badges if user_id else []

    def has_badge(self, badge_id: str) -> bool:
        return badge_id in self.earned()

    def check_unlock(self, badge: Badge) -> bool:
        """
        Évaluateur partiel: seuls gems_earned / stars_earned sont tranchés ici.
        quest_complete / quests_completed renvoient False, l'appelant (suivi des
        quêtes) doit les vérifier lui-même.
        """
        if self.has_badge(badge.id):
            return False

        criteria = badge.unlock_criteria
        if criteria.type in (UnlockType.GEMS_EARNED, UnlockType.STARS_EARNED):
            threshold = _threshold(criteria.value)
            if threshold is None:
                log.warning("Badge %s: seuil invalide %r", badge.id, criteria.value)
                return False
            total = self.ledger.total_gems if criteria.type == UnlockType.GEMS_EARNED else self.ledger.total_stars
            return total >= threshold
        return False

    def award(self, badge_id: str) -> bool:
        user_id = self.session.current_user_id
        if not user_id:
            return False
        return self.store.award_badge(user_id, badge_id)
