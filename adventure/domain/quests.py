# adventure/domain/quests.py
from __future__ import annotations
from typing import TYPE_CHECKING

from .clock import now_ms
from .models import QuestProgress, QuestStatus

if TYPE_CHECKING:
    from ..core.storage import Storage
    from .session import Session


class QuestTracker:
    """
    Machine à états par (utilisateur, quête):
    not_started -[start]-> in_progress -[update*]-> in_progress -[complete]-> completed

    Toutes les opérations sont des no-op sans utilisateur courant.
    """

    def __init__(self, store: Storage, session: Session):
        self.store = store
        self.session = session
        self.current_quest_id: str | None = None

    def all(self) -> dict[str, QuestProgress]:
        user_id = self.session.current_user_id
        if not user_id:
            return {}
        return self.store.get_user_progress(user_id).quest_progress

    def get(self, quest_id: str) -> QuestProgress | None:
        return self.all().get(quest_id)

    def start(self, quest_id: str) -> None:
        user_id = self.session.current_user_id
        if not user_id:
            return
        # relancer une quête existante conserve tentatives et réponses
        if self.get(quest_id) is None:
            self.store.update_quest_progress(user_id, quest_id, QuestProgress(
                quest_id=quest_id,
                status=QuestStatus.IN_PROGRESS,
                attempts=1,
            ))
        self.current_quest_id = quest_id

    def update(self, quest_id: str, correct_answers: int, total_answers: int, completed: bool = False) -> None:
        user_id = self.session.current_user_id
        if not user_id:
            return
        existing = self.get(quest_id) or QuestProgress(
            quest_id=quest_id, status=QuestStatus.IN_PROGRESS, attempts=1,
        )
        # completed=False sur une quête terminée la repasse en in_progress (comportement d'origine)
        updated = existing.model_copy(update={
            "correct_answers": correct_answers,
            "total_answers": total_answers,
            "status": QuestStatus.COMPLETED if completed else QuestStatus.IN_PROGRESS,
            "completed_at": now_ms() if completed else None,
        })
        self.store.update_quest_progress(user_id, quest_id, updated)

    def complete(self, quest_id: str, correct_answers: int, total_answers: int) -> None:
        self.update(quest_id, correct_answers, total_answers, completed=True)

    def is_completed(self, quest_id: str) -> bool:
        progress = self.get(quest_id)
        return progress is not None and progress.status == QuestStatus.COMPLETED

    def completed_count(self) -> int:
        return sum(1 for p in self.all().values() if p.status == QuestStatus.COMPLETED)
