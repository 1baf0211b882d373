# adventure/domain/quest_run.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .catalog import UnlockType

if TYPE_CHECKING:
    from ..core.notifications import NotificationQueue
    from .badges import BadgeEvaluator
    from .catalog import Activity, Badge, Catalog, Quest
    from .economy import Ledger
    from .quests import QuestTracker

log = logging.getLogger(__name__)

MSG_CORRECT = "🎉 Excellent work! That's correct!"
MSG_WRONG = "💪 Not quite right, but don't worry! Let's try to understand it better."


def check_answer(activity: Activity, answer: int | float | str) -> bool:
    expected, given = str(activity.correct_answer).strip(), str(answer).strip()
    try:
        return float(expected) == float(given)
    except ValueError:
        return expected == given


@dataclass
class RewardSummary:
    gems: int
    stars: int
    leveled_up: bool
    new_level: int
    badges: list[str] = field(default_factory=list)


class QuestRun:
    """Déroulé d'une quête: une réponse par activité, puis récompenses et badges."""

    def __init__(self, quest: Quest, tracker: QuestTracker, ledger: Ledger,
                 badges: BadgeEvaluator, catalog: Catalog,
                 notifications: NotificationQueue | None = None):
        self.quest = quest
        self.tracker = tracker
        self.ledger = ledger
        self.badges = badges
        self.catalog = catalog
        self.notifications = notifications
        self.index = 0
        self.correct_answers = 0
        self.total_answers = 0
        self.summary: RewardSummary | None = None

    @property
    def current_activity(self) -> Activity | None:
        activities = self.quest.content.activities
        return activities[self.index] if self.index < len(activities) else None

    @property
    def finished(self) -> bool:
        return self.current_activity is None

    def begin(self) -> None:
        self.tracker.start(self.quest.id)

    def answer(self, value: int | float | str) -> bool:
        activity = self.current_activity
        if activity is None:
            raise ValueError(f"quest {self.quest.id!r} has no activity left")

        ok = check_answer(activity, value)
        self.total_answers += 1
        if ok:
            self.correct_answers += 1
        if self.notifications is not None:
            if ok:
                self.notifications.show_success(MSG_CORRECT)
            else:
                self.notifications.show_error(MSG_WRONG)

        self.index += 1
        if not self.finished:
            self.tracker.update(self.quest.id, self.correct_answers, self.total_answers, completed=False)
        return ok

    def _unlocked(self, badge: Badge) -> bool:
        if self.badges.has_badge(badge.id):
            return False
        criteria = badge.unlock_criteria
        if criteria.type == UnlockType.QUEST_COMPLETE:
            return self.tracker.is_completed(str(criteria.value))
        if criteria.type == UnlockType.QUESTS_COMPLETED:
            try:
                return self.tracker.completed_count() >= float(criteria.value)
            except ValueError:
                return False
        return self.badges.check_unlock(badge)

    def finish(self) -> RewardSummary:
        if self.summary is not None:
            return self.summary

        self.tracker.complete(self.quest.id, self.correct_answers, self.total_answers)
        self.ledger.add_gems(self.quest.rewards_gems)
        level_up = self.ledger.add_stars(self.quest.rewards_stars)

        earned: list[str] = []
        for badge in self.catalog.badges:
            if self._unlocked(badge) and self.badges.award(badge.id):
                earned.append(badge.name)

        self.summary = RewardSummary(
            gems=self.quest.rewards_gems,
            stars=self.quest.rewards_stars,
            leveled_up=bool(level_up and level_up.leveled_up),
            new_level=level_up.new_level if level_up else self.ledger.level,
            badges=earned,
        )
        log.info("Quête %s terminée: %s", self.quest.id, self.summary)
        return self.summary
