# adventure/domain/catalog.py
from __future__ import annotations
import logging
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError

from . import content
from .errors import InvalidData
from .models import Record

log = logging.getLogger(__name__)


class Item(Record):
    id: str
    type: Literal["clothing", "pet", "accessory", "furniture"]
    category: str = ""
    name: str = ""
    description: str = ""
    cost_gems: int
    image_url: str = ""


class UnlockType(str, Enum):
    QUEST_COMPLETE = "quest_complete"
    QUESTS_COMPLETED = "quests_completed"
    GEMS_EARNED = "gems_earned"
    STARS_EARNED = "stars_earned"


class UnlockCriteria(Record):
    type: UnlockType
    value: int | float | str


class Badge(Record):
    id: str
    name: str = ""
    description: str = ""
    image_url: str = ""
    unlock_criteria: UnlockCriteria


class ChoiceOption(Record):
    id: str
    text: str
    is_correct: bool = False


class Activity(Record):
    type: str
    instructions: str = ""
    instructions_bg: str = ""
    correct_answer: int | float | str
    objects: list[str] | None = None
    options: list[ChoiceOption] | None = None
    hint_bg: str | None = None


class QuestContent(Record):
    activities: list[Activity] = Field(default_factory=list)


class Quest(Record):
    id: str
    name: str = ""
    description: str = ""
    quest_type: Literal["discovery", "practice", "master", "teaching"] = "practice"
    vocabulary_terms: list[str] = Field(default_factory=list)
    rewards_gems: int = 0
    rewards_stars: int = 0
    content: QuestContent = Field(default_factory=QuestContent)


class Catalog(Record):
    items: list[Item] = Field(default_factory=list)
    badges: list[Badge] = Field(default_factory=list)
    quests: list[Quest] = Field(default_factory=list)

    def item(self, item_id: str) -> Item | None:
        return next((i for i in self.items if i.id == item_id), None)

    def badge(self, badge_id: str) -> Badge | None:
        return next((b for b in self.badges if b.id == badge_id), None)

    def quest(self, quest_id: str) -> Quest | None:
        return next((q for q in self.quests if q.id == quest_id), None)


def default_catalog() -> Catalog:
    return Catalog.model_validate({
        "items": content.ITEMS,
        "badges": content.BADGES,
        "quests": content.QUESTS,
    })


def load_catalog(path: str | Path) -> Catalog:
    try:
        raw = Path(path).read_text(encoding="utf-8")
        return Catalog.model_validate_json(raw)
    except (OSError, ValidationError) as e:
        log.error("Catalogue illisible %s: %s", path, e)
        raise InvalidData(f"Invalid catalog: {path}") from e


def get_catalog(path: str = "") -> Catalog:
    return load_catalog(path) if path else default_catalog()
