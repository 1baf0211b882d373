# adventure/domain/models.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

STORAGE_VERSION = "1.0.0"


class Record(BaseModel):
    # snake_case côté Python, camelCase sur disque (format des exports)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class AvatarConfig(Record):
    clothing: list[str] = Field(default_factory=list)
    pet: str | None = None
    accessories: list[str] = Field(default_factory=list)


class Position(Record):
    x: float
    y: float


class RoomItem(Record):
    item_id: str
    position: Position


class RoomConfig(Record):
    furniture: list[RoomItem] = Field(default_factory=list)


class User(Record):
    id: str
    username: str
    password_hash: str
    created_at: int
    level: int = 1
    total_gems: int = 0
    total_stars: int = 0
    avatar_data: AvatarConfig = Field(default_factory=AvatarConfig)
    room_data: RoomConfig = Field(default_factory=RoomConfig)


# Champs modifiables après création (id, username, hash, created_at: immuables)
MUTABLE_USER_FIELDS = ("level", "total_gems", "total_stars", "avatar_data", "room_data")


class QuestStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuestProgress(Record):
    quest_id: str
    status: QuestStatus = QuestStatus.NOT_STARTED
    attempts: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    completed_at: int | None = None

    def dump(self) -> dict:
        # completedAt absent (et non null) tant que la quête n'est pas terminée
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UserProgress(Record):
    user_id: str
    quest_progress: dict[str, QuestProgress] = Field(default_factory=dict)
    earned_badges: list[str] = Field(default_factory=list)
    owned_items: list[str] = Field(default_factory=list)
    equipped_items: list[str] = Field(default_factory=list)

    @classmethod
    def empty(cls, user_id: str) -> "UserProgress":
        return cls(user_id=user_id)

    def dump(self) -> dict:
        data = super().dump()
        data["questProgress"] = {qid: qp.dump() for qid, qp in self.quest_progress.items()}
        return data


class Snapshot(Record):
    version: str | None = STORAGE_VERSION
    users: list[User] = Field(default_factory=list)
    progress: dict[str, UserProgress] = Field(default_factory=dict)

    def dump(self) -> dict:
        return {
            "version": self.version,
            "users": [u.dump() for u in self.users],
            "progress": {uid: p.dump() for uid, p in self.progress.items()},
        }
