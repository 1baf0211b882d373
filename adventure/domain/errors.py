# adventure/domain/errors.py
from __future__ import annotations


class AdventureError(Exception):
    """Base de toutes les erreurs « dures » du noyau."""


class Collision(AdventureError):
    """Nom d'utilisateur déjà pris (comparaison exacte, sensible à la casse)."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username!r}")
        self.username = username


class NotFound(AdventureError):
    def __init__(self, kind: str, ident: str):
        super().__init__(f"{kind} not found: {ident!r}")
        self.kind = kind
        self.ident = ident


class NotOwned(AdventureError):
    def __init__(self, item_id: str):
        super().__init__(f"Item not owned: {item_id!r}")
        self.item_id = item_id


class InvalidData(AdventureError):
    """Snapshot ou catalogue illisible."""
