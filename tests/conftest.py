from __future__ import annotations

import pytest
import pytest_asyncio

from adventure.core.db.base import MEMORY
from adventure.core.storage import SQLiteStorage
from adventure.domain.badges import BadgeEvaluator
from adventure.domain.catalog import default_catalog
from adventure.domain.economy import Ledger
from adventure.domain.inventory import Inventory
from adventure.domain.quests import QuestTracker
from adventure.domain.session import Session


@pytest.fixture
def store():
    with SQLiteStorage.open(MEMORY) as s:
        yield s


@pytest.fixture
def session(store):
    return Session(store)


@pytest_asyncio.fixture
async def alice(session):
    """Compte `alice` créé et connecté."""
    assert await session.create_account("alice", "pw1")
    return session.current_user()


@pytest.fixture
def ledger(store, session):
    return Ledger(store, session)


@pytest.fixture
def tracker(store, session):
    return QuestTracker(store, session)


@pytest.fixture
def inventory(store, session, ledger):
    return Inventory(store, session, ledger)


@pytest.fixture
def badges(store, session, ledger):
    return BadgeEvaluator(store, session, ledger)


@pytest.fixture
def catalog():
    return default_catalog()
