from __future__ import annotations

import pytest

from adventure.core.notifications import NotificationQueue
from adventure.domain.models import QuestStatus
from adventure.domain.quest_run import MSG_CORRECT, MSG_WRONG, QuestRun, check_answer


def _run(catalog, tracker, ledger, badges, quest_id="counting-1", notifications=None):
    return QuestRun(catalog.quest(quest_id), tracker, ledger, badges, catalog, notifications)


def test_check_answer(catalog):
    counting, choice = catalog.quest("counting-1").content.activities
    assert check_answer(counting, 3)
    assert check_answer(counting, "3")
    assert check_answer(counting, " 3.0 ")
    assert not check_answer(counting, 4)
    assert check_answer(choice, "opt2")
    assert not check_answer(choice, "opt1")


async def test_run_records_progress(catalog, tracker, ledger, badges, alice):
    run = _run(catalog, tracker, ledger, badges)
    run.begin()
    assert tracker.get("counting-1").status == QuestStatus.IN_PROGRESS

    assert run.answer(3) is True
    qp = tracker.get("counting-1")
    assert (qp.correct_answers, qp.total_answers) == (1, 1)

    assert run.answer("opt1") is False
    assert run.finished
    with pytest.raises(ValueError):
        run.answer("opt2")


async def test_finish_grants_rewards_and_badges(catalog, tracker, ledger, badges, alice):
    ledger.add_gems(45)
    run = _run(catalog, tracker, ledger, badges)
    run.begin()
    run.answer(3)
    run.answer("opt2")
    summary = run.finish()

    assert (summary.gems, summary.stars) == (10, 5)
    assert summary.leveled_up is False and summary.new_level == 1
    assert set(summary.badges) == {"First Quest", "Gem Collector"}
    assert ledger.total_gems == 55 and ledger.total_stars == 5
    assert tracker.is_completed("counting-1")
    assert set(badges.earned()) == {"first-quest", "gem-collector"}

    # idempotent
    assert run.finish() is summary
    assert ledger.total_gems == 55


async def test_finish_levels_up(catalog, tracker, ledger, badges, alice):
    ledger.add_stars(7)
    run = _run(catalog, tracker, ledger, badges, "adding-1")
    run.begin()
    run.answer(5)
    run.answer("b")
    summary = run.finish()
    assert summary.leveled_up is True and summary.new_level == 2
    assert summary.badges == []


async def test_toasts(catalog, tracker, ledger, badges, alice):
    queue = NotificationQueue()
    run = _run(catalog, tracker, ledger, badges, notifications=queue)
    run.begin()
    run.answer(3)
    run.answer("nope")
    assert [(n.kind, n.message) for n in queue.pending] == [("success", MSG_CORRECT), ("error", MSG_WRONG)]
    queue.clear_all()
