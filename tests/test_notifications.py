from __future__ import annotations

import asyncio

import pytest

from adventure.core.config import settings
from adventure.core.notifications import NotificationAction, NotificationQueue


@pytest.fixture
def queue():
    q = NotificationQueue()
    yield q
    q.clear_all()


async def test_fifo_and_active(queue):
    first = queue.show_info("un", duration_ms=0)
    second = queue.show_warning("deux", duration_ms=0)
    assert queue.active.id == first
    assert [n.id for n in queue.pending] == [first, second]
    queue.dismiss(first)
    assert queue.active.id == second


async def test_ids_are_unique(queue):
    ids = {queue.show("info", f"m{i}") for i in range(20)}
    assert len(ids) == 20


async def test_auto_dismiss(queue):
    calls = []
    queue.show("success", "bravo", 20, on_dismiss=lambda: calls.append(1))
    assert queue.active is not None
    await asyncio.sleep(0.1)
    assert queue.active is None
    assert calls == [1]


async def test_dismiss_runs_callback_once(queue):
    calls = []
    notif_id = queue.show("error", "oups", 50, on_dismiss=lambda: calls.append(1))
    queue.dismiss(notif_id)
    queue.dismiss(notif_id)
    await asyncio.sleep(0.1)
    assert calls == [1]


async def test_dismiss_unknown_id_is_ignored(queue):
    queue.show_info("x", duration_ms=0)
    queue.dismiss("notif-0-nope")
    assert len(queue.pending) == 1


async def test_failing_callback_is_logged(queue, caplog):
    def boom():
        raise RuntimeError("boom")

    notif_id = queue.show("info", "x", on_dismiss=boom)
    queue.dismiss(notif_id)
    assert queue.active is None
    assert "on_dismiss" in caplog.text


async def test_clear_all_cancels_timers(queue):
    calls = []
    queue.show("info", "a", 20, on_dismiss=lambda: calls.append("a"))
    queue.show("info", "b", 20, on_dismiss=lambda: calls.append("b"))
    queue.clear_all()
    await asyncio.sleep(0.1)
    assert queue.pending == []
    assert calls == []


async def test_confirm_stays_until_action(queue):
    seen = []

    async def on_yes():
        seen.append("yes")

    notif_id = queue.show_confirm("Sûr ?", [
        NotificationAction("Oui", on_yes),
        NotificationAction("Non", lambda: seen.append("no"), type="secondary"),
    ])
    assert queue.active.duration_ms == 0
    await asyncio.sleep(0.05)
    assert queue.active.id == notif_id

    assert await queue.trigger(notif_id, "Peut-être") is False
    assert await queue.trigger(notif_id, "Oui") is True
    assert seen == ["yes"]
    assert queue.active is None
    assert await queue.trigger(notif_id, "Non") is False


async def test_default_duration_from_settings(queue, monkeypatch):
    monkeypatch.setattr(settings, "toast_duration_ms", 1234)
    queue.show_success("ok")
    assert queue.active.duration_ms == 1234


def test_timers_outside_running_loop_need_a_loop():
    queue = NotificationQueue()
    with pytest.raises(RuntimeError, match="pass loop="):
        queue.show_success("hi")
    assert queue.pending == []
    # sans durée, aucun timer: pas besoin de boucle
    queue.show_info("manuel", duration_ms=0)
    assert len(queue.pending) == 1


def test_injected_loop_runs_timers():
    loop = asyncio.new_event_loop()
    try:
        queue = NotificationQueue(loop)
        queue.show("info", "x", 10)
        assert queue.active is not None
        loop.run_until_complete(asyncio.sleep(0.05))
        assert queue.active is None
    finally:
        loop.close()
