# adventure/core/notifications.py
from __future__ import annotations
import asyncio, logging, time, uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Literal

from .config import settings

log = logging.getLogger(__name__)

Kind = Literal["success", "error", "info", "warning", "confirm"]


@dataclass
class NotificationAction:
    label: str
    handler: Callable[[], None | Awaitable[None]]
    type: Literal["primary", "secondary"] = "primary"


@dataclass
class Notification:
    id: str
    kind: Kind
    message: str
    duration_ms: int = 0
    actions: list[NotificationAction] = field(default_factory=list)
    on_dismiss: Callable[[], None] | None = None


class NotificationQueue:
    """
    File FIFO éphémère (jamais persistée). Seule la tête est « active ».
    Un timer asyncio par notification à durée positive, annulé par dismiss().

    Les timers vivent sur `loop` si elle est fournie, sinon sur la boucle en
    cours: hors d'une boucle asyncio, passer `loop` est obligatoire pour
    afficher une notification à durée positive (sinon RuntimeError).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._queue: list[Notification] = []
        self._timers: dict[str, asyncio.TimerHandle] = {}

    def _timer_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError(
                "NotificationQueue: no running event loop; pass loop= to schedule auto-dismiss timers"
            ) from None

    @property
    def active(self) -> Notification | None:
        return self._queue[0] if self._queue else None

    @property
    def pending(self) -> list[Notification]:
        return list(self._queue)

    @staticmethod
    def _new_id() -> str:
        return f"notif-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"

    def show(self, kind: Kind, message: str, duration_ms: int = 0, *,
             actions: list[NotificationAction] | None = None,
             on_dismiss: Callable[[], None] | None = None) -> str:
        notif = Notification(
            id=self._new_id(), kind=kind, message=message, duration_ms=int(duration_ms),
            actions=list(actions or []), on_dismiss=on_dismiss,
        )
        # boucle résolue avant l'ajout: un échec ne laisse rien dans la file
        loop = self._timer_loop() if notif.duration_ms > 0 else None
        self._queue.append(notif)
        if loop is not None:
            self._timers[notif.id] = loop.call_later(notif.duration_ms / 1000, self.dismiss, notif.id)
        return notif.id

    def show_success(self, message: str, duration_ms: int | None = None) -> str:
        return self.show("success", message, settings.toast_duration_ms if duration_ms is None else duration_ms)

    def show_error(self, message: str, duration_ms: int | None = None) -> str:
        return self.show("error", message, settings.toast_duration_ms if duration_ms is None else duration_ms)

    def show_info(self, message: str, duration_ms: int | None = None) -> str:
        return self.show("info", message, settings.toast_duration_ms if duration_ms is None else duration_ms)

    def show_warning(self, message: str, duration_ms: int | None = None) -> str:
        return self.show("warning", message, settings.toast_duration_ms if duration_ms is None else duration_ms)

    def show_confirm(self, message: str, actions: list[NotificationAction]) -> str:
        # fermeture manuelle uniquement
        return self.show("confirm", message, 0, actions=actions)

    def dismiss(self, notif_id: str) -> None:
        timer = self._timers.pop(notif_id, None)
        if timer is not None:
            timer.cancel()

        notif = next((n for n in self._queue if n.id == notif_id), None)
        if notif is None:
            return
        self._queue = [n for n in self._queue if n.id != notif_id]
        if notif.on_dismiss is not None:
            try:
                notif.on_dismiss()
            except Exception:
                log.exception("on_dismiss a échoué pour %s", notif_id)

    async def trigger(self, notif_id: str, label: str) -> bool:
        """Exécute l'action `label` d'une notification puis la ferme."""
        notif = next((n for n in self._queue if n.id == notif_id), None)
        action = next((a for a in notif.actions if a.label == label), None) if notif else None
        if action is None:
            return False
        result = action.handler()
        if asyncio.iscoroutine(result):
            await result
        self.dismiss(notif_id)
        return True

    def clear_all(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._queue = []
