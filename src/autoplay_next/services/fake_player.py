"""Fake media player for deterministic testing and the demo app."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .media_player import (
    ENDED,
    FINISHED,
    PAUSED,
    PLAYING,
    SEEKED,
    EventHandler,
    PlayerEvent,
)

logger = logging.getLogger(__name__)


class FakeMediaPlayer:
    """In-memory player with an event registry and a transport command log.

    `commands` records transport calls in order, e.g. `("set_source", "b.mp3")`.
    Failures can be injected per operation name (`subscribe`, `unsubscribe`,
    `pause`, `set_source`, `load`, `play`) via `fail_on`; the matching call then
    raises `RuntimeError`.
    """

    def __init__(
        self,
        queue: Iterable[Any] = (),
        *,
        fail_on: Iterable[str] = (),
    ) -> None:
        self.queue: list[Any] = list(queue)
        self.commands: list[tuple[str, Any]] = []
        self.fail_on: set[str] = set(fail_on)
        self.status = "idle"
        self.source: Any = self.queue[0] if self.queue else None
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._check("subscribe")
        # Duplicates are stored as-is; de-duplication is the subscriber's job.
        self._handlers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        self._check("unsubscribe")
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))

    def get_queue(self) -> list[Any]:
        return list(self.queue)

    def set_queue(self, queue: Sequence[Any]) -> None:
        self.queue = list(queue)

    async def pause(self) -> None:
        self._record("pause")
        if self.status == "playing":
            self.status = "paused"
            await self.dispatch(PAUSED)

    async def set_source(self, item: Any) -> None:
        self._record("set_source", item)
        self.source = item

    async def load(self) -> None:
        self._record("load")
        self.status = "loading"

    async def play(self) -> None:
        self._record("play")
        self.status = "playing"
        await self.dispatch(PLAYING)

    async def seek(self) -> None:
        await self.dispatch(SEEKED)

    async def finish_current(self) -> None:
        """Simulate natural completion of the loaded item."""
        self.status = "ended"
        await self.dispatch(ENDED)
        await self.dispatch(FINISHED)

    async def dispatch(self, event_name: str) -> None:
        """Deliver an event to every registered handler in registration order."""
        event = PlayerEvent(event_name, self.source)
        for handler in list(self._handlers.get(event_name, [])):
            result = handler(event)
            if inspect.isawaitable(result):
                await result

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise RuntimeError(f"{operation} unavailable")

    def _record(self, command: str, arg: Any = None) -> None:
        self._check(command)
        self.commands.append((command, arg))
        logger.debug("Fake player command %s", command, extra={"arg": arg})
