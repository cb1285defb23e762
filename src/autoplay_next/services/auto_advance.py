"""Advance sequence run when the current item finishes.

`AutoAdvancer` rotates the player's queue by one and replays the new head via
pause -> set_source -> load -> play. A single in-flight flag keeps a duplicate
`finished` notification from starting a second sequence while the transport
commands of the first are still being awaited.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Literal

from autoplay_next.errors import AutoAdvanceError, EmptyQueueError, TransportError
from autoplay_next.services.media_player import MediaPlayer, PlayerEvent
from autoplay_next.services.queue_rotation import rotate_left_by_one

logger = logging.getLogger(__name__)

AdvanceOutcome = Literal["advanced", "empty", "busy"]


class AutoAdvancer:
    """Moves playback to the next queued item on behalf of one control."""

    def __init__(self, player: MediaPlayer) -> None:
        self._player = player
        self._in_flight = False
        self._last_error: AutoAdvanceError | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_error(self) -> AutoAdvanceError | None:
        """Most recent error recorded by an advance attempt, if any."""
        return self._last_error

    async def on_item_finished(
        self, event: PlayerEvent | None = None
    ) -> AdvanceOutcome:
        """Rotate the queue and start the new head item.

        Returns `"busy"` when a previous advance is still running, `"empty"`
        when there is nothing queued (playback stays stopped). Transport
        failures raise `TransportError` and are not retried.
        """
        if self._in_flight:
            logger.info(
                "Ignoring duplicate finish while advance is in flight",
                extra={"item": _describe(event)},
            )
            return "busy"
        self._in_flight = True
        try:
            queue = self._player.get_queue()
            if not queue:
                self._last_error = EmptyQueueError()
                logger.info("Auto-advance skipped: %s", self._last_error)
                return "empty"
            rotated = rotate_left_by_one(queue)
            self._player.set_queue(rotated)
            head = rotated[0]
            logger.debug(
                "Auto-advancing",
                extra={"finished": _describe(event), "next": repr(head)},
            )
            await self._run_transport(head)
            self._last_error = None
            return "advanced"
        finally:
            self._in_flight = False

    async def _run_transport(self, head: Any) -> None:
        await self._issue("pause", self._player.pause)
        await self._issue("set_source", self._player.set_source, head)
        await self._issue("load", self._player.load)
        await self._issue("play", self._player.play)

    async def _issue(
        self, command: str, call: Callable[..., Awaitable[None]], *args: Any
    ) -> None:
        try:
            await call(*args)
        except Exception as exc:
            error = TransportError(command, str(exc))
            self._last_error = error
            logger.error("Auto-advance stopped: %s", error)
            raise error from exc


def _describe(event: PlayerEvent | None) -> str | None:
    if event is None:
        return None
    return repr(event.item)
