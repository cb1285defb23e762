"""External media player contract and event payloads.

The auto-advance control never talks to a concrete engine. It depends on this
protocol: an event-subscription API, a queue accessor and transport commands.
Concrete players (including `FakeMediaPlayer`) translate engine behavior into
these calls and events.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final, Protocol

FINISHED: Final = "finished"
ENDED: Final = "ended"
PLAYING: Final = "playing"
PAUSED: Final = "paused"
SEEKED: Final = "seeked"

PLAYER_EVENT_NAMES: tuple[str, ...] = (FINISHED, ENDED, PLAYING, PAUSED, SEEKED)


@dataclass(frozen=True)
class PlayerEvent:
    """Lifecycle notification dispatched by the player to subscribers."""

    name: str
    item: object | None = None


EventHandler = Callable[[PlayerEvent], Awaitable[object] | None]


class MediaPlayer(Protocol):
    """Player surface consumed by the auto-advance control."""

    def subscribe(self, event_name: str, handler: EventHandler) -> None: ...

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None: ...

    def get_queue(self) -> Sequence[Any]: ...

    def set_queue(self, queue: Sequence[Any]) -> None: ...

    async def pause(self) -> None: ...

    async def set_source(self, item: Any) -> None: ...

    async def load(self) -> None: ...

    async def play(self) -> None: ...
