"""Subscription lifecycle for the auto-advance finish handler.

`EventLifecycle` keeps exactly one `finished` subscription active while the
toggle is enabled and none while it is disabled. Presence is tracked here
rather than trusting the player to de-duplicate handlers. Permanent
subscriptions (visual state updates) are bound once and released together on
`dispose()`.
"""

from __future__ import annotations

import logging

from autoplay_next.errors import BindingError
from autoplay_next.services.media_player import (
    FINISHED,
    EventHandler,
    MediaPlayer,
)
from autoplay_next.services.toggle_state import ENABLED, AutoAdvanceState

logger = logging.getLogger(__name__)


class EventLifecycle:
    """Owns every subscription one control holds against one player."""

    def __init__(self, player: MediaPlayer, finish_handler: EventHandler) -> None:
        self._player = player
        self._finish_handler = finish_handler
        self._finish_subscribed = False
        self._permanent: list[tuple[str, EventHandler]] = []
        self._disposed = False

    @property
    def is_subscribed(self) -> bool:
        """Whether the finish handler is currently bound."""
        return self._finish_subscribed

    @property
    def disposed(self) -> bool:
        return self._disposed

    def active_subscriptions(self) -> list[str]:
        """Event names currently bound by this lifecycle, permanent ones first."""
        names = [event_name for event_name, _handler in self._permanent]
        if self._finish_subscribed:
            names.append(FINISHED)
        return names

    def on_enable(self) -> None:
        """Bind the finish handler; a no-op when already bound."""
        if self._disposed:
            raise BindingError(FINISHED, "subscribe", "lifecycle already disposed")
        if self._finish_subscribed:
            return
        self._bind(FINISHED, self._finish_handler)
        self._finish_subscribed = True
        logger.debug("Auto-advance finish handler bound")

    def on_disable(self) -> None:
        """Unbind the finish handler; a no-op when not bound."""
        if not self._finish_subscribed:
            return
        self._unbind(FINISHED, self._finish_handler)
        self._finish_subscribed = False
        logger.debug("Auto-advance finish handler unbound")

    def sync(self, state: AutoAdvanceState) -> None:
        if state == ENABLED:
            self.on_enable()
        else:
            self.on_disable()

    def bind_permanent(self, event_name: str, handler: EventHandler) -> None:
        """Bind a handler that stays active until `dispose()`."""
        if self._disposed:
            raise BindingError(event_name, "subscribe", "lifecycle already disposed")
        if any(
            bound_name == event_name and bound == handler
            for bound_name, bound in self._permanent
        ):
            return
        self._bind(event_name, handler)
        self._permanent.append((event_name, handler))

    def dispose(self) -> None:
        """Release all subscriptions held by this lifecycle.

        Every release is attempted; the first failure is raised afterwards.
        """
        if self._disposed:
            return
        self._disposed = True
        failure: BindingError | None = None
        try:
            self.on_disable()
        except BindingError as exc:
            failure = exc
        while self._permanent:
            event_name, handler = self._permanent.pop()
            try:
                self._unbind(event_name, handler)
            except BindingError as exc:
                failure = failure or exc
        if failure is not None:
            raise failure

    def _bind(self, event_name: str, handler: EventHandler) -> None:
        try:
            self._player.subscribe(event_name, handler)
        except Exception as exc:
            logger.warning(
                "Subscribe failed for %s: %s",
                event_name,
                exc,
                extra={"event_name": event_name},
            )
            raise BindingError(event_name, "subscribe", str(exc)) from exc

    def _unbind(self, event_name: str, handler: EventHandler) -> None:
        try:
            self._player.unsubscribe(event_name, handler)
        except Exception as exc:
            logger.warning(
                "Unsubscribe failed for %s: %s",
                event_name,
                exc,
                extra={"event_name": event_name},
            )
            raise BindingError(event_name, "unsubscribe", str(exc)) from exc
