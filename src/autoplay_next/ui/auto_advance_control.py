"""Auto-advance toggle for the player control bar."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from textual.events import Click, Key, Unmount
from textual.widgets import Static

from autoplay_next.errors import AutoAdvanceError, BindingError, TransportError
from autoplay_next.events import AutoAdvanceFailed, AutoAdvanceToggled
from autoplay_next.runtime_config import ControlOptions
from autoplay_next.services.auto_advance import AdvanceOutcome, AutoAdvancer
from autoplay_next.services.event_lifecycle import EventLifecycle
from autoplay_next.services.media_player import (
    ENDED,
    PAUSED,
    PLAYING,
    SEEKED,
    MediaPlayer,
    PlayerEvent,
)
from autoplay_next.services.toggle_state import ENABLED, AutoAdvanceState, ToggleState

logger = logging.getLogger(__name__)

AUTOPLAY_ON = "autoplay-on"
AUTOPLAY_OFF = "autoplay-off"
PLAYING_CLASS = "vjs-playing"
PAUSED_CLASS = "vjs-paused"
ENDED_CLASS = "vjs-ended"


class AutoAdvanceControl(Static):
    """Clickable toggle that advances the player's queue when an item finishes.

    Each instance owns its own `ToggleState`; the finish subscription follows
    that state while `playing`/`paused`/`ended`/`seeked` stay bound for the
    widget's lifetime and drive the visual classes and `control_text`.
    """

    DEFAULT_CSS = """
    AutoAdvanceControl {
        background: $panel;
        color: $text;
        height: 1;
        width: auto;
        padding: 0 1;
        content-align: center middle;
    }

    AutoAdvanceControl.autoplay-off {
        color: $text-muted;
    }

    AutoAdvanceControl:focus {
        background: $boost;
    }
    """

    def __init__(
        self,
        player: MediaPlayer,
        *,
        options: ControlOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(_label(ENABLED), classes=AUTOPLAY_ON, **kwargs)
        if not isinstance(options, ControlOptions):
            options = ControlOptions.from_mapping(options)
        self.options = options
        self.can_focus = True
        self._toggle = ToggleState()
        self._advancer = AutoAdvancer(player)
        self._lifecycle = EventLifecycle(player, self.handle_item_finished)
        self._control_text = "Play"
        self._last_error: AutoAdvanceError | None = None
        for event_name, handler in (
            (PLAYING, self.handle_playing),
            (PAUSED, self.handle_paused),
            (ENDED, self.handle_ended),
            (SEEKED, self.handle_seeked),
        ):
            self._lifecycle.bind_permanent(event_name, handler)
        self._lifecycle.sync(self._toggle.state)

    @property
    def state(self) -> AutoAdvanceState:
        return self._toggle.state

    @property
    def control_text(self) -> str:
        """Accessible label reflecting the player's Play/Pause state."""
        return self._control_text

    @property
    def lifecycle(self) -> EventLifecycle:
        return self._lifecycle

    @property
    def last_error(self) -> AutoAdvanceError | None:
        return self._last_error

    def on_click(self, event: Click) -> None:
        self.toggle()
        event.stop()

    def on_key(self, event: Key) -> None:
        if event.key not in {"enter", "space"}:
            return
        self.toggle()
        event.stop()

    def on_unmount(self, event: Unmount) -> None:
        try:
            self.dispose()
        except BindingError as exc:
            logger.warning("Auto-advance teardown incomplete: %s", exc)

    def toggle(self) -> AutoAdvanceState:
        """Flip auto-advance, keeping classes and subscription in step.

        If the subscription change fails the flip is undone, the failure is
        posted to the host and the previous state is returned.
        """
        previous = self._toggle.state
        state = self._toggle.toggle()
        self._apply_toggle(state)
        try:
            self._lifecycle.sync(state)
        except BindingError as exc:
            self._toggle.toggle()
            self._apply_toggle(previous)
            self._report(exc)
            return previous
        logger.info("Auto-advance %s", state.lower(), extra={"state": state})
        self.post_message(AutoAdvanceToggled(state))
        return state

    def dispose(self) -> None:
        """Release every player subscription held by this control."""
        self._lifecycle.dispose()

    async def handle_item_finished(self, event: PlayerEvent) -> AdvanceOutcome | None:
        if not self._toggle.enabled:
            return None
        try:
            outcome = await self._advancer.on_item_finished(event)
        except TransportError as exc:
            self._report(exc)
            return None
        if outcome != "busy":
            self._last_error = self._advancer.last_error
        return outcome

    def handle_playing(self, event: PlayerEvent) -> None:
        self.remove_class(ENDED_CLASS, PAUSED_CLASS)
        self.add_class(PLAYING_CLASS)
        self._control_text = "Pause"

    def handle_paused(self, event: PlayerEvent) -> None:
        self.remove_class(PLAYING_CLASS)
        self.add_class(PAUSED_CLASS)
        self._control_text = "Play"

    def handle_ended(self, event: PlayerEvent) -> None:
        self.remove_class(PLAYING_CLASS, PAUSED_CLASS)
        if self.options.replay:
            self.add_class(ENDED_CLASS)
            self._control_text = "Replay"
        else:
            self._control_text = "Play"

    def handle_seeked(self, event: PlayerEvent) -> None:
        # Extension point: nothing is cleared on seek yet.
        logger.debug("Seeked", extra={"item": repr(event.item)})

    def _apply_toggle(self, state: AutoAdvanceState) -> None:
        enabled = state == ENABLED
        self.set_class(enabled, AUTOPLAY_ON)
        self.set_class(not enabled, AUTOPLAY_OFF)
        self.update(_label(state))

    def _report(self, error: AutoAdvanceError) -> None:
        self._last_error = error
        logger.warning("Auto-advance error: %s", error)
        self.post_message(AutoAdvanceFailed(error))


def _label(state: AutoAdvanceState) -> str:
    return "AUTO:ON" if state == ENABLED else "AUTO:OFF"
