"""Tests for the auto-advance control widget."""

from __future__ import annotations

import asyncio

import pytest
from textual.message import Message

from autoplay_next.errors import BindingError, EmptyQueueError, TransportError
from autoplay_next.events import AutoAdvanceFailed, AutoAdvanceToggled
from autoplay_next.runtime_config import ControlOptions
from autoplay_next.services.fake_player import FakeMediaPlayer
from autoplay_next.ui.auto_advance_control import AutoAdvanceControl


def _run(coro):
    return asyncio.run(coro)


class _FakeClickEvent:
    """Click-event stub tracking whether widget consumed the event."""

    def __init__(self) -> None:
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class _FakeKeyEvent(_FakeClickEvent):
    def __init__(self, key: str) -> None:
        super().__init__()
        self.key = key


def _control(
    player: FakeMediaPlayer, **kwargs
) -> tuple[AutoAdvanceControl, list[Message]]:
    control = AutoAdvanceControl(player, **kwargs)
    emitted: list[Message] = []

    def capture(message: Message) -> bool:
        emitted.append(message)
        return True

    control.post_message = capture  # type: ignore[assignment]
    return control, emitted


def test_control_starts_enabled_and_subscribed() -> None:
    player = FakeMediaPlayer(["A", "B"])
    control, _emitted = _control(player)
    assert control.state == "ENABLED"
    assert control.has_class("autoplay-on")
    assert not control.has_class("autoplay-off")
    assert str(control.render()) == "AUTO:ON"
    assert player.handler_count("finished") == 1
    for event_name in ("playing", "paused", "ended", "seeked"):
        assert player.handler_count(event_name) == 1


def test_click_toggles_state_classes_and_subscription() -> None:
    player = FakeMediaPlayer(["A", "B"])
    control, emitted = _control(player)
    click = _FakeClickEvent()

    control.on_click(click)  # type: ignore[arg-type]

    assert click.stopped is True
    assert control.state == "DISABLED"
    assert control.has_class("autoplay-off")
    assert not control.has_class("autoplay-on")
    assert str(control.render()) == "AUTO:OFF"
    assert player.handler_count("finished") == 0
    assert player.handler_count("playing") == 1
    assert isinstance(emitted[0], AutoAdvanceToggled)
    assert emitted[0].state == "DISABLED"


def test_subscription_count_follows_click_parity() -> None:
    player = FakeMediaPlayer(["A"])
    control, _emitted = _control(player)
    for clicks in range(1, 10):
        control.toggle()
        enabled = clicks % 2 == 0
        assert control.state == ("ENABLED" if enabled else "DISABLED")
        assert player.handler_count("finished") == (1 if enabled else 0)
        assert control.lifecycle.is_subscribed is enabled


def test_double_click_restores_subscription_state() -> None:
    player = FakeMediaPlayer(["A", "B"])
    control, emitted = _control(player)
    control.toggle()
    control.toggle()
    assert control.state == "ENABLED"
    assert player.handler_count("finished") == 1
    assert control.has_class("autoplay-on")
    states = [m.state for m in emitted if isinstance(m, AutoAdvanceToggled)]
    assert states == ["DISABLED", "ENABLED"]


def test_keyboard_activation_matches_click() -> None:
    control, _emitted = _control(FakeMediaPlayer())
    ignored = _FakeKeyEvent("x")
    control.on_key(ignored)  # type: ignore[arg-type]
    assert ignored.stopped is False
    assert control.state == "ENABLED"

    pressed = _FakeKeyEvent("enter")
    control.on_key(pressed)  # type: ignore[arg-type]
    assert pressed.stopped is True
    assert control.state == "DISABLED"


def test_controls_keep_independent_state() -> None:
    player = FakeMediaPlayer(["A", "B"])
    first, _ = _control(player)
    second, _ = _control(player)
    first.toggle()
    assert first.state == "DISABLED"
    assert second.state == "ENABLED"
    assert player.handler_count("finished") == 1


def test_finish_advances_queue_and_updates_visual_state() -> None:
    player = FakeMediaPlayer(["A", "B", "C"])
    control, _emitted = _control(player)

    _run(player.finish_current())

    assert player.queue == ["B", "C", "A"]
    assert player.commands == [
        ("pause", None),
        ("set_source", "B"),
        ("load", None),
        ("play", None),
    ]
    assert control.has_class("vjs-playing")
    assert not control.has_class("vjs-ended")
    assert control.control_text == "Pause"


def test_finish_while_disabled_leaves_playback_stopped() -> None:
    player = FakeMediaPlayer(["A", "B", "C"])
    control, _emitted = _control(player)
    control.toggle()

    _run(player.finish_current())

    assert player.queue == ["A", "B", "C"]
    assert player.commands == []
    assert control.has_class("vjs-ended")
    assert control.control_text == "Replay"


def test_replay_option_off_suppresses_ended_affordance() -> None:
    player = FakeMediaPlayer(["A"])
    control, _emitted = _control(player, options={"replay": False})
    control.toggle()
    assert control.options == ControlOptions(replay=False)

    _run(player.finish_current())

    assert not control.has_class("vjs-ended")
    assert control.control_text == "Play"


def test_empty_queue_finish_is_recorded_not_reported() -> None:
    player = FakeMediaPlayer([])
    control, emitted = _control(player)

    _run(player.finish_current())

    assert player.commands == []
    assert isinstance(control.last_error, EmptyQueueError)
    assert not any(isinstance(message, AutoAdvanceFailed) for message in emitted)


def test_transport_failure_is_reported_to_owner() -> None:
    player = FakeMediaPlayer(["A", "B"], fail_on={"play"})
    control, emitted = _control(player)

    _run(player.finish_current())

    failures = [m for m in emitted if isinstance(m, AutoAdvanceFailed)]
    assert len(failures) == 1
    assert isinstance(failures[0].error, TransportError)
    assert failures[0].error.command == "play"
    assert isinstance(control.last_error, TransportError)


def test_binding_failure_rolls_back_click() -> None:
    player = FakeMediaPlayer(["A"])
    control, emitted = _control(player)
    player.fail_on.add("unsubscribe")

    state = control.toggle()

    assert state == "ENABLED"
    assert control.state == "ENABLED"
    assert control.has_class("autoplay-on")
    assert not control.has_class("autoplay-off")
    assert player.handler_count("finished") == 1
    assert len(emitted) == 1
    assert isinstance(emitted[0], AutoAdvanceFailed)
    assert isinstance(emitted[0].error, BindingError)


def test_construction_surfaces_binding_error() -> None:
    with pytest.raises(BindingError):
        AutoAdvanceControl(FakeMediaPlayer(fail_on={"subscribe"}))


def test_disable_mid_flight_blocks_next_trigger_only() -> None:
    class GatedPlayer(FakeMediaPlayer):
        gate: asyncio.Event

        async def load(self) -> None:
            await super().load()
            await self.gate.wait()

    async def run() -> None:
        player = GatedPlayer(["A", "B", "C"])
        player.gate = asyncio.Event()
        control, _emitted = _control(player)

        advance = asyncio.create_task(player.finish_current())
        await asyncio.sleep(0)
        control.toggle()
        assert player.handler_count("finished") == 0

        player.gate.set()
        await advance
        assert player.queue == ["B", "C", "A"]
        assert player.commands[-1] == ("play", None)

        player.commands.clear()
        await player.finish_current()
        assert player.commands == []
        assert player.queue == ["B", "C", "A"]

    _run(run())


def test_pause_and_seek_visual_updates() -> None:
    player = FakeMediaPlayer(["A"])
    control, _emitted = _control(player)

    _run(player.play())
    assert control.control_text == "Pause"
    _run(player.pause())
    assert control.has_class("vjs-paused")
    assert not control.has_class("vjs-playing")
    assert control.control_text == "Play"
    _run(player.seek())
    assert control.has_class("vjs-paused")


def test_dispose_releases_all_subscriptions() -> None:
    player = FakeMediaPlayer(["A"])
    control, _emitted = _control(player)
    control.dispose()
    for event_name in ("finished", "playing", "paused", "ended", "seeked"):
        assert player.handler_count(event_name) == 0


def test_toggle_after_dispose_does_not_resubscribe() -> None:
    player = FakeMediaPlayer(["A", "B"])
    control, emitted = _control(player)
    control.toggle()
    control.dispose()

    state = control.toggle()
    control.dispose()

    assert state == "DISABLED"
    assert control.state == "DISABLED"
    assert control.has_class("autoplay-off")
    assert not control.has_class("autoplay-on")
    assert player.handler_count("finished") == 0
    assert isinstance(emitted[-1], AutoAdvanceFailed)
    assert isinstance(emitted[-1].error, BindingError)


def test_successful_advance_clears_earlier_error() -> None:
    player = FakeMediaPlayer([])
    control, _emitted = _control(player)

    _run(player.finish_current())
    assert isinstance(control.last_error, EmptyQueueError)

    player.set_queue(["A", "B"])
    _run(player.finish_current())

    assert player.queue == ["B", "A"]
    assert control.last_error is None


def test_successful_advance_clears_transport_error() -> None:
    player = FakeMediaPlayer(["A", "B"], fail_on={"load"})
    control, _emitted = _control(player)

    _run(player.finish_current())
    assert isinstance(control.last_error, TransportError)

    player.fail_on.clear()
    _run(player.finish_current())

    assert player.source == "A"
    assert control.last_error is None
