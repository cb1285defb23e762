"""Error modal for auto-advance failures reported by the control."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from autoplay_next.errors import AutoAdvanceError, BindingError, TransportError


def format_error_message(error: AutoAdvanceError) -> str:
    """Render an owner-facing message with cause and next step."""
    if isinstance(error, BindingError):
        likely_cause = "the player's event source is unavailable"
        next_step = "auto-advance may not work; toggle it again or restart"
    elif isinstance(error, TransportError):
        likely_cause = f"the player rejected '{error.command}'"
        next_step = "start playback manually; the command is not retried"
    else:
        likely_cause = "unexpected player state"
        next_step = "review the log file"
    return f"{error}\nLikely cause: {likely_cause}\nNext step: {next_step}"


class ErrorModal(ModalScreen[None]):
    """Display an auto-advance failure until dismissed."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
    ]

    def __init__(self, error: AutoAdvanceError) -> None:
        super().__init__()
        self.message = format_error_message(error)
        self._ok_button: Button | None = None

    def compose(self) -> ComposeResult:
        self._ok_button = Button("OK", id="ok")
        yield Vertical(
            Label(self.message),
            self._ok_button,
            id="modal-body",
        )

    def on_mount(self) -> None:
        if self._ok_button is not None:
            self._ok_button.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        del event
        self.action_close()

    def action_close(self) -> None:
        self.dismiss(None)
