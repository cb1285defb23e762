"""Widget-level messages posted by the auto-advance control to its host.

The control reports toggle transitions and owner-facing failures
(`BindingError`, `TransportError`) through `textual.message` types so the
surrounding control bar can react without holding a reference to the control.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.message import Message

if TYPE_CHECKING:
    from autoplay_next.errors import AutoAdvanceError
    from autoplay_next.services.toggle_state import AutoAdvanceState


class AutoAdvanceToggled(Message):
    """UI message emitted after a click changed the auto-advance state."""

    bubble = True

    def __init__(self, state: AutoAdvanceState) -> None:
        super().__init__()
        self.state = state


class AutoAdvanceFailed(Message):
    """UI message carrying a binding or transport failure to the owner."""

    bubble = True

    def __init__(self, error: AutoAdvanceError) -> None:
        super().__init__()
        self.error = error
