"""Two-state machine governing whether auto-advance is active."""

from __future__ import annotations

from typing import Final, Literal

AutoAdvanceState = Literal["ENABLED", "DISABLED"]
ENABLED: Final = "ENABLED"
DISABLED: Final = "DISABLED"


class ToggleState:
    """Enabled/disabled flag owned by exactly one control instance.

    There is no terminal state and no automatic transition: the only way to
    change the flag is `toggle()`, which the owning control calls on click.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> AutoAdvanceState:
        return ENABLED if self._enabled else DISABLED

    def toggle(self) -> AutoAdvanceState:
        """Flip ENABLED <-> DISABLED and return the new state."""
        self._enabled = not self._enabled
        return self.state

    def __repr__(self) -> str:
        return f"ToggleState({self.state})"
