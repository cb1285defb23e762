"""Error types raised by the auto-advance control and its services."""

from __future__ import annotations


class AutoAdvanceError(Exception):
    """Base class for auto-advance failures."""


class BindingError(AutoAdvanceError):
    """Subscribing or unsubscribing against the player's event source failed."""

    def __init__(self, event_name: str, operation: str, detail: str = "") -> None:
        message = f"Failed to {operation} '{event_name}' handler"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.event_name = event_name
        self.operation = operation


class EmptyQueueError(AutoAdvanceError):
    """No queued item is available to advance to."""

    def __init__(self) -> None:
        super().__init__("Playback queue is empty; nothing to advance to")


class TransportError(AutoAdvanceError):
    """A player transport command (pause/set_source/load/play) failed."""

    def __init__(self, command: str, detail: str = "") -> None:
        message = f"Transport command '{command}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.command = command
