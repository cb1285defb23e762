"""Queue rotation used to move playback onto the next item."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def rotate_left_by_one(queue: Sequence[T]) -> list[T]:
    """Return `queue` with its head moved to the tail.

    `[a0, a1, ..., an-1]` becomes `[a1, ..., an-1, a0]`. Empty and singleton
    queues come back unchanged. The input is never mutated; the result is built
    from a snapshot so no slot is read after it has been written.
    """
    snapshot = list(queue)
    if len(snapshot) <= 1:
        return snapshot
    return snapshot[1:] + snapshot[:1]
