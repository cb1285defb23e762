"""Runtime configuration normalization helpers.

These helpers keep CLI flag and host option interpretation deterministic
across entrypoints.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def resolve_log_level(*, verbose: bool, quiet: bool) -> str:
    """Resolve effective log level from CLI flags.

    Precedence is deterministic: --quiet overrides --verbose.
    """
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return "INFO"


def normalize_replay_option(value: object) -> bool:
    """Unset means show the replay affordance; anything else by truthiness."""
    if value is None:
        return True
    return bool(value)


@dataclass(frozen=True)
class ControlOptions:
    """Host-supplied options for the auto-advance control.

    `replay` only controls whether the ended state is shown as a replay
    affordance. It never changes the toggle's functional default.
    """

    replay: bool = True

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> ControlOptions:
        options = options or {}
        return cls(replay=normalize_replay_option(options.get("replay")))
