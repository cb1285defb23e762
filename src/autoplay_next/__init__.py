"""Auto-advance control for a Textual media player control bar."""

from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]
