"""Release version, read by packaging and by `--version`/`--help`."""

from __future__ import annotations

import platform
import sys

__all__ = ["__version__", "build_help_epilog"]

__version__ = "0.1.0"


def build_help_epilog() -> str:
    python = ".".join(str(part) for part in sys.version_info[:3])
    return (
        f"Version: {__version__}\n"
        f"Python: {python}\n"
        f"Platform: {platform.platform()}"
    )
