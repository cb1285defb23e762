"""Textual demo host for the auto-advance control.

Hosts `AutoAdvanceControl` in a one-line control bar driven by
`FakeMediaPlayer`, so the toggle, queue rotation and transport sequence can be
exercised interactively.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Static

from . import __version__
from .events import AutoAdvanceFailed, AutoAdvanceToggled
from .logging_utils import setup_logging
from .paths import log_dir
from .runtime_config import ControlOptions, resolve_log_level
from .services.fake_player import FakeMediaPlayer
from .ui.auto_advance_control import AutoAdvanceControl
from .ui.modals.error import ErrorModal
from .version import build_help_epilog

logger = logging.getLogger(__name__)
DEFAULT_QUEUE = ("track-01.mp3", "track-02.mp3", "track-03.mp3")


class AutoPlayNextApp(App):
    TITLE = "autoplay-next"
    CSS = """
    Screen {
        layout: vertical;
    }

    #queue-view {
        height: 1fr;
        padding: 0 1;
    }

    #control-bar {
        height: 1;
    }

    #status-line {
        width: 1fr;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("f", "finish_item", "Finish item"),
        ("p", "play_pause", "Play/Pause"),
        ("a", "toggle_auto_advance", "Auto-advance"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        queue: Sequence[str] = DEFAULT_QUEUE,
        options: ControlOptions | None = None,
        start_disabled: bool = False,
    ) -> None:
        super().__init__()
        self.player = FakeMediaPlayer(queue)
        self.options = options or ControlOptions()
        self._start_disabled = start_disabled
        self.control = AutoAdvanceControl(
            self.player, options=self.options, id="auto-advance"
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="queue-view")
        yield Horizontal(
            self.control,
            Static(id="status-line"),
            id="control-bar",
        )
        yield Footer()

    def on_mount(self) -> None:
        if self._start_disabled:
            self.control.toggle()
        self._refresh_views()

    async def action_finish_item(self) -> None:
        await self.player.finish_current()
        self._refresh_views()

    async def action_play_pause(self) -> None:
        if self.player.status == "playing":
            await self.player.pause()
        else:
            await self.player.play()
        self._refresh_views()

    def action_toggle_auto_advance(self) -> None:
        self.control.toggle()

    def on_auto_advance_toggled(self, message: AutoAdvanceToggled) -> None:
        logger.debug("Host saw auto-advance %s", message.state)
        self._refresh_views()

    async def on_auto_advance_failed(self, message: AutoAdvanceFailed) -> None:
        await self.push_screen(ErrorModal(message.error))

    def _refresh_views(self) -> None:
        queue = self.player.get_queue()
        lines = [
            f"{'>' if index == 0 else ' '} {item}" for index, item in enumerate(queue)
        ]
        self.query_one("#queue-view", Static).update("\n".join(lines) or "(empty)")
        self.query_one("#status-line", Static).update(
            f"{self.control.control_text} | {self.player.status} | "
            f"auto-advance {self.control.state.lower()}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoplay-next",
        description="Auto-advance control bar demo.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=build_help_epilog(),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--quiet", action="store_true", help="Only show warnings and errors"
    )
    parser.add_argument("--log-file", help="Write logs to a file path")
    parser.add_argument(
        "--queue",
        action="append",
        dest="queue",
        metavar="ITEM",
        help="Queue item (repeatable). Defaults to three demo tracks.",
    )
    parser.add_argument(
        "--no-replay",
        action="store_false",
        dest="replay",
        help="Hide the replay affordance when an item ends.",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Start with auto-advance turned off.",
    )
    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    try:
        level = resolve_log_level(verbose=args.verbose, quiet=args.quiet)
        setup_logging(
            log_dir=log_dir(),
            level=level,
            log_file=Path(args.log_file) if args.log_file else None,
            console=False,
        )
        logging.getLogger(__name__).info("Starting autoplay-next demo")
        AutoPlayNextApp(
            queue=args.queue if args.queue is not None else DEFAULT_QUEUE,
            options=ControlOptions(replay=args.replay),
            start_disabled=args.disabled,
        ).run()
        return 0
    except Exception as exc:  # pragma: no cover - top-level safety net
        logging.getLogger(__name__).exception("Fatal startup error: %s", exc)
        print(
            "Startup failed. Verify log paths and re-run with --verbose.",
            file=sys.stderr,
        )
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
