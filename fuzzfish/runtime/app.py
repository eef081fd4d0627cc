"""Wire providers, workers, controller, terminal and renderer into one session."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from queue import Queue

from ..config import load_debounce_ms, load_list_pane_percent, load_scoring_config
from ..input import read_key
from ..items import Item, Mode, Record, Selection
from ..preview import render_preview
from ..providers import FileProvider, GitProvider, HistoryProvider
from ..render import build_frame, render_frame
from ..terminal import TerminalController, open_tty, terminal_size
from ..ui_theme import UITheme
from .controller import ControllerCallbacks, FuzzfishController
from .events import Event
from .loader import BackgroundLoader, FilterDebouncer
from .loop import RuntimeLoopCallbacks, run_main_loop
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinderOptions:
    mode: Mode
    theme: UITheme
    root: Path
    history_path: Path | None = None


def _now() -> int:
    return int(time.time())


def run_finder(options: FinderOptions) -> Selection | None:
    """Run the interactive finder on ``/dev/tty`` and return the user's choice.

    Raises ``TerminalUnavailableError`` before drawing anything when no
    interactive terminal is available.
    """
    tty_fd = open_tty()
    try:
        terminal = TerminalController(tty_fd, tty_fd)
        return _run_session(options, terminal, tty_fd)
    finally:
        os.close(tty_fd)


def _run_session(options: FinderOptions, terminal: TerminalController, tty_fd: int) -> Selection | None:
    events: Queue[Event] = Queue()
    git = GitProvider(options.root)
    loader = BackgroundLoader(
        {
            Mode.HISTORY: HistoryProvider(options.history_path).parse,
            Mode.GIT_BRANCH: git.branches,
            Mode.FILES: FileProvider(options.root).collect,
        },
        events,
    )
    debouncer = FilterDebouncer(events)
    state = AppState(mode=options.mode)
    # One repository check per session, made before the loop starts.
    in_git_repo = git.is_repo()

    def preview_for(item: Item, records: list[Record], width: int, height: int) -> str:
        return render_preview(item, records, width, height, options.theme, _now(), options.root)

    controller = FuzzfishController(
        state,
        ControllerCallbacks(
            request_load=loader.request,
            schedule_filter_tick=debouncer.schedule,
            render_preview=preview_for,
            now=_now,
            git_available=lambda: in_git_repo,
        ),
        scoring=load_scoring_config(),
        debounce_seconds=load_debounce_ms() / 1000.0,
        list_ratio=load_list_pane_percent() / 100.0,
    )

    def render() -> None:
        columns, rows = state.columns, state.rows
        render_frame(tty_fd, build_frame(state, state.preview_text, options.theme, columns, rows, _now()))

    # Panes are sized before the first load can land.
    controller.resize(*terminal_size(tty_fd))
    controller.start(options.mode)
    logger.debug("starting finder in %s mode at %s", options.mode.value, options.root)
    try:
        with terminal.raw_mode():
            run_main_loop(
                controller,
                events,
                RuntimeLoopCallbacks(
                    terminal_size=lambda: terminal_size(tty_fd),
                    read_key=lambda timeout_ms: read_key(tty_fd, timeout_ms=timeout_ms),
                    render=render,
                ),
            )
    finally:
        debouncer.cancel()
    return state.choice
