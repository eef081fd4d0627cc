"""List/viewport state machine.

``FuzzfishController`` is the only code that mutates ``AppState``. It is
driven one event at a time by the runtime loop; every side effect that
leaves the loop thread (provider loads, debounce timers, preview rendering)
goes through injected callbacks so the machine is testable without threads
or a terminal.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..items import (
    BranchRecord,
    Item,
    Mode,
    Record,
    Selection,
    extract_selection,
    preview_cache_key,
    project_items,
)
from ..search import DEFAULT_SCORING, ScoringConfig, bottom_anchored_view, filter_items
from .events import Event, FilterTickEvent, KeyEvent, LoadedEvent, ResizeEvent
from .state import PLACEHOLDERS, AppState, Phase

logger = logging.getLogger(__name__)

INPUT_BOX_ROWS = 3
PANE_BORDER_ROWS = 2
PANE_BORDER_COLUMNS = 2
DEFAULT_LIST_RATIO = 0.6
DEFAULT_DEBOUNCE_SECONDS = 0.030
PULL_HINT = "select current branch to pull"

MODE_KEYS: dict[str, Mode] = {
    "CTRL_R": Mode.HISTORY,
    "CTRL_G": Mode.GIT_BRANCH,
    "CTRL_S": Mode.FILES,
}


def _epoch_now() -> int:
    return int(time.time())


def _always() -> bool:
    return True


@dataclass(frozen=True)
class ControllerCallbacks:
    """Operations the controller delegates outside the loop thread.

    ``request_load(mode)`` must eventually enqueue exactly one
    ``LoadedEvent`` for ``mode``; ``schedule_filter_tick(query, delay)`` one
    ``FilterTickEvent``. ``render_preview(item, records, width, height)``
    runs synchronously and must not raise.
    """

    request_load: Callable[[Mode], None]
    schedule_filter_tick: Callable[[str, float], None]
    render_preview: Callable[[Item, Sequence[Record], int, int], str]
    now: Callable[[], int] = field(default=_epoch_now)
    git_available: Callable[[], bool] = field(default=_always)


class FuzzfishController:
    def __init__(
        self,
        state: AppState,
        callbacks: ControllerCallbacks,
        *,
        scoring: ScoringConfig = DEFAULT_SCORING,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        list_ratio: float = DEFAULT_LIST_RATIO,
    ) -> None:
        self.state = state
        self.callbacks = callbacks
        self.scoring = scoring
        self.debounce_seconds = debounce_seconds
        self.list_ratio = list_ratio

    # -- lifecycle -------------------------------------------------------

    def start(self, mode: Mode) -> None:
        """Enter ``mode`` as the initial mode and request its data."""
        state = self.state
        state.mode = mode
        state.placeholder = PLACEHOLDERS[mode]
        if mode in state.records:
            self._show_mode_items(state.query)
        else:
            self._begin_loading(mode)

    def handle_event(self, event: Event) -> None:
        if self.state.quitting:
            return
        if isinstance(event, KeyEvent):
            self.handle_key(event.key)
        elif isinstance(event, ResizeEvent):
            self.resize(event.columns, event.rows)
        elif isinstance(event, LoadedEvent):
            self.on_loaded(event)
        elif isinstance(event, FilterTickEvent):
            self.on_filter_tick(event)
        else:
            raise TypeError(f"unsupported event: {type(event).__name__}")

    # -- list bookkeeping ------------------------------------------------

    def _effective_height(self) -> int:
        return max(1, self.state.view_height)

    def _replace_ranked(self, ranked: list[Item]) -> None:
        state = self.state
        state.ranked = ranked
        state.cursor, state.offset = bottom_anchored_view(len(ranked), state.view_height)
        state.last_preview_index = -1
        state.dirty = True
        self.update_preview()

    def _rank(self, query: str) -> list[Item]:
        return filter_items(self.state.items, query, self.callbacks.now(), self.scoring)

    def _show_mode_items(self, query: str) -> None:
        state = self.state
        state.items = project_items(state.mode_records())
        state.phase = Phase.READY
        self._replace_ranked(self._rank(query))

    def _begin_loading(self, mode: Mode) -> None:
        state = self.state
        state.items = []
        state.ranked = []
        state.cursor = 0
        state.offset = 0
        state.preview_text = ""
        state.phase = Phase.LOADING
        state.dirty = True
        if mode in state.loading_modes:
            return
        state.loading_modes.add(mode)
        self.callbacks.request_load(mode)

    def _clamp_view(self) -> None:
        state = self.state
        if not state.ranked:
            state.cursor = 0
            state.offset = 0
            return
        height = self._effective_height()
        state.cursor = max(0, min(state.cursor, len(state.ranked) - 1))
        state.offset = max(0, state.offset)
        if state.cursor < state.offset:
            state.offset = state.cursor
        if state.cursor >= state.offset + height:
            state.offset = max(0, state.cursor - height + 1)

    # -- operations ------------------------------------------------------

    def switch_mode(self, mode: Mode) -> bool:
        """Switch the active mode; return whether anything changed."""
        state = self.state
        if mode is state.mode:
            return False
        if mode is Mode.GIT_BRANCH and not self.callbacks.git_available():
            logger.debug("not switching to branch mode outside a git repository")
            return False

        logger.debug("switching mode %s -> %s", state.mode.value, mode.value)
        state.mode = mode
        state.query = ""
        state.pending_query = ""
        state.placeholder = PLACEHOLDERS[mode]
        state.preview_cache.clear()
        state.last_preview_index = -1
        state.dirty = True
        if mode in state.records:
            self._show_mode_items("")
        else:
            self._begin_loading(mode)
        return True

    def on_loaded(self, event: LoadedEvent) -> None:
        state = self.state
        state.records[event.mode] = list(event.records)
        state.loading_modes.discard(event.mode)
        logger.debug("loaded %d %s records", len(event.records), event.mode.value)
        if event.mode is state.mode:
            self._show_mode_items(state.query)
        state.dirty = True

    def edit_query(self, query: str) -> None:
        state = self.state
        if query == state.query:
            return
        state.query = query
        state.pending_query = query
        state.dirty = True
        self.callbacks.schedule_filter_tick(query, self.debounce_seconds)

    def on_filter_tick(self, event: FilterTickEvent) -> None:
        if event.query != self.state.pending_query:
            return
        self._replace_ranked(self._rank(event.query))

    def move_cursor(self, delta: int) -> None:
        state = self.state
        if not state.ranked:
            return
        height = self._effective_height()
        state.cursor = max(0, min(len(state.ranked) - 1, state.cursor + delta))
        if state.cursor < state.offset:
            state.offset = state.cursor
        elif state.cursor >= state.offset + height:
            state.offset = state.cursor - height + 1
        state.dirty = True
        self.update_preview()

    def page(self, direction: int) -> None:
        self.move_cursor(direction * self._effective_height())

    def resize(self, columns: int, rows: int) -> None:
        state = self.state
        previous_size = (state.preview_width, state.view_height)
        state.columns = max(0, columns)
        state.rows = max(0, rows)
        state.view_height = max(0, rows - INPUT_BOX_ROWS - PANE_BORDER_ROWS)
        list_outer = int(columns * self.list_ratio)
        state.list_width = max(0, list_outer - PANE_BORDER_COLUMNS)
        state.preview_width = max(0, columns - list_outer - PANE_BORDER_COLUMNS)
        if (state.preview_width, state.view_height) != previous_size:
            # Preview text is laid out for the pane size it was rendered at.
            state.preview_cache.clear()
            state.last_preview_index = -1
        if state.ranked:
            state.offset = max(0, state.cursor - self._effective_height() + 1)
        self._clamp_view()
        state.dirty = True
        self.update_preview()

    def confirm(self) -> None:
        state = self.state
        item = state.selected_item()
        if item is None:
            return
        state.choice = extract_selection(item)
        state.phase = Phase.QUITTING

    def cancel(self) -> None:
        self.state.choice = None
        self.state.phase = Phase.QUITTING

    def pull_current_branch(self) -> None:
        """Quit with a pull request for the current branch, or explain why not."""
        state = self.state
        item = state.selected_item()
        if item is not None and item.is_current and isinstance(item.original, BranchRecord):
            state.choice = Selection(mode=Mode.GIT_BRANCH, value=item.original.name, action="pull")
            state.phase = Phase.QUITTING
            return
        state.status_message = PULL_HINT
        state.dirty = True

    def update_preview(self) -> None:
        """Refresh ``preview_text`` for the item under the cursor."""
        state = self.state
        item = state.selected_item()
        if item is None:
            state.preview_text = ""
            state.last_preview_index = -1
            return
        if state.cursor == state.last_preview_index:
            return
        state.last_preview_index = state.cursor

        key = preview_cache_key(item)
        cached = state.preview_cache.get(key)
        if cached is None:
            cached = self.callbacks.render_preview(
                item,
                state.mode_records(),
                state.preview_width,
                state.view_height,
            )
            state.preview_cache.put(key, cached)
        state.preview_text = cached
        state.dirty = True

    # -- keys ------------------------------------------------------------

    def handle_key(self, key: str) -> None:
        state = self.state
        if state.status_message:
            state.status_message = ""
            state.dirty = True

        if key in {"ESC", "CTRL_C"}:
            self.cancel()
            return
        if key == "ENTER":
            self.confirm()
            return
        if key == "CTRL_G" and state.mode is Mode.GIT_BRANCH:
            self.pull_current_branch()
            return
        target = MODE_KEYS.get(key)
        if target is not None:
            self.switch_mode(target)
            return
        if key in {"UP", "CTRL_P"}:
            self.move_cursor(-1)
            return
        if key in {"DOWN", "CTRL_N"}:
            self.move_cursor(1)
            return
        if key == "PAGE_UP":
            self.page(-1)
            return
        if key == "PAGE_DOWN":
            self.page(1)
            return
        if key == "BACKSPACE":
            self.edit_query(state.query[:-1])
            return
        if key == "CTRL_U":
            self.edit_query("")
            return
        if key == "CTRL_W":
            self.edit_query(delete_last_word(state.query))
            return
        if len(key) == 1 and key.isprintable():
            self.edit_query(state.query + key)


def delete_last_word(text: str) -> str:
    """Drop trailing spaces and the word before them, readline style."""
    stripped = text.rstrip(" ")
    cut = stripped.rfind(" ")
    return stripped[: cut + 1]
