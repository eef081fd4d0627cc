from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..items import Item, Mode, Record, Selection
from ..preview.cache import PreviewCache


class Phase(enum.Enum):
    LOADING = "loading"
    READY = "ready"
    QUITTING = "quitting"


PLACEHOLDERS: dict[Mode, str] = {
    Mode.HISTORY: "Search history... (Ctrl+G: git, Ctrl+S: files)",
    Mode.GIT_BRANCH: "Search branches... (Ctrl+R: history, Ctrl+S: files)",
    Mode.FILES: "Search files... (Ctrl+R: history, Ctrl+G: git)",
}

MODE_TITLES: dict[Mode, str] = {
    Mode.HISTORY: "History",
    Mode.GIT_BRANCH: "Branches",
    Mode.FILES: "Files",
}


@dataclass
class AppState:
    mode: Mode = Mode.HISTORY
    phase: Phase = Phase.LOADING
    query: str = ""
    pending_query: str = ""
    placeholder: str = PLACEHOLDERS[Mode.HISTORY]
    records: dict[Mode, Sequence[Record]] = field(default_factory=dict)
    loading_modes: set[Mode] = field(default_factory=set)
    items: list[Item] = field(default_factory=list)
    ranked: list[Item] = field(default_factory=list)
    cursor: int = 0
    offset: int = 0
    columns: int = 0
    rows: int = 0
    view_height: int = 0
    list_width: int = 0
    preview_width: int = 0
    choice: Selection | None = None
    status_message: str = ""
    preview_cache: PreviewCache = field(default_factory=PreviewCache)
    preview_text: str = ""
    last_preview_index: int = -1
    dirty: bool = True

    @property
    def loading(self) -> bool:
        return self.mode in self.loading_modes

    @property
    def quitting(self) -> bool:
        return self.phase is Phase.QUITTING

    def mode_records(self, mode: Mode | None = None) -> Sequence[Record]:
        return self.records.get(self.mode if mode is None else mode, ())

    def selected_item(self) -> Item | None:
        if not self.ranked or not 0 <= self.cursor < len(self.ranked):
            return None
        return self.ranked[self.cursor]
