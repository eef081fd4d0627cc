"""Per-mode preview renderers and the preview cache.

``render_preview`` dispatches on the item's payload type. A renderer that
raises is logged and replaced by the item's plain text, so preview problems
never reach the event loop.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..highlight import sanitize_terminal_text
from ..items import BranchRecord, FileRecord, HistoryRecord, Item, Record
from ..ui_theme import UITheme
from .branch import render_branch_preview
from .cache import PreviewCache
from .files import render_file_preview
from .history import render_history_preview

logger = logging.getLogger(__name__)


def _dispatch(
    item: Item,
    records: Sequence[Record],
    width: int,
    height: int,
    theme: UITheme,
    now: int,
    root: Path,
) -> str:
    record = item.original
    if isinstance(record, HistoryRecord):
        return render_history_preview(record, records, item.index, width, theme, now)
    if isinstance(record, BranchRecord):
        return render_branch_preview(record, theme, now)
    if isinstance(record, FileRecord):
        return render_file_preview(record, root, height, theme)
    raise TypeError(f"unsupported record type: {type(record).__name__}")


def render_preview(
    item: Item,
    records: Sequence[Record],
    width: int,
    height: int,
    theme: UITheme,
    now: int,
    root: Path | None = None,
) -> str:
    """Render the preview pane text for ``item``."""
    try:
        return _dispatch(item, records, width, height, theme, now, Path.cwd() if root is None else root)
    except Exception:
        logger.exception("preview rendering failed for %r", item.text)
        return sanitize_terminal_text(item.text)


__all__ = ["PreviewCache", "render_preview"]
