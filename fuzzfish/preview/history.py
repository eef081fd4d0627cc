"""History preview: timestamps, working directory, and surrounding commands."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..ansi import display_width, wrap_plain
from ..highlight import sanitize_terminal_text
from ..items import HistoryRecord
from ..timefmt import format_relative_time, format_time
from ..ui_theme import UITheme, paint

CONTEXT_LINES_BEFORE = 3
CONTEXT_LINES_AFTER = 4
ACTIVE_MARKER = "→ "
INACTIVE_MARKER = "  "


def abbreviate_home(path: str, home: str | None = None) -> str:
    """Replace a leading home directory with ``~``."""
    home = str(Path.home()) if home is None else home
    if home and (path == home or path.startswith(home.rstrip("/") + "/")):
        return "~" + path[len(home.rstrip("/")):]
    return path


def _context_line(command: str, active: bool, width: int, theme: UITheme) -> list[str]:
    if active:
        rows = wrap_plain(ACTIVE_MARKER + command, width)
        return [paint(theme.context_active, row, theme) for row in rows]
    max_width = width - display_width(INACTIVE_MARKER)
    if max_width > 3 and display_width(command) > max_width:
        command = command[: max_width - 3] + "..."
    return [paint(theme.context_inactive, INACTIVE_MARKER + command, theme)]


def render_history_preview(
    record: HistoryRecord,
    records: Sequence[HistoryRecord],
    index: int,
    width: int,
    theme: UITheme,
    now: int,
) -> str:
    """Render metadata for ``record`` plus neighbouring commands around ``index``.

    ``records`` is the provider's newest-first list and ``index`` the item's
    position in it.
    """
    lines = [
        paint(theme.label, "Time", theme),
        paint(theme.content, format_time(record.when), theme),
        paint(theme.content, format_relative_time(record.when, now), theme),
        "",
    ]
    if record.paths:
        lines.append(paint(theme.label, "Directory", theme))
        lines.append(paint(theme.content, sanitize_terminal_text(abbreviate_home(record.paths[0])), theme))
    lines.append("")

    lines.append(paint(theme.context_header, "Context", theme))
    start = max(0, index - CONTEXT_LINES_BEFORE)
    end = min(len(records), index + CONTEXT_LINES_AFTER)
    for pos in range(start, end):
        command = sanitize_terminal_text(records[pos].text).replace("\n", " ")
        lines.extend(_context_line(command, pos == index, width, theme))
    return "\n".join(lines)
