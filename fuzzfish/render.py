"""Frame composition for the dual-pane finder view.

``build_frame`` is a pure function from state to screen rows; only
``render_frame`` touches the terminal.
"""

from __future__ import annotations

import os
import time

from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .items import BranchRecord, FileRecord, HistoryRecord, Item
from .runtime.state import MODE_TITLES, AppState
from .timefmt import format_time_ago
from .ui_theme import UITheme, paint

SELECTED_MARKER = "▌ "
UNSELECTED_MARKER = "  "
PROMPT = "> "
DIR_ICON = "📁"
FILE_ICON = "📄"
LOADING_TEXT = "Loading..."
NO_MATCHES_TEXT = "No matches"


def _display_char(ch: str) -> str:
    # One column in, one column out, so matched indexes stay aligned.
    if ch in "\t\n\r":
        return " "
    code = ord(ch)
    if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
        return "?"
    return ch


def _styled(code: str, text: str, base: str, theme: UITheme) -> str:
    if not code:
        return text
    return f"{code}{text}{theme.reset}{base}"


def highlight_matches(text: str, matched_indexes: tuple[int, ...], base: str, theme: UITheme) -> str:
    """Render ``text`` with matched character positions in the match color."""
    positions = set(matched_indexes)
    out: list[str] = []
    for idx, ch in enumerate(text):
        shown = _display_char(ch)
        if idx in positions:
            out.append(_styled(theme.match, shown, base, theme))
        else:
            out.append(shown)
    return "".join(out)


def _decoration(item: Item, base: str, theme: UITheme) -> str:
    record = item.original
    if isinstance(record, HistoryRecord):
        return ""
    if isinstance(record, BranchRecord):
        if record.is_current:
            return _styled(theme.branch_current, "* ", base, theme)
        if record.is_remote:
            return _styled(theme.branch_remote, "R ", base, theme)
        return "  "
    if isinstance(record, FileRecord):
        return f"{DIR_ICON if record.is_dir else FILE_ICON} "
    raise TypeError(f"unsupported record type: {type(record).__name__}")


def _suffix(item: Item, base: str, theme: UITheme, now: int) -> tuple[str, int]:
    record = item.original
    if isinstance(record, HistoryRecord) and record.when > 0:
        label = f" {format_time_ago(record.when, now)}"
        return _styled(theme.time_ago, label, base, theme), display_width(label)
    return "", 0


def format_item_row(item: Item, selected: bool, width: int, theme: UITheme, now: int) -> str:
    """Render one list row padded to exactly ``width`` columns."""
    if width <= 0:
        return ""
    base = theme.selected_row if selected else theme.row_text
    marker = _styled(theme.selected_marker, SELECTED_MARKER, base, theme) if selected else UNSELECTED_MARKER
    body = marker + _decoration(item, base, theme) + highlight_matches(item.text, item.matched_indexes, base, theme)
    suffix, suffix_width = _suffix(item, base, theme, now)
    if suffix_width >= width:
        suffix, suffix_width = "", 0

    avail = width - suffix_width
    clipped = clip_ansi_line(body, avail)
    pad = " " * max(0, avail - display_width(clipped))
    row = f"{base}{clipped}{pad}{suffix}"
    if "\x1b" in row:
        row += theme.reset
    return row


def _border_top(inner_width: int, title: str, theme: UITheme) -> str:
    label = f"─ {title} " if title and inner_width >= 4 else ""
    label = clip_ansi_line(label, inner_width)
    fill = "─" * max(0, inner_width - display_width(label))
    return paint(theme.border, f"╭{label}{fill}╮", theme)


def _border_bottom(inner_width: int, theme: UITheme, title: str = "") -> str:
    label = clip_ansi_line(f"─ {title} ", inner_width) if title and inner_width >= 4 else ""
    fill = "─" * max(0, inner_width - display_width(label))
    return paint(theme.border, f"╰{label}{fill}╯", theme)


def _side(theme: UITheme) -> str:
    return paint(theme.border, "│", theme)


def build_list_rows(state: AppState, theme: UITheme, now: int) -> list[str]:
    """Bottom-anchored list rows; short lists are padded with blanks on top."""
    height = state.view_height
    width = state.list_width
    if height <= 0:
        return []

    visible = state.ranked[state.offset : state.offset + height]
    rows = [
        format_item_row(item, state.offset + pos == state.cursor, width, theme, now)
        for pos, item in enumerate(visible)
    ]
    if not rows:
        message = LOADING_TEXT if state.loading else (NO_MATCHES_TEXT if state.items else "")
        if message:
            rows = [fit_ansi_line(paint(theme.placeholder, f"  {message}", theme), width, theme.reset)]
    blank = " " * width
    return [blank] * (height - len(rows)) + rows


def build_preview_rows(preview_text: str, width: int, height: int, theme: UITheme) -> list[str]:
    if height <= 0:
        return []
    lines = preview_text.split("\n")[:height] if preview_text else []
    rows = [fit_ansi_line(line, width, theme.reset) for line in lines]
    return rows + [" " * width] * (height - len(rows))


def build_input_line(state: AppState, width: int, theme: UITheme) -> str:
    prompt = paint(theme.prompt, PROMPT, theme)
    cursor = "\033[7m \033[27m"
    if state.query:
        text = paint(theme.query, "".join(_display_char(ch) for ch in state.query), theme) + cursor
    else:
        text = cursor + paint(theme.placeholder, state.placeholder, theme)
    return fit_ansi_line(f" {prompt}{text}", width, theme.reset)


def build_frame(
    state: AppState,
    preview_text: str,
    theme: UITheme,
    width: int,
    height: int,
    now: int | None = None,
) -> list[str]:
    """Compose the full screen as ``height`` rows of at most ``width`` columns."""
    if width <= 0 or height <= 0:
        return []
    now = int(time.time()) if now is None else now

    title = MODE_TITLES[state.mode]
    if state.ranked or state.items:
        title = f"{title} {len(state.ranked)}/{len(state.items)}"

    list_rows = build_list_rows(state, theme, now)
    preview_rows = build_preview_rows(preview_text, state.preview_width, state.view_height, theme)
    side = _side(theme)

    lines = [_border_top(state.list_width, title, theme) + _border_top(state.preview_width, "Preview", theme)]
    for list_row, preview_row in zip(list_rows, preview_rows):
        lines.append(f"{side}{list_row}{side}{side}{preview_row}{side}")
    lines.append(_border_bottom(state.list_width, theme) + _border_bottom(state.preview_width, theme))

    input_inner = max(0, width - 2)
    status = paint(theme.status, state.status_message, theme) if state.status_message else ""
    lines.append(_border_top(input_inner, "", theme))
    lines.append(f"{side}{build_input_line(state, input_inner, theme)}{side}")
    lines.append(_border_bottom(input_inner, theme, status))

    return [clip_ansi_line(line, width) + (theme.reset if "\x1b" in line else "") for line in lines[:height]]


def render_frame(fd: int, lines: list[str]) -> None:
    out = "\033[H\033[J" + "\r\n".join(lines)
    os.write(fd, out.encode("utf-8", errors="replace"))
