"""File and directory preview.

Files show metadata and a syntax-highlighted head; directories show their
first entries. Anything unreadable degrades to a placeholder line.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from ..ansi import clip_ansi_line, display_width
from ..highlight import colorize_source, decode_bytes, sanitize_terminal_text
from ..items import FileRecord
from ..timefmt import format_file_size
from ..ui_theme import UITheme, paint

logger = logging.getLogger(__name__)

BINARY_PROBE_BYTES = 8192
HEAD_MAX_BYTES = 256_000
MAX_LINE_LENGTH = 120
MAX_DIRECTORY_ENTRIES = 20
DIR_ICON = "📁"
FILE_ICON = "📄"


def is_binary(sample: bytes) -> bool:
    """Return whether the first probe bytes contain a NUL byte."""
    return b"\x00" in sample[:BINARY_PROBE_BYTES]


def directory_listing(target: Path, theme: UITheme) -> list[str]:
    """List up to ``MAX_DIRECTORY_ENTRIES`` children of ``target`` by name."""
    try:
        with os.scandir(target) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug("cannot list %s: %s", target, exc)
        return []

    lines: list[str] = []
    for entry in entries[:MAX_DIRECTORY_ENTRIES]:
        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False
        icon = DIR_ICON if is_dir else FILE_ICON
        lines.append(paint(theme.context_inactive, f"  {icon} {sanitize_terminal_text(entry.name)}", theme))
    remaining = len(entries) - MAX_DIRECTORY_ENTRIES
    if remaining > 0:
        lines.append(paint(theme.context_inactive, f"  ... and {remaining} more", theme))
    return lines


def _clip_source_line(line: str) -> str:
    if display_width(line) <= MAX_LINE_LENGTH:
        return line
    return clip_ansi_line(line, MAX_LINE_LENGTH) + "\033[0m..."


def file_head(target: Path, max_lines: int, theme: UITheme) -> list[str]:
    """Return up to ``max_lines`` highlighted lines, or ``[]`` for binary/empty files."""
    try:
        with target.open("rb") as handle:
            data = handle.read(HEAD_MAX_BYTES)
    except OSError as exc:
        logger.debug("cannot read %s: %s", target, exc)
        return []
    if not data or is_binary(data):
        return []

    source_lines = decode_bytes(data).splitlines()[: max(1, max_lines)]
    source = sanitize_terminal_text("\n".join(source_lines))
    if theme.name == "plain":
        rendered_lines = source.split("\n")
    else:
        rendered_lines = colorize_source(source, target).split("\n")
    return ["  " + _clip_source_line(line) for line in rendered_lines]


def render_file_preview(record: FileRecord, root: Path, height: int, theme: UITheme) -> str:
    target = root / record.path
    try:
        info = target.stat()
        size, mode = info.st_size, info.st_mode
    except OSError:
        size, mode = 0, 0

    lines = [
        paint(theme.label, sanitize_terminal_text(record.path), theme),
        "",
        paint(theme.content, f"Type: {'directory' if record.is_dir else 'file'}", theme),
    ]
    if not record.is_dir:
        lines.append(paint(theme.content, f"Size: {format_file_size(size)}", theme))
    lines.append(paint(theme.content, f"Permissions: {stat.filemode(mode)}", theme))
    lines.append("")

    if record.is_dir:
        lines.append(paint(theme.context_header, "Contents", theme))
        body = directory_listing(target, theme)
        lines.extend(body or [paint(theme.context_inactive, "  (empty)", theme)])
    else:
        lines.append(paint(theme.context_header, "Preview", theme))
        body = file_head(target, height - len(lines), theme)
        lines.extend(body or [paint(theme.context_inactive, "  (binary or empty file)", theme)])
    return "\n".join(lines)
