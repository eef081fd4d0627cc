"""Branch preview built from data already collected by the git provider."""

from __future__ import annotations

from ..highlight import sanitize_terminal_text
from ..items import BranchRecord
from ..timefmt import format_relative_time, format_time
from ..ui_theme import UITheme, paint


def branch_kind(record: BranchRecord) -> str:
    if record.is_current:
        return "Current branch"
    if record.is_remote:
        return "Remote branch"
    return "Local branch"


def render_branch_preview(record: BranchRecord, theme: UITheme, now: int) -> str:
    sections = [
        ("Branch", [record.name]),
        ("Commit", [record.short_hash or "-"]),
        ("Message", [sanitize_terminal_text(record.last_message) or "-"]),
        (
            "Date",
            [format_time(record.commit_timestamp), format_relative_time(record.commit_timestamp, now)],
        ),
        ("Type", [branch_kind(record)]),
    ]
    lines: list[str] = []
    for label, values in sections:
        if lines:
            lines.append("")
        lines.append(paint(theme.label, label, theme))
        lines.extend(paint(theme.content, value, theme) for value in values)
    return "\n".join(lines)
