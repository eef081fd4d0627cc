"""Record payloads, list items, and projection from provider order.

Providers hand back records newest/priority first. Projection reverses that
into display order so the most relevant record sits at the bottom of the
list, next to the query prompt, while each ``Item.index`` keeps pointing at
the record's position in the provider's canonical order.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union


class Mode(enum.Enum):
    """Active record source."""

    HISTORY = "history"
    GIT_BRANCH = "git"
    FILES = "files"


@dataclass(frozen=True)
class HistoryRecord:
    """One deduplicated shell-history command."""

    text: str
    when: int = 0
    paths: tuple[str, ...] = ()
    source_line: int = 0


@dataclass(frozen=True)
class BranchRecord:
    """One local or remote git branch."""

    name: str
    is_current: bool = False
    is_remote: bool = False
    short_hash: str = ""
    last_message: str = ""
    commit_timestamp: int = 0


@dataclass(frozen=True)
class FileRecord:
    """One filesystem entry relative to the collection root."""

    path: str
    is_dir: bool = False


Record = Union[HistoryRecord, BranchRecord, FileRecord]


@dataclass(frozen=True)
class Item:
    """Uniform list row wrapping one record.

    ``matched_indexes`` holds character positions into ``text`` for the
    current query; it is empty for unfiltered lists.
    """

    text: str
    index: int
    original: Record
    is_current: bool = False
    is_remote: bool = False
    is_dir: bool = False
    matched_indexes: tuple[int, ...] = ()


@dataclass(frozen=True)
class Selection:
    """Result chosen by the user.

    ``action`` is ``"select"`` for a normal confirm and ``"pull"`` for the
    branch-mode pull shortcut.
    """

    mode: Mode
    value: str
    is_dir: bool = False
    action: str = "select"


def project_record(record: Record, index: int) -> Item:
    """Wrap one record as an ``Item`` carrying its canonical ``index``."""
    if isinstance(record, HistoryRecord):
        return Item(text=record.text, index=index, original=record)
    if isinstance(record, BranchRecord):
        return Item(
            text=record.name,
            index=index,
            original=record,
            is_current=record.is_current,
            is_remote=record.is_remote,
        )
    if isinstance(record, FileRecord):
        return Item(text=record.path, index=index, original=record, is_dir=record.is_dir)
    raise TypeError(f"unsupported record type: {type(record).__name__}")


def project_items(records: Sequence[Record]) -> list[Item]:
    """Project provider records (priority first) into display order (priority last)."""
    count = len(records)
    return [project_record(records[idx], idx) for idx in range(count - 1, -1, -1)]


def record_timestamp(record: Record) -> int:
    """Return the unix timestamp used for recency scoring, or 0 when none applies."""
    if isinstance(record, HistoryRecord):
        return record.when
    if isinstance(record, BranchRecord):
        return record.commit_timestamp
    if isinstance(record, FileRecord):
        return 0
    raise TypeError(f"unsupported record type: {type(record).__name__}")


def strip_remote_prefix(name: str) -> str:
    """Drop the leading ``<remote>/`` segment from a remote branch name."""
    head, sep, tail = name.partition("/")
    if not sep:
        return name
    return tail


def extract_selection(item: Item) -> Selection:
    """Build the mode-specific result for a confirmed item."""
    record = item.original
    if isinstance(record, HistoryRecord):
        return Selection(mode=Mode.HISTORY, value=record.text)
    if isinstance(record, BranchRecord):
        value = strip_remote_prefix(record.name) if record.is_remote else record.name
        return Selection(mode=Mode.GIT_BRANCH, value=value)
    if isinstance(record, FileRecord):
        return Selection(mode=Mode.FILES, value=record.path, is_dir=record.is_dir)
    raise TypeError(f"unsupported record type: {type(record).__name__}")


def preview_cache_key(item: Item) -> str:
    """Return the stable preview-cache key for ``item``."""
    record = item.original
    if isinstance(record, HistoryRecord):
        return f"{record.text}\x00{item.index}"
    if isinstance(record, BranchRecord):
        return record.name
    if isinstance(record, FileRecord):
        return record.path
    raise TypeError(f"unsupported record type: {type(record).__name__}")


__all__ = [
    "BranchRecord",
    "FileRecord",
    "HistoryRecord",
    "Item",
    "Mode",
    "Record",
    "Selection",
    "extract_selection",
    "preview_cache_key",
    "project_items",
    "project_record",
    "record_timestamp",
    "strip_remote_prefix",
]
