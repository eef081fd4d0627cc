"""Typed events consumed by the single-threaded controller loop."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from ..items import Mode, Record


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    rows: int


@dataclass(frozen=True)
class LoadedEvent:
    """Provider result for ``mode``; an empty list stands in for a failed load."""

    mode: Mode
    records: Sequence[Record] = field(default_factory=tuple)


@dataclass(frozen=True)
class FilterTickEvent:
    """Debounce expiry carrying the query captured when the timer was armed."""

    query: str


Event = Union[KeyEvent, ResizeEvent, LoadedEvent, FilterTickEvent]

__all__ = ["Event", "FilterTickEvent", "KeyEvent", "LoadedEvent", "ResizeEvent"]
