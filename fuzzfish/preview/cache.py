"""Keyed store of rendered preview text for the active mode."""

from __future__ import annotations


class PreviewCache:
    """Mapping from stable item key to rendered preview text.

    The controller owns one instance and clears it whole on every mode
    switch; entries are never evicted individually.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def put(self, key: str, text: str) -> None:
        self._entries[key] = text

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
