"""Multi-token filtering and stable ascending ranking over projected items."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..items import Item, record_timestamp
from .fuzzy import find_all
from .scoring import DEFAULT_SCORING, ScoringConfig, item_score


def filter_items(
    items: Sequence[Item],
    query: str,
    now: int,
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[Item]:
    """Return the ranked list for ``query``.

    An empty or whitespace-only query returns ``items`` in their existing
    display order. Otherwise survivors are sorted ascending by combined
    score, so the best match lands last; ``sorted`` is stable, so exact ties
    keep their display order.
    """
    if not query.strip():
        return list(items)

    matches = find_all(query, [item.text for item in items])
    scored: list[tuple[float, Item]] = []
    for match in matches:
        item = items[match.index]
        score = item_score(
            item.text,
            match.score,
            match.matched_indexes,
            record_timestamp(item.original),
            item.is_current,
            now,
            config,
        )
        scored.append((score, replace(item, matched_indexes=match.matched_indexes)))

    scored.sort(key=lambda pair: pair[0])
    return [item for _, item in scored]


def bottom_anchored_view(length: int, view_height: int) -> tuple[int, int]:
    """Return ``(cursor, offset)`` placing the cursor on the last row in view."""
    if length <= 0:
        return 0, 0
    cursor = length - 1
    offset = max(0, cursor - max(1, view_height) + 1)
    return cursor, offset
