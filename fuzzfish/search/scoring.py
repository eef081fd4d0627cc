"""Positional and recency bonuses layered on top of the fuzzy base score.

Every function here is pure: the caller injects ``now`` so identical inputs
always produce identical scores.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields

WORD_BOUNDARY_CHARS = "/-_. "


@dataclass(frozen=True)
class ScoringConfig:
    """Bonus magnitudes. Defaults follow fzy/fzf-style tuning."""

    word_boundary_bonus: float = 50.0
    consecutive_bonus: float = 30.0
    prefix_bonus: float = 100.0
    camel_case_bonus: float = 40.0
    max_recency_bonus: float = 3000.0
    current_branch_bonus: float = 500.0

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))


DEFAULT_SCORING = ScoringConfig()


def is_word_boundary(text: str, idx: int) -> bool:
    if idx == 0:
        return True
    if idx > len(text):
        return False
    return text[idx - 1] in WORD_BOUNDARY_CHARS


def is_camel_case_boundary(text: str, idx: int) -> bool:
    """Return whether ``text[idx]`` is uppercase right after a lowercase char."""
    if idx <= 0 or idx >= len(text):
        return False
    return text[idx].isupper() and text[idx - 1].islower()


def match_bonus(text: str, matched_indexes: Sequence[int], config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Sum prefix, word-boundary, camel-case and consecutive bonuses."""
    if not matched_indexes:
        return 0.0

    bonus = 0.0
    if matched_indexes[0] == 0:
        bonus += config.prefix_bonus

    prev_idx = -2
    for idx in matched_indexes:
        if is_word_boundary(text, idx):
            bonus += config.word_boundary_bonus
        if is_camel_case_boundary(text, idx):
            bonus += config.camel_case_bonus
        if idx == prev_idx + 1:
            bonus += config.consecutive_bonus
        prev_idx = idx
    return bonus


def recency_bonus(timestamp: int, now: int, max_bonus: float) -> float:
    """Hyperbolic decay: ``max_bonus / (1 + age_hours)``.

    Same-hour activity gets nearly the full bonus, a day-old entry about 1/25
    of it. Future timestamps count as age zero; non-positive timestamps get
    no bonus at all.
    """
    if timestamp <= 0:
        return 0.0
    age_hours = max(0.0, (now - timestamp) / 3600.0)
    return max_bonus / (1.0 + age_hours)


def item_score(
    text: str,
    base_score: int,
    matched_indexes: Sequence[int],
    timestamp: int,
    is_current: bool,
    now: int,
    config: ScoringConfig = DEFAULT_SCORING,
) -> float:
    """Combine the fuzzy base score with all positional and recency bonuses."""
    score = float(base_score)
    score += match_bonus(text, matched_indexes, config)
    if timestamp > 0:
        score += recency_bonus(timestamp, now, config.max_recency_bonus)
    if is_current:
        score += config.current_branch_bonus
    return score
