"""Fuzzy matching, scoring, and ranking.

Everything in this package is a pure function of its inputs.
"""

from .filtering import bottom_anchored_view, filter_items
from .fuzzy import FuzzyMatch, find, find_all, fold_text, match_token, tokenize_query
from .scoring import (
    DEFAULT_SCORING,
    ScoringConfig,
    is_camel_case_boundary,
    is_word_boundary,
    item_score,
    match_bonus,
    recency_bonus,
)

__all__ = [
    "DEFAULT_SCORING",
    "FuzzyMatch",
    "ScoringConfig",
    "bottom_anchored_view",
    "filter_items",
    "find",
    "find_all",
    "fold_text",
    "is_camel_case_boundary",
    "is_word_boundary",
    "item_score",
    "match_bonus",
    "match_token",
    "recency_bonus",
    "tokenize_query",
]
