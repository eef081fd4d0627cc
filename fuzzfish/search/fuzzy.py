from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

BOUNDARY_CHARS = "/_- ."


@dataclass(frozen=True)
class FuzzyMatch:
    """One surviving candidate with its base score and matched positions."""

    index: int
    score: int
    matched_indexes: tuple[int, ...]


def fold_text(text: str) -> str:
    """Lowercase ``text`` one character at a time without changing its length.

    Characters whose lowercase form expands (``"İ"`` -> ``"i̇"``) are kept as-is
    so positions in the folded string stay valid positions in ``text``.
    """
    if text.isascii():
        return text.lower()
    out: list[str] = []
    for ch in text:
        lowered = ch.lower()
        out.append(lowered if len(lowered) == 1 else ch)
    return "".join(out)


def tokenize_query(query: str) -> list[str]:
    return [fold_text(token) for token in query.split()]


def match_token(pattern: str, candidate_folded: str) -> tuple[int, tuple[int, ...]] | None:
    """Match one folded token as a subsequence of a folded candidate.

    Returns ``(score, positions)`` for the leftmost alignment, or ``None``
    when ``pattern`` is not a subsequence. Scoring rewards consecutive runs
    and boundary hits and penalises gaps and long candidates.
    """
    if not pattern:
        return 0, ()

    score = 0
    prev_idx = -1
    run = 0
    positions: list[int] = []
    for needle in pattern:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in BOUNDARY_CHARS:
            score += 35
        positions.append(idx)
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score, tuple(positions)


def find(pattern: str, candidates: Sequence[str]) -> list[FuzzyMatch]:
    """Match one token against every candidate, keeping candidate order."""
    pattern_folded = fold_text(pattern)
    matches: list[FuzzyMatch] = []
    for idx, candidate in enumerate(candidates):
        result = match_token(pattern_folded, fold_text(candidate))
        if result is None:
            continue
        score, positions = result
        matches.append(FuzzyMatch(index=idx, score=score, matched_indexes=positions))
    return matches


def find_all(query: str, candidates: Sequence[str]) -> list[FuzzyMatch]:
    """Match a whitespace-separated query by sequential intersection.

    The first token is matched against all candidates and every later token
    only against the survivors. Scores are summed and matched positions
    concatenated token by token. Any token without survivors empties the
    result. An empty or whitespace-only query also returns ``[]``; callers
    treat that case as "no filtering" before reaching here.
    """
    tokens = tokenize_query(query)
    if not tokens:
        return []

    survivors = find(tokens[0], candidates)

    for token in tokens[1:]:
        if not survivors:
            break
        narrowed: list[FuzzyMatch] = []
        for match in survivors:
            result = match_token(token, fold_text(candidates[match.index]))
            if result is None:
                continue
            score, positions = result
            narrowed.append(
                FuzzyMatch(
                    index=match.index,
                    score=match.score + score,
                    matched_indexes=match.matched_indexes + positions,
                )
            )
        survivors = narrowed

    return survivors
