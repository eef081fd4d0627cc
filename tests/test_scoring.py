from __future__ import annotations

import unittest

from fuzzfish.search.scoring import (
    DEFAULT_SCORING,
    ScoringConfig,
    is_camel_case_boundary,
    is_word_boundary,
    item_score,
    match_bonus,
    recency_bonus,
)

NOW = 1_700_000_000


class BonusTests(unittest.TestCase):
    def test_prefix_word_boundary_and_consecutive_bonuses(self) -> None:
        # prefix 100 + boundary at 0 (50) + two consecutive steps (2 * 30)
        self.assertEqual(match_bonus("foo", [0, 1, 2]), 210.0)

    def test_camel_case_bonus(self) -> None:
        self.assertTrue(is_camel_case_boundary("fooBar", 3))
        self.assertFalse(is_camel_case_boundary("FOOBAR", 3))
        self.assertEqual(match_bonus("fooBar", [3]), DEFAULT_SCORING.camel_case_bonus)

    def test_word_boundary_characters(self) -> None:
        for text in ("foo-bar", "foo_bar", "foo/bar", "foo.bar", "foo bar"):
            with self.subTest(text=text):
                self.assertTrue(is_word_boundary(text, 4))
        self.assertFalse(is_word_boundary("foobar", 4))
        self.assertEqual(match_bonus("foo-bar", [4]), DEFAULT_SCORING.word_boundary_bonus)

    def test_empty_match_has_no_bonus(self) -> None:
        self.assertEqual(match_bonus("foo", []), 0.0)

    def test_prefix_match_outscores_later_match_by_at_least_prefix_bonus(self) -> None:
        prefix = item_score("aXa", 0, [0], 0, False, NOW)
        later = item_score("aXa", 0, [2], 0, False, NOW)

        self.assertGreaterEqual(prefix - later, DEFAULT_SCORING.prefix_bonus)


class RecencyTests(unittest.TestCase):
    def test_hyperbolic_decay(self) -> None:
        self.assertEqual(recency_bonus(NOW, NOW, 3000.0), 3000.0)
        self.assertEqual(recency_bonus(NOW - 3600, NOW, 3000.0), 1500.0)

    def test_future_timestamps_count_as_age_zero(self) -> None:
        self.assertEqual(recency_bonus(NOW + 500, NOW, 3000.0), 3000.0)

    def test_missing_timestamp_gets_no_bonus(self) -> None:
        self.assertEqual(recency_bonus(0, NOW, 3000.0), 0.0)
        self.assertEqual(item_score("x", 7, [], 0, False, NOW), 7.0)

    def test_recency_is_monotonic(self) -> None:
        newer = item_score("status", 10, [0], NOW - 60, False, NOW)
        older = item_score("status", 10, [0], NOW - 86_400, False, NOW)

        self.assertGreaterEqual(newer, older)


class ItemScoreTests(unittest.TestCase):
    def test_current_branch_bonus(self) -> None:
        self.assertEqual(item_score("x", 10, [], 0, True, NOW), 510.0)

    def test_combines_base_match_and_recency(self) -> None:
        score = item_score("foo", 5, [0, 1, 2], NOW - 3600, False, NOW)

        self.assertEqual(score, 5 + 210 + 1500)

    def test_custom_config_is_honoured(self) -> None:
        config = ScoringConfig(prefix_bonus=0.0, word_boundary_bonus=0.0, consecutive_bonus=0.0)

        self.assertEqual(item_score("foo", 1, [0, 1, 2], 0, False, NOW, config), 1.0)

    def test_deterministic_for_fixed_inputs(self) -> None:
        args = ("fooBar", 12, [0, 3], NOW - 100, True, NOW)

        self.assertEqual(item_score(*args), item_score(*args))

    def test_field_names_cover_all_bonuses(self) -> None:
        self.assertEqual(
            ScoringConfig.field_names(),
            (
                "word_boundary_bonus",
                "consecutive_bonus",
                "prefix_bonus",
                "camel_case_bonus",
                "max_recency_bonus",
                "current_branch_bonus",
            ),
        )


if __name__ == "__main__":
    unittest.main()
