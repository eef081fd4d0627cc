"""Frame composition tests for the dual-pane list and preview view."""

from __future__ import annotations

import unittest
from unittest import mock

from fuzzfish.ansi import display_width, strip_ansi
from fuzzfish.items import BranchRecord, FileRecord, HistoryRecord, Item, Mode
from fuzzfish.render import build_frame, format_item_row, highlight_matches, render_frame
from fuzzfish.runtime import AppState, ControllerCallbacks, FuzzfishController, LoadedEvent, ResizeEvent
from fuzzfish.ui_theme import DEFAULT_THEME, PLAIN_THEME

NOW = 10_000


def _ready_state(mode: Mode, records, columns: int = 100, rows: int = 20) -> AppState:
    state = AppState()
    controller = FuzzfishController(
        state,
        ControllerCallbacks(
            request_load=lambda m: None,
            schedule_filter_tick=lambda query, delay: None,
            render_preview=lambda item, recs, width, height: f"Preview of {item.text}\nsecond line",
            now=lambda: NOW,
        ),
    )
    controller.start(mode)
    controller.handle_event(ResizeEvent(columns, rows))
    if records is not None:
        controller.handle_event(LoadedEvent(mode, records))
    return state


def _plain(lines: list[str]) -> list[str]:
    return [strip_ansi(line) for line in lines]


class BuildFrameTests(unittest.TestCase):
    def test_frame_fills_terminal_without_overflow(self) -> None:
        state = _ready_state(Mode.HISTORY, [HistoryRecord(text="ls", when=NOW - 120)])

        lines = build_frame(state, state.preview_text, DEFAULT_THEME, 100, 20, NOW)

        self.assertEqual(len(lines), 20)
        for line in lines:
            self.assertLessEqual(display_width(strip_ansi(line)), 100)

    def test_list_is_bottom_anchored_with_selection_marker(self) -> None:
        records = [HistoryRecord(text="ls", when=NOW - 120), HistoryRecord(text="pwd", when=NOW - 7200)]
        state = _ready_state(Mode.HISTORY, records)

        lines = _plain(build_frame(state, state.preview_text, PLAIN_THEME, 100, 20, NOW))

        # Rows 1..15 are list rows; the newest entry sits right above the bottom border.
        self.assertIn("▌ ls", lines[15])
        self.assertIn("2m ago", lines[15])
        self.assertIn("  pwd", lines[14])
        self.assertIn("2h ago", lines[14])
        self.assertEqual(lines[13][1:59].strip(), "")
        self.assertIn("History 2/2", lines[0])
        self.assertIn("Preview", lines[0])
        self.assertIn("Preview of ls", lines[1])

    def test_input_box_shows_placeholder_then_query(self) -> None:
        state = _ready_state(Mode.HISTORY, [HistoryRecord(text="ls")])

        lines = _plain(build_frame(state, "", PLAIN_THEME, 100, 20, NOW))
        self.assertIn("> ", lines[-2])
        self.assertIn("Search history...", lines[-2])

        state.query = "git"
        lines = _plain(build_frame(state, "", PLAIN_THEME, 100, 20, NOW))
        self.assertIn("> git", lines[-2])
        self.assertNotIn("Search history", lines[-2])

    def test_loading_and_empty_messages(self) -> None:
        loading = _ready_state(Mode.FILES, None)
        self.assertTrue(any("Loading..." in line for line in _plain(build_frame(loading, "", PLAIN_THEME, 80, 12, NOW))))

        state = _ready_state(Mode.FILES, [FileRecord(path="a.txt")])
        state.ranked = []
        lines = _plain(build_frame(state, "", PLAIN_THEME, 80, 12, NOW))
        self.assertTrue(any("No matches" in line for line in lines))
        self.assertIn("Files 0/1", lines[0])

    def test_branch_and_file_decorations(self) -> None:
        branches = [
            BranchRecord(name="main", is_current=True),
            BranchRecord(name="origin/feature", is_remote=True),
            BranchRecord(name="topic"),
        ]
        text = "\n".join(_plain(build_frame(_ready_state(Mode.GIT_BRANCH, branches), "", PLAIN_THEME, 100, 20, NOW)))
        self.assertIn("* main", text)
        self.assertIn("R origin/feature", text)
        self.assertIn("    topic", text)

        files = [FileRecord(path="src", is_dir=True), FileRecord(path="README.md")]
        text = "\n".join(_plain(build_frame(_ready_state(Mode.FILES, files), "", PLAIN_THEME, 100, 20, NOW)))
        self.assertIn("📁 src", text)
        self.assertIn("📄 README.md", text)

    def test_status_message_in_input_border(self) -> None:
        state = _ready_state(Mode.HISTORY, [HistoryRecord(text="ls")])
        state.status_message = "select current branch to pull"

        lines = _plain(build_frame(state, "", PLAIN_THEME, 100, 20, NOW))

        self.assertIn("select current branch to pull", lines[-1])

    def test_degenerate_sizes(self) -> None:
        state = _ready_state(Mode.HISTORY, [HistoryRecord(text="ls")], columns=3, rows=4)

        self.assertEqual(build_frame(state, "", PLAIN_THEME, 0, 10, NOW), [])
        lines = build_frame(state, "", PLAIN_THEME, 3, 4, NOW)
        self.assertLessEqual(len(lines), 4)
        for line in lines:
            self.assertLessEqual(display_width(strip_ansi(line)), 3)


class RowFormattingTests(unittest.TestCase):
    def test_row_is_padded_to_width(self) -> None:
        item = Item(text="ls -la", index=0, original=HistoryRecord(text="ls -la", when=NOW - 30))

        for selected in (False, True):
            row = format_item_row(item, selected, 40, DEFAULT_THEME, NOW)
            self.assertEqual(display_width(strip_ansi(row)), 40)
            self.assertTrue(strip_ansi(row).endswith("30s ago"))

    def test_long_row_is_clipped(self) -> None:
        item = Item(text="x" * 200, index=0, original=FileRecord(path="x" * 200))

        row = format_item_row(item, False, 30, PLAIN_THEME, NOW)

        self.assertEqual(display_width(strip_ansi(row)), 30)

    def test_control_characters_cannot_escape_row(self) -> None:
        item = Item(text="echo \x1b[2J", index=0, original=HistoryRecord(text="echo \x1b[2J"))

        row = strip_ansi(format_item_row(item, False, 20, PLAIN_THEME, NOW))

        self.assertIn("echo ?[2J", row)

    def test_highlight_matches_colors_only_matched_positions(self) -> None:
        out = highlight_matches("abc", (0, 2), "", DEFAULT_THEME)

        self.assertEqual(strip_ansi(out), "abc")
        self.assertTrue(out.startswith(DEFAULT_THEME.match + "a"))
        self.assertIn(DEFAULT_THEME.reset + "b" + DEFAULT_THEME.match + "c", out)

    def test_plain_theme_match_highlight_is_uncolored(self) -> None:
        self.assertEqual(highlight_matches("abc", (1,), "", PLAIN_THEME), "abc")


class RenderFrameTests(unittest.TestCase):
    def test_writes_home_clear_and_crlf_rows(self) -> None:
        with mock.patch("fuzzfish.render.os.write") as write_mock:
            render_frame(7, ["one", "two"])

        write_mock.assert_called_once_with(7, b"\x1b[H\x1b[Jone\r\ntwo")


if __name__ == "__main__":
    unittest.main()
