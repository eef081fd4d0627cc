from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fuzzfish.ansi import strip_ansi
from fuzzfish.items import BranchRecord, FileRecord, HistoryRecord, Item, project_items
from fuzzfish.preview import PreviewCache, render_preview
from fuzzfish.preview.branch import render_branch_preview
from fuzzfish.preview.files import MAX_DIRECTORY_ENTRIES, is_binary, render_file_preview
from fuzzfish.preview.history import abbreviate_home, render_history_preview
from fuzzfish.ui_theme import DEFAULT_THEME, PLAIN_THEME

NOW = 1_700_000_000


class PreviewCacheTests(unittest.TestCase):
    def test_get_put_clear(self) -> None:
        cache = PreviewCache()
        self.assertIsNone(cache.get("a"))

        cache.put("a", "text")

        self.assertEqual(cache.get("a"), "text")
        self.assertEqual(len(cache), 1)
        cache.clear()
        self.assertEqual(len(cache), 0)


class HistoryPreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = [HistoryRecord(text=f"cmd{idx}", when=NOW - 3600) for idx in range(10)]

    def test_context_window_and_marker(self) -> None:
        text = strip_ansi(render_history_preview(self.records[5], self.records, 5, 40, PLAIN_THEME, NOW))
        lines = text.split("\n")
        context = lines[lines.index("Context") + 1 :]

        self.assertEqual(
            context,
            ["  cmd2", "  cmd3", "  cmd4", "→ cmd5", "  cmd6", "  cmd7", "  cmd8"],
        )
        self.assertIn("1 hour ago", text)

    def test_context_is_clamped_at_list_edges(self) -> None:
        text = strip_ansi(render_history_preview(self.records[0], self.records, 0, 40, PLAIN_THEME, NOW))
        context = text.split("Context\n", 1)[1].split("\n")

        self.assertEqual(context[0], "→ cmd0")
        self.assertEqual(len(context), 4)

    def test_inactive_lines_are_truncated_and_active_line_wraps(self) -> None:
        records = [HistoryRecord(text="x" * 30), HistoryRecord(text="y" * 30)]

        text = strip_ansi(render_history_preview(records[0], records, 0, 12, PLAIN_THEME, NOW))
        context = text.split("Context\n", 1)[1].split("\n")

        self.assertEqual(context[0], "→ " + "x" * 10)
        self.assertEqual(context[-1], "  " + "y" * 7 + "...")
        self.assertEqual("".join(context[:-1]).replace("→ ", ""), "x" * 30)

    def test_directory_uses_tilde(self) -> None:
        self.assertEqual(abbreviate_home("/home/me/src", home="/home/me"), "~/src")
        self.assertEqual(abbreviate_home("/home/meow", home="/home/me"), "/home/meow")
        record = HistoryRecord(text="ls", paths=(str(Path.home() / "proj"),))

        text = strip_ansi(render_history_preview(record, [record], 0, 40, PLAIN_THEME, NOW))

        self.assertIn("Directory\n~/proj", text)

    def test_unknown_time(self) -> None:
        record = HistoryRecord(text="ls")

        text = strip_ansi(render_history_preview(record, [record], 0, 40, PLAIN_THEME, NOW))

        self.assertIn("0000-00-00 00:00:00\nunknown", text)


class BranchPreviewTests(unittest.TestCase):
    def test_sections(self) -> None:
        record = BranchRecord(
            name="origin/main",
            is_remote=True,
            short_hash="abc1234",
            last_message="fix",
            commit_timestamp=NOW - 120,
        )

        text = strip_ansi(render_branch_preview(record, DEFAULT_THEME, NOW))

        for expected in ("Branch\norigin/main", "Commit\nabc1234", "Message\nfix", "2 minutes ago", "Type\nRemote branch"):
            with self.subTest(expected=expected):
                self.assertIn(expected, text)

    def test_branch_kinds(self) -> None:
        current = strip_ansi(render_branch_preview(BranchRecord(name="a", is_current=True), PLAIN_THEME, NOW))
        local = strip_ansi(render_branch_preview(BranchRecord(name="a"), PLAIN_THEME, NOW))

        self.assertIn("Current branch", current)
        self.assertIn("Local branch", local)


class FilePreviewTests(unittest.TestCase):
    def test_text_file_head_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("line1\nline2\n" + "z" * 200 + "\n", encoding="utf-8")

            text = strip_ansi(render_file_preview(FileRecord(path="a.txt"), root, 40, PLAIN_THEME))

            self.assertIn("Type: file", text)
            self.assertIn("Size: 213 bytes", text)
            self.assertIn("Permissions: -", text)
            self.assertIn("  line1\n  line2", text)
            self.assertIn("  " + "z" * 120 + "...", text)

    def test_head_respects_height(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "big.txt").write_text("\n".join(f"row{idx}" for idx in range(100)), encoding="utf-8")

            text = strip_ansi(render_file_preview(FileRecord(path="big.txt"), root, 12, PLAIN_THEME))

            self.assertLessEqual(len(text.split("\n")), 12)
            self.assertIn("row0", text)
            self.assertNotIn("row50", text)

    def test_binary_and_empty_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "bin").write_bytes(b"ab\x00cd")
            (root / "empty").write_bytes(b"")

            for name in ("bin", "empty"):
                with self.subTest(name=name):
                    text = strip_ansi(render_file_preview(FileRecord(path=name), root, 20, PLAIN_THEME))
                    self.assertIn("(binary or empty file)", text)

    def test_binary_probe_window(self) -> None:
        self.assertTrue(is_binary(b"a\x00"))
        self.assertFalse(is_binary(b"a" * 8192 + b"\x00"))

    def test_directory_listing_is_capped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "d").mkdir()
            for idx in range(MAX_DIRECTORY_ENTRIES + 5):
                (root / "d" / f"f{idx:02d}").write_text("x", encoding="utf-8")
            (root / "e").mkdir()

            listing = strip_ansi(render_file_preview(FileRecord(path="d", is_dir=True), root, 40, PLAIN_THEME))
            empty = strip_ansi(render_file_preview(FileRecord(path="e", is_dir=True), root, 40, PLAIN_THEME))

            self.assertIn("📄 f00", listing)
            self.assertNotIn("f20", listing)
            self.assertIn("... and 5 more", listing)
            self.assertIn("Type: directory", listing)
            self.assertIn("(empty)", empty)

    def test_colored_preview_for_source_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "m.py").write_text("def f():\n    return 1\n", encoding="utf-8")

            text = render_file_preview(FileRecord(path="m.py"), root, 20, DEFAULT_THEME)

            self.assertIn("\x1b[", text)
            self.assertIn("def", strip_ansi(text))


class RenderPreviewDispatchTests(unittest.TestCase):
    def test_dispatches_by_payload(self) -> None:
        records = [HistoryRecord(text="ls")]
        item = project_items(records)[0]

        text = strip_ansi(render_preview(item, records, 40, 10, PLAIN_THEME, NOW))

        self.assertIn("→ ls", text)

    def test_renderer_failure_degrades_to_plain_text(self) -> None:
        item = Item(text="main", index=0, original=BranchRecord(name="main"))
        with mock.patch(
            "fuzzfish.preview.render_branch_preview",
            side_effect=RuntimeError("boom"),
        ):
            self.assertEqual(render_preview(item, [], 40, 10, PLAIN_THEME, NOW), "main")

    def test_unknown_payload_degrades(self) -> None:
        item = Item(text="odd", index=0, original="odd")  # type: ignore[arg-type]

        self.assertEqual(render_preview(item, [], 40, 10, PLAIN_THEME, NOW), "odd")


if __name__ == "__main__":
    unittest.main()
