"""Session wiring tests for ``fuzzfish.runtime.app``.

Runs a whole finder session with the terminal replaced by fakes while the
real providers, loader threads and controller do their work.
"""

from __future__ import annotations

import tempfile
import time
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from fuzzfish.ansi import strip_ansi
from fuzzfish.errors import TerminalUnavailableError
from fuzzfish.items import Mode, Selection
from fuzzfish.runtime import app
from fuzzfish.runtime.app import FinderOptions
from fuzzfish.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        yield


class _KeysWhenFrameShows:
    """Press ``keys`` one at a time, each once the latest frame contains ``marker``."""

    def __init__(self, frames: list[list[str]], marker: str, keys: list[str]) -> None:
        self.frames = frames
        self.marker = marker
        self.keys = list(keys)
        self.deadline = time.monotonic() + 3.0

    def __call__(self, fd: int, timeout_ms: int | None = None) -> str:
        if time.monotonic() > self.deadline:
            return "ESC"
        if self.keys and self.frames and any(self.marker in strip_ansi(line) for line in self.frames[-1]):
            return self.keys.pop(0)
        time.sleep(0.01)
        return ""


class RunSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        patcher = mock.patch("fuzzfish.config.CONFIG_PATH", self.root / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)

    def _session(self, options: FinderOptions, marker: str, keys: list[str]):
        frames: list[list[str]] = []
        terminal = _FakeTerminal()
        with mock.patch.object(app, "terminal_size", return_value=(100, 20)), mock.patch.object(
            app, "render_frame", side_effect=lambda fd, lines: frames.append(lines)
        ), mock.patch.object(app, "read_key", side_effect=_KeysWhenFrameShows(frames, marker, keys)):
            choice = app._run_session(options, terminal, 99)
        return choice, frames, terminal

    def test_history_session_confirms_newest_command(self) -> None:
        history = self.root / "fish_history"
        history.write_text("- cmd: make test\n  when: 100\n- cmd: git status\n  when: 200\n", encoding="utf-8")
        options = FinderOptions(mode=Mode.HISTORY, theme=PLAIN_THEME, root=self.root, history_path=history)

        choice, frames, terminal = self._session(options, "History 2/2", ["ENTER"])

        self.assertEqual(terminal.entered, 1)
        self.assertEqual(choice, Selection(mode=Mode.HISTORY, value="git status"))
        self.assertTrue(all(len(frame) == 20 for frame in frames))

    def test_files_session_returns_directory_selection(self) -> None:
        (self.root / "src").mkdir()
        options = FinderOptions(mode=Mode.FILES, theme=PLAIN_THEME, root=self.root)

        choice, _, _ = self._session(options, "Files 1/1", ["ENTER"])

        self.assertEqual(choice, Selection(mode=Mode.FILES, value="src", is_dir=True))

    def test_first_preview_is_rendered_at_pane_size(self) -> None:
        (self.root / "notes.txt").write_text("hello\n", encoding="utf-8")
        options = FinderOptions(mode=Mode.FILES, theme=PLAIN_THEME, root=self.root)

        with mock.patch.object(app, "render_preview", wraps=app.render_preview) as preview_mock:
            self._session(options, "Files 1/1", ["ENTER"])

        sizes = {(call.args[2], call.args[3]) for call in preview_mock.call_args_list}
        self.assertEqual(sizes, {(38, 15)})

    def test_repository_check_runs_once_per_session(self) -> None:
        options = FinderOptions(mode=Mode.FILES, theme=PLAIN_THEME, root=self.root)

        with mock.patch.object(app.GitProvider, "is_repo", return_value=False) as is_repo:
            choice, _, _ = self._session(options, "Files", ["CTRL_G", "CTRL_G", "CTRL_G", "ESC"])

        self.assertIsNone(choice)
        is_repo.assert_called_once_with()

    def test_cancel_returns_none(self) -> None:
        options = FinderOptions(mode=Mode.FILES, theme=PLAIN_THEME, root=self.root)

        choice, _, _ = self._session(options, "Files", ["ESC"])

        self.assertIsNone(choice)


class RunFinderTests(unittest.TestCase):
    def test_tty_is_closed_after_session(self) -> None:
        options = FinderOptions(mode=Mode.HISTORY, theme=PLAIN_THEME, root=Path("."))
        with mock.patch.object(app, "open_tty", return_value=42), mock.patch.object(
            app, "TerminalController"
        ) as controller_cls, mock.patch.object(app, "_run_session", return_value=None) as session, mock.patch.object(
            app.os, "close"
        ) as close_mock:
            self.assertIsNone(app.run_finder(options))

        controller_cls.assert_called_once_with(42, 42)
        session.assert_called_once_with(options, controller_cls.return_value, 42)
        close_mock.assert_called_once_with(42)

    def test_missing_tty_propagates_before_drawing(self) -> None:
        options = FinderOptions(mode=Mode.HISTORY, theme=PLAIN_THEME, root=Path("."))
        with mock.patch.object(app, "open_tty", side_effect=TerminalUnavailableError("no tty")), mock.patch.object(
            app, "_run_session"
        ) as session:
            with self.assertRaises(TerminalUnavailableError):
                app.run_finder(options)

        session.assert_not_called()


if __name__ == "__main__":
    unittest.main()
