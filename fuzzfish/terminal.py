"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching. The UI talks to
``/dev/tty`` directly so stdout stays free for the selected result.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from .errors import TerminalUnavailableError

TTY_PATH = "/dev/tty"


def open_tty(path: str = TTY_PATH) -> int:
    """Open the controlling terminal read/write and return its fd."""
    try:
        fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise TerminalUnavailableError(f"cannot open {path}: {exc.strerror or exc}") from exc
    if not os.isatty(fd):
        os.close(fd)
        raise TerminalUnavailableError(f"{path} is not a terminal")
    return fd


def terminal_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` for ``fd``, falling back to environment defaults."""
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


class TerminalController:
    """Manage terminal mode transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalUnavailableError(f"cannot read terminal attributes: {exc}") from exc

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
