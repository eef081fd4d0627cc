"""Command-line front door for fuzzfish.

Parses CLI options, checks mode prerequisites, runs the interactive finder
on the controlling terminal and prints the confirmed selection to stdout
for the calling shell function to act on.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_history_path, load_theme_name, save_theme_name
from .errors import FuzzfishError, NotAGitRepositoryError
from .items import Mode, Selection
from .providers import GitProvider
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)

MODE_CHOICES: dict[str, Mode] = {
    "history": Mode.HISTORY,
    "git": Mode.GIT_BRANCH,
    "files": Mode.FILES,
}
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def format_selection(selection: Selection) -> str:
    """Return the stdout line for a confirmed selection."""
    if selection.action == "pull":
        return f"PULL:{selection.value}"
    if selection.mode is Mode.FILES:
        return f"{'DIR' if selection.is_dir else 'FILE'}:{selection.value}"
    return selection.value


def configure_logging(log_file: Path | None) -> None:
    """Send package logs to ``log_file``; without one they are discarded."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("fuzzfish")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzfish",
        description="Fuzzy-find fish history, git branches, or files in a dual-pane terminal view.",
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=sorted(MODE_CHOICES),
        default="history",
        help="Initial mode (default: history).",
    )
    parser.add_argument("--history-file", type=Path, default=None, help="Path to the fish_history file.")
    parser.add_argument("--root", type=Path, default=None, help="Directory for git and file modes (default: cwd).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Append debug logs to this file.")
    return parser


def _resolve_theme_name(requested: str | None) -> str:
    if requested is None:
        return normalize_theme_name(load_theme_name())
    name = normalize_theme_name(requested)
    save_theme_name(name)
    return name


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the finder, and print the selection.

    Returns ``0`` after a selection or a cancel. Startup failures (explicit
    ``git`` mode outside a repository, no interactive terminal) exit with
    status 1 via ``SystemExit`` before anything is drawn.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    mode = MODE_CHOICES[args.mode]
    root = (args.root or Path.cwd()).resolve()
    history_path = args.history_file.expanduser() if args.history_file else load_history_path()
    theme = resolve_theme(_resolve_theme_name(args.theme), no_color=args.no_color)

    from .runtime import run_finder
    from .runtime.app import FinderOptions

    try:
        if mode is Mode.GIT_BRANCH and not GitProvider(root).is_repo():
            raise NotAGitRepositoryError(root)
        selection = run_finder(FinderOptions(mode=mode, theme=theme, root=root, history_path=history_path))
    except FuzzfishError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(f"fuzzfish: {exc}") from exc

    if selection is not None:
        sys.stdout.write(format_selection(selection) + "\n")
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
