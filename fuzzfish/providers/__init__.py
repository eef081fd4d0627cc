"""Record sources: shell history, git branches, and filesystem entries."""

from .files import DEFAULT_MAX_ENTRIES, DEFAULT_SKIP_DIRS, FileProvider
from .git import GitProvider
from .history import HistoryProvider, default_history_path, parse_history_lines

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_SKIP_DIRS",
    "FileProvider",
    "GitProvider",
    "HistoryProvider",
    "default_history_path",
    "parse_history_lines",
]
