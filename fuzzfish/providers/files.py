"""Bounded filesystem walk producing relative file and directory entries."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..items import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 5000
DEFAULT_SKIP_DIRS = frozenset(
    {
        ".git",
        "node_modules",
        "vendor",
        "__pycache__",
        ".venv",
        "venv",
        ".cache",
        "dist",
        "build",
        ".next",
        ".nuxt",
        "target",
    }
)


class FileProvider:
    """Collect entries under ``root`` in case-insensitive walk order.

    Dotfiles and dot-directories are skipped, as are directories named in
    ``skip_dirs``. Collection stops once ``max_entries`` entries are found.
    Unreadable directories are skipped silently.
    """

    def __init__(
        self,
        root: Path | None = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
    ) -> None:
        self.root = Path.cwd() if root is None else root
        self.max_entries = max(0, max_entries)
        self.skip_dirs = skip_dirs

    def _keep(self, name: str) -> bool:
        return not name.startswith(".")

    def collect(self) -> list[FileRecord]:
        entries: list[FileRecord] = []
        if self.max_entries == 0:
            return entries

        def on_error(exc: OSError) -> None:
            logger.debug("skipping unreadable path: %s", exc)

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            base = Path(dirpath)
            dirnames[:] = sorted(
                (name for name in dirnames if self._keep(name) and name not in self.skip_dirs),
                key=str.lower,
            )
            children = [(name, True) for name in dirnames]
            children.extend((name, False) for name in filenames if self._keep(name))
            children.sort(key=lambda child: child[0].lower())
            for name, is_dir in children:
                relative = (base / name).relative_to(self.root).as_posix()
                entries.append(FileRecord(path=relative, is_dir=is_dir))
                if len(entries) >= self.max_entries:
                    return entries
        return entries
