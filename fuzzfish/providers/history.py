"""Fish shell history parser.

Reads the YAML-like ``fish_history`` format line by line::

    - cmd: git status
      when: 1700000000
      paths:
        - /home/me/project

Records come back newest first with duplicate commands collapsed onto their
newest occurrence. Any read failure yields an empty list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..items import HistoryRecord

logger = logging.getLogger(__name__)

CMD_PREFIX = "- cmd: "
WHEN_PREFIX = "  when: "
PATH_PREFIX = "    - "


def default_history_path() -> Path:
    return Path.home() / ".local" / "share" / "fish" / "fish_history"


def _read_lines(path: Path) -> list[str] | None:
    for encoding in ("utf-8", "latin-1"):
        try:
            return path.read_text(encoding=encoding).splitlines()
        except UnicodeDecodeError:
            continue
        except OSError as exc:
            logger.debug("cannot read history file %s: %s", path, exc)
            return None
    return None


def parse_history_lines(lines: list[str]) -> list[HistoryRecord]:
    """Parse raw history lines into deduplicated newest-first records."""
    parsed: list[HistoryRecord] = []
    text: str | None = None
    when = 0
    paths: list[str] = []
    source_line = 0

    def flush() -> None:
        if text is not None:
            parsed.append(HistoryRecord(text=text, when=when, paths=tuple(paths), source_line=source_line))

    for line_no, line in enumerate(lines, start=1):
        if line.startswith(CMD_PREFIX):
            flush()
            text = line[len(CMD_PREFIX):]
            when = 0
            paths = []
            source_line = line_no
            continue
        if text is None:
            continue
        if line.startswith(WHEN_PREFIX):
            try:
                when = int(line[len(WHEN_PREFIX):].strip())
            except ValueError:
                pass
        elif line.startswith(PATH_PREFIX):
            paths.append(line[len(PATH_PREFIX):])
    flush()

    seen: set[str] = set()
    records: list[HistoryRecord] = []
    for record in reversed(parsed):
        if record.text in seen:
            continue
        seen.add(record.text)
        records.append(record)
    return records


class HistoryProvider:
    """Load shell history records from one history file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = default_history_path() if path is None else path

    def parse(self) -> list[HistoryRecord]:
        lines = _read_lines(self.path)
        if lines is None:
            return []
        records = parse_history_lines(lines)
        logger.debug("parsed %d history records from %s", len(records), self.path)
        return records
