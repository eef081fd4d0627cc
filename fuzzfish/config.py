"""Persistent JSON config helpers.

Stores the theme name, scoring overrides, debounce delay, list-pane width
and history file location. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from platformdirs import user_config_dir

from .search.scoring import DEFAULT_SCORING, ScoringConfig

logger = logging.getLogger(__name__)

APP_NAME = "fuzzfish"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DEBOUNCE_MS = 30
MAX_DEBOUNCE_MS = 1000
DEFAULT_LIST_PANE_PERCENT = 60.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        logger.debug("could not write config to %s", CONFIG_PATH, exc_info=True)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_scoring_config() -> ScoringConfig:
    """Return ``ScoringConfig`` with overrides from the ``"scoring"`` object.

    Unknown keys, non-numeric and negative values are ignored.
    """
    overrides = load_config().get("scoring")
    if not isinstance(overrides, dict):
        return DEFAULT_SCORING

    accepted: dict[str, float] = {}
    for name in ScoringConfig.field_names():
        value = overrides.get(name)
        if _is_number(value) and value >= 0:
            accepted[name] = float(value)
    if not accepted:
        return DEFAULT_SCORING
    return replace(DEFAULT_SCORING, **accepted)


def load_debounce_ms() -> int:
    value = load_config().get("debounce_ms")
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_DEBOUNCE_MS
    if value < 1 or value > MAX_DEBOUNCE_MS:
        return DEFAULT_DEBOUNCE_MS
    return value


def load_list_pane_percent() -> float:
    """Load the list-pane width percentage constrained to ``(0, 100)``."""
    value = load_config().get("list_pane_percent")
    if not _is_number(value) or value <= 0 or value >= 100:
        return DEFAULT_LIST_PANE_PERCENT
    return float(value)


def load_history_path() -> Path | None:
    value = load_config().get("history_file")
    if not isinstance(value, str) or not value.strip():
        return None
    return Path(value.strip()).expanduser()
