"""Persistent JSON config helpers.

Stores the preferred reading direction, a fallback cell size for terminals
that do not report pixel metrics, and the key polling interval. Missing or
malformed config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..layout import Size
from ..viewer import PageMode
from .metrics import DEFAULT_CELL_SIZE

APP_NAME = "lazycomic"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_POLL_INTERVAL_MS = 50
MAX_POLL_INTERVAL_MS = 1000


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

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_page_mode() -> PageMode | None:
    """Return the persisted reading direction, or ``None`` when unset/invalid."""
    value = load_config().get("page_mode")
    if not isinstance(value, str):
        return None
    try:
        return PageMode(value.strip().lower())
    except ValueError:
        return None


def save_page_mode(page_mode: PageMode) -> None:
    config = load_config()
    config["page_mode"] = page_mode.value
    save_config(config)


def load_cell_size() -> Size:
    """Return the configured fallback cell size in pixels.

    Expects a two-element list of positive integers; anything else yields
    ``DEFAULT_CELL_SIZE``.
    """
    value = load_config().get("cell_size")
    if not isinstance(value, list) or len(value) != 2:
        return DEFAULT_CELL_SIZE
    width, height = value
    for part in (width, height):
        if isinstance(part, bool) or not isinstance(part, int) or part <= 0:
            return DEFAULT_CELL_SIZE
    return Size(width, height)


def load_poll_interval_ms() -> int:
    value = load_config().get("poll_interval_ms")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_POLL_INTERVAL_MS
    return min(value, MAX_POLL_INTERVAL_MS)
