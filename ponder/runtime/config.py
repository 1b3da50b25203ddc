"""Persistent JSON config helpers.

Stores the last connected workspace root and viewer preferences.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..file_tree_model.fs import DEFAULT_MAX_READ_BYTES

logger = logging.getLogger(__name__)

APP_NAME = "ponder"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

LAST_WORKSPACE_KEY = "last_workspace_path"


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
    except Exception as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def load_last_root() -> str | None:
    """Return the remembered workspace root, or ``None`` when unset/invalid."""
    value = load_config().get(LAST_WORKSPACE_KEY)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_last_root(path: str) -> None:
    """Remember ``path`` as the last connected workspace root."""
    stripped = str(path).strip()
    if not stripped:
        return
    config = load_config()
    config[LAST_WORKSPACE_KEY] = stripped
    save_config(config)


def load_max_read_bytes() -> int:
    """Return the per-file read budget; non-positive or non-int values fall back."""
    value = load_config().get("max_read_bytes")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_READ_BYTES
    return value


def load_show_size_labels() -> bool:
    """Return whether tree rows show file sizes; only explicit booleans count."""
    value = load_config().get("show_size_labels")
    return bool(value) if isinstance(value, bool) else True


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "LAST_WORKSPACE_KEY",
    "load_config",
    "save_config",
    "load_last_root",
    "save_last_root",
    "load_max_read_bytes",
    "load_show_size_labels",
]
