"""User preferences stored as one JSON object.

Keys: ``symbols``, ``theme``, ``depth``, ``show_hidden`` and ``keys``. A
missing, unreadable or malformed file behaves like an empty one.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .fs_tree import DEFAULT_MAX_DEPTH
from .keymap import DEFAULT_KEYMAP, KeyMap, keymap_with_overrides

logger = logging.getLogger(__name__)

APP_NAME = "lazytree"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / "config.json"


def load_config() -> dict[str, object]:
    """Read the config file; anything but a JSON object yields ``{}``."""
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("ignoring malformed config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` back; a read-only config directory is logged, not raised."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_symbols_name() -> str | None:
    return _load_name("symbols")


def load_theme_name() -> str | None:
    return _load_name("theme")


def load_depth() -> int:
    """Scan depth; booleans and non-positive numbers fall back to the default."""
    value = load_config().get("depth")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_DEPTH
    return value


def load_show_hidden() -> bool:
    return load_config().get("show_hidden") is True


def save_show_hidden(show_hidden: bool) -> None:
    data = load_config()
    data["show_hidden"] = bool(show_hidden)
    save_config(data)


def load_keymap() -> KeyMap:
    """Default key map with the ``keys`` object's per-action overrides applied."""
    overrides = load_config().get("keys")
    if not isinstance(overrides, dict):
        return DEFAULT_KEYMAP
    return keymap_with_overrides(overrides)
