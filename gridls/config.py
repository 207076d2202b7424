"""Persistent JSON config helpers.

Stores listing defaults: color output, hidden-entry visibility, and the
width used when output is not a terminal. Malformed or missing config falls
back to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "gridls"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_FALLBACK_WIDTH = 200


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and ignored; defaults stay in effect.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("unable to write config %s: %s", CONFIG_PATH, exc)


def _load_bool(key: str, default: bool) -> bool:
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_bool(key: str, value: bool) -> None:
    config = load_config()
    config[key] = bool(value)
    save_config(config)


def load_show_hidden() -> bool:
    """Return persisted hidden-entry preference, ``False`` when unset."""
    return _load_bool("show_hidden", False)


def save_show_hidden(show_hidden: bool) -> None:
    _save_bool("show_hidden", show_hidden)


def load_use_color() -> bool:
    """Return persisted color preference, ``True`` when unset."""
    return _load_bool("color", True)


def save_use_color(use_color: bool) -> None:
    _save_bool("color", use_color)


def load_fallback_width() -> int:
    """Width used when the terminal size cannot be queried.

    Booleans and non-positive integers are rejected.
    """
    value = load_config().get("fallback_width")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_FALLBACK_WIDTH
    return value
