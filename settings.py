"""JSON-based settings persistence for the linear calendar."""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".linear-calendar-settings.json")

_DEFAULTS = {
    "window_width": None,
    "window_height": None,
    "view": "year",
    "show_weekends": True,
}

_VIEWS = ("year", "month")


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path or SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file: %s", exc)
        return settings
    if not isinstance(stored, dict):
        return settings

    for key in ("window_width", "window_height"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            settings[key] = value
    if stored.get("view") in _VIEWS:
        settings["view"] = stored["view"]
    if isinstance(stored.get("show_weekends"), bool):
        settings["show_weekends"] = stored["show_weekends"]
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
