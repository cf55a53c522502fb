"""JSON-based widget state persistence for the timeline."""

from __future__ import annotations

import json
import logging
import os
from datetime import date

from presets import (
    DEFAULT_SIZE, DEFAULT_THEME, DEFAULT_WEEK_START, SIZES, THEMES, WEEK_STARTS,
    Size, Theme, get_size, get_theme, get_week_start, theme_by_month_fill,
)
from timeline_logic import InvalidDateError, default_range, parse_date

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-timeline-settings.json")

KEYS = ("from", "to", "theme", "size", "week_start")

# Keys whose value must name an entry of the given preset map
_PRESET_KEYS = {"theme": THEMES, "size": SIZES, "week_start": WEEK_STARTS}


def settings_path(path: str | None = None) -> str:
    """Return the settings file path (explicit > env var > home dir)."""
    return path or os.environ.get("MINI_TIMELINE_SETTINGS") or _SETTINGS_PATH


def _defaults() -> dict:
    start, end = default_range(date.today())
    return {
        "from": start.isoformat(),
        "to": end.isoformat(),
        "theme": DEFAULT_THEME,
        "size": DEFAULT_SIZE,
        "week_start": DEFAULT_WEEK_START,
    }


def _stored_theme(value) -> str | None:
    """Map a stored theme to its name.

    Accepts a theme name, a month colour, or a colour record such as
    ``{"MONTH_FILL": "#9747ff", "WEEK_FILL": "#eadaff"}``.
    """
    if isinstance(value, dict):
        value = value.get("MONTH_FILL", value.get("month_fill"))
    if not isinstance(value, str):
        return None
    if value in THEMES:
        return value
    return theme_by_month_fill(value)


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = _defaults()
    try:
        with open(settings_path(path), "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file: %s", exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file without a JSON object")
        return settings

    for key in ("from", "to"):
        if key in stored:
            try:
                settings[key] = parse_date(stored[key]).isoformat()
            except InvalidDateError:
                logger.warning("Ignoring stored %r date %r", key, stored[key])
    if "theme" in stored:
        theme = _stored_theme(stored["theme"])
        if theme is None:
            logger.warning("Ignoring stored theme %r", stored["theme"])
        else:
            settings["theme"] = theme
    for key in ("size", "week_start"):
        value = stored.get(key)
        if isinstance(value, str) and value in _PRESET_KEYS[key]:
            settings[key] = value
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(settings_path(path), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


class WidgetState:
    """Key-value view over the settings file; every ``set`` is persisted.

    Not thread-safe: callers on other threads marshal onto the tkinter
    thread first.
    """

    def __init__(self, path: str | None = None) -> None:
        self._path = path
        self._values = load_settings(path)

    def get(self, key: str):
        if key not in KEYS:
            raise KeyError(key)
        return self._values[key]

    def set(self, key: str, value) -> bool:
        """Store and persist *value*; return False for an unknown preset name.

        Dates go through :func:`parse_date` and may raise
        :class:`InvalidDateError`.
        """
        if key not in KEYS:
            raise KeyError(key)
        if key in ("from", "to"):
            value = parse_date(value).isoformat()
        elif not isinstance(value, str) or value not in _PRESET_KEYS[key]:
            logger.warning("Not storing unknown %s %r", key, value)
            return False
        self._values[key] = value
        save_settings(self._values, self._path)
        logger.debug("Widget state %s = %r", key, value)
        return True

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------
    def date_range(self) -> tuple[date, date]:
        return parse_date(self._values["from"]), parse_date(self._values["to"])

    def theme(self) -> Theme:
        return get_theme(self._values["theme"])

    def size(self) -> Size:
        return get_size(self._values["size"])

    def first_weekday(self) -> int:
        return get_week_start(self._values["week_start"])
