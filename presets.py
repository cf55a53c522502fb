"""Theme and size presets for the timeline."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass

from timeline_logic import MonthSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    month_fill: str
    week_fill: str


@dataclass(frozen=True)
class Size:
    day_width: int
    spacing: int
    padding: int
    font_size_month: int
    font_size_week: int


THEMES: dict[str, Theme] = {
    "Purple": Theme(month_fill="#9747ff", week_fill="#eadaff"),
    "Red":    Theme(month_fill="#FF4747", week_fill="#FDC5C5"),
    "Green":  Theme(month_fill="#36CE1D", week_fill="#C5F2D2"),
    "Blue":   Theme(month_fill="#3683C9", week_fill="#D1E5F8"),
}

SIZES: dict[str, Size] = {
    "small":  Size(day_width=40,  spacing=10, padding=15, font_size_month=42, font_size_week=32),
    "medium": Size(day_width=80,  spacing=15, padding=20, font_size_month=62, font_size_week=52),
    "large":  Size(day_width=120, spacing=20, padding=30, font_size_month=82, font_size_week=72),
}

DEFAULT_THEME = "Purple"
DEFAULT_SIZE = "small"

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def get_theme(name: str | None) -> Theme:
    """Return the named theme, falling back to the default."""
    theme = THEMES.get(name) if name else None
    if theme is None:
        logger.warning("Unknown theme %r, using %s", name, DEFAULT_THEME)
        return THEMES[DEFAULT_THEME]
    return theme


def get_size(key: str | None) -> Size:
    """Return the size preset for *key*, falling back to the default."""
    size = SIZES.get(key) if key else None
    if size is None:
        logger.warning("Unknown size %r, using %s", key, DEFAULT_SIZE)
        return SIZES[DEFAULT_SIZE]
    return size


def theme_by_month_fill(fill: str) -> str | None:
    """Return the name of the theme whose month colour is *fill*."""
    for name, theme in THEMES.items():
        if theme.month_fill.lower() == fill.lower():
            return name
    return None


def month_label(month: MonthSegment) -> str:
    """Full month name, or its three-letter form for a week or less."""
    label = MONTH_NAMES[month.month_index]
    if month.day_count <= 7:
        label = label[:3]
    return label


def size_label(key: str) -> str:
    return key[:1].upper() + key[1:]


WEEK_STARTS: dict[str, int] = {
    "monday": calendar.MONDAY,
    "sunday": calendar.SUNDAY,
}

DEFAULT_WEEK_START = "monday"


def get_week_start(key: str | None) -> int:
    """Return the ``calendar`` weekday a week starts on, falling back to Monday."""
    first_weekday = WEEK_STARTS.get(key) if key else None
    if first_weekday is None:
        logger.warning("Unknown week start %r, using %s", key, DEFAULT_WEEK_START)
        return WEEK_STARTS[DEFAULT_WEEK_START]
    return first_weekday
