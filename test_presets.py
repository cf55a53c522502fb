import calendar
import logging

from presets import (
    DEFAULT_SIZE,
    DEFAULT_THEME,
    MONTH_NAMES,
    SIZES,
    THEMES,
    get_size,
    get_theme,
    get_week_start,
    month_label,
    size_label,
    theme_by_month_fill,
)
from timeline_logic import MonthSegment


def test_known_presets():
    assert set(THEMES) == {"Purple", "Red", "Green", "Blue"}
    assert list(SIZES) == ["small", "medium", "large"]
    assert get_theme("Green").month_fill == "#36CE1D"
    assert get_size("medium").day_width == 80


def test_unknown_theme_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="presets"):
        assert get_theme("Orange") is THEMES[DEFAULT_THEME]
    assert "Orange" in caplog.text


def test_unknown_size_falls_back():
    assert get_size("huge") is SIZES[DEFAULT_SIZE]
    assert get_size(None) is SIZES[DEFAULT_SIZE]


def test_theme_by_month_fill():
    assert theme_by_month_fill("#9747FF") == "Purple"
    assert theme_by_month_fill("#3683C9") == "Blue"
    assert theme_by_month_fill("#000000") is None


def test_month_label_abbreviates_short_months():
    assert month_label(MonthSegment(0, 7)) == "Jan"
    assert month_label(MonthSegment(0, 8)) == "January"
    assert month_label(MonthSegment(11, 1)) == "Dec"
    assert len(MONTH_NAMES) == 12


def test_size_label():
    assert size_label("medium") == "Medium"


def test_week_start_lookup():
    assert get_week_start("sunday") == calendar.SUNDAY
    assert get_week_start("monday") == calendar.MONDAY
    assert get_week_start("friday") == calendar.MONDAY
