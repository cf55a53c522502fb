import calendar
import json
from datetime import date

import pytest

from presets import THEMES
from settings import WidgetState, load_settings, save_settings, settings_path
from timeline_logic import InvalidDateError, default_range


@pytest.fixture
def path(tmp_path):
    return str(tmp_path / "settings.json")


def _write(path, data):
    with open(path, "w", encoding="utf-8") as f:
        f.write(data if isinstance(data, str) else json.dumps(data))


def test_missing_file_gives_defaults(path):
    settings = load_settings(path)
    start, end = default_range(date.today())
    assert settings == {
        "from": start.isoformat(),
        "to": end.isoformat(),
        "theme": "Purple",
        "size": "small",
        "week_start": "monday",
    }


def test_corrupt_file_gives_defaults(path, caplog):
    _write(path, "{not json")
    settings = load_settings(path)
    assert settings["theme"] == "Purple"
    assert "unreadable" in caplog.text


def test_stored_values_are_validated(path):
    _write(path, {
        "from": "2024-01-01",
        "to": "garbage",
        "theme": "Orange",
        "size": "large",
    })
    settings = load_settings(path)
    assert settings["from"] == "2024-01-01"
    assert settings["to"] == default_range(date.today())[1].isoformat()
    assert settings["theme"] == "Purple"
    assert settings["size"] == "large"


def test_non_object_file_gives_defaults(path):
    _write(path, [1, 2, 3])
    assert load_settings(path)["size"] == "small"


def test_save_then_load(path):
    save_settings({"from": "2024-03-01", "to": "2024-04-01", "theme": "Red", "size": "medium"}, path)
    settings = load_settings(path)
    assert settings["theme"] == "Red"
    assert settings["to"] == "2024-04-01"


def test_settings_path_env_override(monkeypatch, path):
    monkeypatch.setenv("MINI_TIMELINE_SETTINGS", path)
    assert settings_path() == path
    assert settings_path("/elsewhere.json") == "/elsewhere.json"


class TestWidgetState:
    def test_set_persists(self, path):
        state = WidgetState(path)
        state.set("from", date(2024, 1, 1))
        state.set("to", "2024-02-01")
        state.set("theme", "Blue")

        reloaded = WidgetState(path)
        assert reloaded.get("from") == "2024-01-01"
        assert reloaded.date_range() == (date(2024, 1, 1), date(2024, 2, 1))
        assert reloaded.theme() is THEMES["Blue"]

    def test_unknown_key(self, path):
        state = WidgetState(path)
        with pytest.raises(KeyError):
            state.get("colour")
        with pytest.raises(KeyError):
            state.set("colour", "red")

    def test_bad_date_rejected(self, path):
        state = WidgetState(path)
        before = state.get("from")
        with pytest.raises(InvalidDateError):
            state.set("from", "31/12/2024")
        assert state.get("from") == before

    def test_unknown_preset_is_not_stored(self, path):
        state = WidgetState(path)
        state.set("size", "medium")
        assert state.set("size", "huge") is False
        assert state.set("theme", "Orange") is False
        assert state.set("week_start", "friday") is False
        assert state.get("size") == "medium"
        assert load_settings(path)["size"] == "medium"
        assert load_settings(path)["theme"] == state.get("theme")

    def test_week_start(self, path):
        state = WidgetState(path)
        assert state.first_weekday() == calendar.MONDAY
        assert state.set("week_start", "sunday") is True
        assert WidgetState(path).first_weekday() == calendar.SUNDAY


@pytest.mark.parametrize("stored, expected", [
    ("Green", "Green"),
    ("#3683C9", "Blue"),
    ({"MONTH_FILL": "#FF4747", "WEEK_FILL": "#FDC5C5"}, "Red"),
    ("#123456", "Purple"),
    (["Green"], "Purple"),
])
def test_stored_theme_by_name_or_colour(path, stored, expected):
    _write(path, {"theme": stored})
    assert load_settings(path)["theme"] == expected


def test_unhashable_preset_values_are_ignored(path):
    _write(path, {"size": ["large"], "week_start": {"day": "sunday"}})
    settings = load_settings(path)
    assert settings["size"] == "small"
    assert settings["week_start"] == "monday"
