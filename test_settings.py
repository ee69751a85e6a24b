"""Settings survive a save/load cycle; bad files fall back to defaults."""

import json

from settings import load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "nope.json"))
    assert settings == {
        "window_width": None,
        "window_height": None,
        "view": "year",
        "show_weekends": True,
    }


def test_round_trip(tmp_path):
    path = str(tmp_path / "settings.json")
    settings = load_settings(path)
    settings.update(window_width=1400, window_height=620, view="month", show_weekends=False)
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(str(path))["view"] == "year"


def test_wrong_types_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "window_width": "wide",
        "window_height": True,
        "view": "week",
        "show_weekends": "yes",
        "unknown": 1,
    }), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings["window_width"] is None
    assert settings["window_height"] is None
    assert settings["view"] == "year"
    assert settings["show_weekends"] is True
    assert "unknown" not in settings
