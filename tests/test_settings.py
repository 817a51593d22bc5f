"""Tests for the persistent settings manager."""

import json

from prismreplay import settings as settings_module
from prismreplay.settings import DEFAULTS, Settings, get_settings


def test_defaults_without_file(tmp_path):
    settings = Settings(tmp_path / "none.json")
    assert settings.get("archive_url") == DEFAULTS["archive_url"]
    assert settings.get("timeout") == 30.0


def test_file_values_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"timeout": 12.5}))
    settings = Settings(path)
    assert settings.get("timeout") == 12.5
    assert settings.get("extension") == ".json.gz"


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert Settings(path).get("timeout") == 30.0


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"archive_url": "http://file.test/"}))
    monkeypatch.setenv("PRISMREPLAY_ARCHIVE_URL", "http://env.test/")
    assert Settings(path).get("archive_url") == "http://env.test/"


def test_invalid_env_timeout_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("PRISMREPLAY_TIMEOUT", "soon")
    assert Settings(tmp_path / "settings.json").get("timeout") == 30.0


def test_get_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"extra": 1}))
    settings = Settings(path)
    assert settings.get("extra") == 1
    assert settings.get("missing", "fallback") == "fallback"
    assert settings.get("log_level") == "INFO"


def test_get_settings_is_shared():
    first = get_settings()
    assert get_settings() is first
    assert settings_module.SETTINGS_FILE.name == "settings.json"
