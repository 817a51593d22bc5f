"""Shared fixtures: replay payloads and an isolated settings file."""

from pathlib import Path

import pytest

from prismreplay import settings as settings_module

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from ~/.prismreplay and the real environment."""
    monkeypatch.setattr(settings_module, "SETTINGS_FILE", tmp_path / "settings.json")
    monkeypatch.setattr(settings_module, "_settings", None)
    monkeypatch.delenv("PRISMREPLAY_ARCHIVE_URL", raising=False)
    monkeypatch.delenv("PRISMREPLAY_TIMEOUT", raising=False)
    yield


@pytest.fixture
def testdata() -> Path:
    return TESTDATA


@pytest.fixture
def replay1_bytes() -> bytes:
    return (TESTDATA / "replay1.json").read_bytes()
