"""Tests for the archive client. HTTP is stubbed, no network access."""

import gzip
from unittest.mock import MagicMock

import pytest
import requests

from prismreplay.archive import ReplayArchive, decompress, load_file
from prismreplay.errors import ArchiveError, DecodeError
from prismreplay.settings import DEFAULTS


def make_session(content: bytes = b"", status: int = 200, exc: Exception = None) -> MagicMock:
    """A requests.Session stand-in returning one canned response."""
    session = MagicMock(spec=requests.Session)
    if exc is not None:
        session.get.side_effect = exc
        return session

    response = MagicMock()
    response.status_code = status
    response.content = content
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Client Error")
    session.get.return_value = response
    return session


class TestDecompress:

    def test_gzip_payload(self):
        assert decompress(gzip.compress(b'{"code": "x"}')) == b'{"code": "x"}'

    def test_plain_payload_unchanged(self):
        assert decompress(b'{"code": "x"}') == b'{"code": "x"}'

    def test_corrupt_gzip(self):
        with pytest.raises(ArchiveError):
            decompress(b"\x1f\x8b\x08\x00corrupt")


class TestReplayArchive:

    def test_defaults_from_settings(self):
        archive = ReplayArchive(session=make_session())
        assert archive.base_url == DEFAULTS["archive_url"]
        assert archive.extension == ".json.gz"
        assert archive.timeout == 30.0
        assert archive.url_for("ib0Qt-pp8PL") == (
            "http://saved-games-alpha.s3-website-us-east-1.amazonaws.com/ib0Qt-pp8PL.json.gz"
        )

    def test_base_url_gets_trailing_slash(self):
        archive = ReplayArchive(base_url="http://example.test/replays", session=make_session())
        assert archive.url_for("abc") == "http://example.test/replays/abc.json.gz"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PRISMREPLAY_ARCHIVE_URL", "http://mirror.test/")
        monkeypatch.setenv("PRISMREPLAY_TIMEOUT", "5")
        archive = ReplayArchive(session=make_session())
        assert archive.url_for("abc") == "http://mirror.test/abc.json.gz"
        assert archive.timeout == 5.0

    def test_load(self, replay1_bytes):
        session = make_session(gzip.compress(replay1_bytes))
        archive = ReplayArchive(base_url="http://example.test/", timeout=2, session=session)

        replay = archive.load("ib0Qt-pp8PL")

        assert replay.code == "ib0Qt-pp8PL"
        assert replay.player_one().display_name == "Alpha"
        session.get.assert_called_once_with(
            "http://example.test/ib0Qt-pp8PL.json.gz",
            headers={"Accept": "gzip"},
            timeout=2,
        )

    def test_load_already_decoded_payload(self, replay1_bytes):
        archive = ReplayArchive(session=make_session(replay1_bytes))
        assert archive.load("ib0Qt-pp8PL").seed == 1766289101

    def test_http_error(self):
        archive = ReplayArchive(session=make_session(status=404))
        with pytest.raises(ArchiveError, match="nope-code"):
            archive.fetch("nope-code")

    def test_network_error(self):
        archive = ReplayArchive(session=make_session(exc=requests.ConnectionError("refused")))
        with pytest.raises(ArchiveError, match="refused"):
            archive.load("abc")

    def test_empty_code(self):
        session = make_session()
        archive = ReplayArchive(session=session)
        with pytest.raises(ArchiveError):
            archive.fetch("")
        session.get.assert_not_called()

    def test_bad_payload(self):
        archive = ReplayArchive(session=make_session(gzip.compress(b"<html>not found</html>")))
        with pytest.raises(DecodeError):
            archive.load("abc")


class TestLoadFile:

    def test_plain_json(self, testdata):
        assert load_file(testdata / "replay2.json").code == "VyrET-IGxyL"

    def test_gzipped_json(self, tmp_path, replay1_bytes):
        path = tmp_path / "ib0Qt-pp8PL.json.gz"
        path.write_bytes(gzip.compress(replay1_bytes))
        assert load_file(path).code == "ib0Qt-pp8PL"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveError):
            load_file(tmp_path / "missing.json")
