"""Prismata replay archive client.

Replays are stored on the archive as gzipped JSON at
``<archive_url><code><extension>``. The client downloads the payload,
decompresses it and hands the bytes to the decoder.
"""

import gzip
import io
import logging
import zlib
from pathlib import Path
from typing import Optional

import requests

from prismreplay.decoder import decode
from prismreplay.errors import ArchiveError
from prismreplay.models import Replay
from prismreplay.settings import get_settings

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def decompress(raw: bytes) -> bytes:
    """Gunzip an archive payload.

    Payloads that are not gzip (the transport may already have decoded
    them) are returned unchanged.

    Raises:
        ArchiveError: The payload looks like gzip but is corrupt.
    """
    if not raw.startswith(GZIP_MAGIC):
        return raw
    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as e:
        raise ArchiveError(f"corrupt gzip payload: {e}") from e


def load_file(path: Path) -> Replay:
    """Decode a replay saved on disk (.json or .json.gz)."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ArchiveError(f"cannot read replay file {path}: {e}") from e
    logger.debug(f"Read {len(raw)} bytes from {path}")
    return decode(io.BytesIO(decompress(raw)))


class ReplayArchive:
    """Client for the public replay archive."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        extension: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Archive root. Defaults to the ``archive_url`` setting.
            extension: Payload file extension. Defaults to the ``extension`` setting.
            timeout: Request timeout in seconds. Defaults to the ``timeout`` setting.
            session: Optional requests session (connection reuse, testing).
        """
        settings = get_settings()
        base_url = base_url or settings.get("archive_url")
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.extension = extension if extension is not None else settings.get("extension")
        self.timeout = timeout if timeout is not None else float(settings.get("timeout"))
        self._session = session or requests.Session()

    def url_for(self, code: str) -> str:
        """Archive URL of the replay with the given code."""
        return f"{self.base_url}{code}{self.extension}"

    def fetch(self, code: str) -> bytes:
        """Download the raw (still compressed) payload of a replay.

        Raises:
            ArchiveError: Empty code, network failure or non-2xx response.
        """
        if not code:
            raise ArchiveError("replay code must not be empty")

        url = self.url_for(code)
        logger.info(f"Fetching replay {code} from {url}")

        try:
            response = self._session.get(url, headers={"Accept": "gzip"}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ArchiveError(f"failed to fetch replay {code}: {e}") from e

        logger.debug(f"Received {len(response.content)} bytes for {code}")
        return response.content

    def load(self, code: str) -> Replay:
        """Fetch, decompress and decode a replay.

        Raises:
            ArchiveError: The payload could not be fetched or decompressed.
            DecodeError: The payload is not valid replay JSON.
        """
        raw = self.fetch(code)
        return decode(io.BytesIO(decompress(raw)))
