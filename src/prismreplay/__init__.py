"""prismreplay: fetch and decode Prismata match replays."""

from typing import Optional

from prismreplay.errors import (
    ReplayError,
    DecodeError,
    MissingTimeError,
    MissingPlayerError,
    OutOfRangeError,
    ArchiveError,
)
from prismreplay.models import (
    Replay,
    Deck,
    Unit,
    Player,
    TimeInfo,
    PlayerTime,
    RatingInfo,
    Rating,
    VersionInfo,
    CommandInfo,
    Command,
    Result,
    duration_between,
)
from prismreplay.decoder import decode, decode_bytes
from prismreplay.archive import ReplayArchive, decompress, load_file
from prismreplay.dump import format_summary, dump_replay
from prismreplay.settings import Settings, get_settings, SAMPLE_CODES

__version__ = "0.1.0"


def load_replay(code: str, archive: Optional[ReplayArchive] = None) -> Replay:
    """Fetch and decode one replay from the archive.

    Convenience wrapper around ReplayArchive.load().

    Args:
        code: Replay code, e.g. "ib0Qt-pp8PL".
        archive: Client to use. Defaults to one built from the settings.

    Returns:
        The decoded Replay.

    Example:
        replay = load_replay("ib0Qt-pp8PL")
        print(replay.duration())
    """
    archive = archive or ReplayArchive()
    return archive.load(code)


__all__ = [
    "__version__",
    "ReplayError",
    "DecodeError",
    "MissingTimeError",
    "MissingPlayerError",
    "OutOfRangeError",
    "ArchiveError",
    "Replay",
    "Deck",
    "Unit",
    "Player",
    "TimeInfo",
    "PlayerTime",
    "RatingInfo",
    "Rating",
    "VersionInfo",
    "CommandInfo",
    "Command",
    "Result",
    "duration_between",
    "decode",
    "decode_bytes",
    "ReplayArchive",
    "decompress",
    "load_file",
    "load_replay",
    "format_summary",
    "dump_replay",
    "Settings",
    "get_settings",
    "SAMPLE_CODES",
]
