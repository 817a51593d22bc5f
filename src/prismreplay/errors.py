"""Exception types raised while loading and reading replays."""


class ReplayError(Exception):
    """Base class for every error raised by prismreplay."""


class DecodeError(ReplayError, ValueError):
    """Payload is not valid JSON or does not fit the replay schema."""


class MissingTimeError(ReplayError):
    """Start or end time was not recorded (zero) or is invalid (negative)."""


class MissingPlayerError(ReplayError, LookupError):
    """The requested seat has no player entry."""


class OutOfRangeError(ReplayError, IndexError):
    """Index-style access beyond the decoded data (e.g. empty randomizer)."""


class ArchiveError(ReplayError):
    """Fetching or decompressing a replay from the archive failed."""
