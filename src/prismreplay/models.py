"""Prismata replay data model.

Each pydantic model mirrors one object of the archive's replay JSON; field
aliases carry the archive's JSON keys. Scalar fields are strict (no coercion
other than int to float, no NaN or infinity), models are frozen, and ``null``
values are dropped so they fall back to the field default.

Replays hold lists, so models are not hashable.
"""

from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)

from prismreplay.errors import MissingPlayerError, MissingTimeError, OutOfRangeError


class Result(IntEnum):
    """Outcome of a match as stored in the ``result`` code."""
    P1 = 0
    P2 = 1
    DRAW = 2

    @classmethod
    def from_code(cls, code: int) -> Optional["Result"]:
        """Return the member for ``code``, or None when the code is not recognized."""
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def label(cls, code: int) -> str:
        """Render a result code; unrecognized codes render as "Unknown"."""
        result = cls.from_code(code)
        if result is None:
            return "Unknown"
        return "Draw" if result is cls.DRAW else result.name


class ReplayModel(BaseModel):
    """Base for every replay record."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,  # construct by attribute name as well as JSON key
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def __hash__(self) -> int:
        raise TypeError(f"unhashable type: '{type(self).__name__}'")


class Unit(ReplayModel):
    """A single deployable unit definition."""
    name: StrictStr = ""
    ui_name: StrictStr = Field("", alias="UIName")
    base_set: StrictInt = Field(0, alias="baseSet")


class Deck(ReplayModel):
    """Unit pool used in a match."""
    merged_deck: list[Unit] = Field(default_factory=list, alias="mergedDeck")
    # Semi-structured base set table, kept as decoded
    base: list[list[Any]] = Field(default_factory=list)
    name: StrictStr = Field("", alias="deckName")
    # One list of unit names per randomizer tier, in draw order
    randomizer: list[list[StrictStr]] = Field(default_factory=list)

    def advanced_set(self) -> list[str]:
        """Return the advanced units of the match (first randomizer tier).

        Raises:
            OutOfRangeError: The randomizer table is empty.
        """
        if not self.randomizer:
            raise OutOfRangeError("randomizer table is empty, no advanced set")
        return self.randomizer[0]


class Player(ReplayModel):
    """A participant seated in the match."""
    name: StrictStr = ""
    display_name: StrictStr = Field("", alias="displayName")
    id: StrictInt = 0
    bot: StrictStr = ""  # empty for humans
    avatar_frame: StrictStr = Field("", alias="avatarFrame")
    portrait: StrictStr = ""
    trophies: list[StrictStr] = Field(default_factory=list)
    loading_completed: StrictBool = Field(False, alias="loadingCompleted")
    percent_loaded: StrictFloat = Field(0.0, alias="percentLoaded")  # 0.0-1.0

    @property
    def is_bot(self) -> bool:
        return bool(self.bot)


class PlayerTime(ReplayModel):
    """Clock configuration for one seat."""
    bank_dilution: StrictFloat = Field(0.0, alias="bankDilution")
    initial: StrictInt = 0
    bank: StrictInt = 0
    increment: StrictInt = 0


class TimeInfo(ReplayModel):
    """Time controls of the match."""
    correspondence: StrictBool = False
    player_current_time_banks: list[StrictFloat] = Field(default_factory=list, alias="playerCurrentTimeBanks")
    player_time: list[PlayerTime] = Field(default_factory=list, alias="playerTime")
    grace_period: StrictInt = Field(0, alias="gracePeriod")
    player_current_times: list[StrictInt] = Field(default_factory=list, alias="playerCurrentTimes")
    turn_number: StrictInt = Field(0, alias="turnNumber")
    grace_current_time: StrictInt = Field(0, alias="graceCurrentTime")
    use_clocks: StrictBool = Field(False, alias="useClocks")


class Rating(ReplayModel):
    """Rating snapshot of one player, before or after the match."""
    display_rating: StrictFloat = Field(0.0, alias="displayRating")
    win_last_last: StrictBool = Field(False, alias="winLastLast")
    dominion_elo: StrictInt = Field(0, alias="dominionELO")
    win_last: StrictBool = Field(False, alias="winLast")
    peak_adjusted_shalev_u: StrictFloat = Field(0.0, alias="peakAdjustedShalevU")
    shalev_v: StrictFloat = Field(0.0, alias="shalevV")
    shalev_u: StrictFloat = Field(0.0, alias="shalevU")
    tier: StrictInt = 0
    custom_games_played: StrictInt = Field(0, alias="customGamesPlayed")
    tier_percent: StrictFloat = Field(0.0, alias="tierPercent")
    casual_games_won: StrictInt = Field(0, alias="casualGamesWon")
    h_stars: StrictInt = Field(0, alias="hStars")
    version: StrictInt = 0
    exp: StrictInt = 0
    rated_games_played: StrictInt = Field(0, alias="ratedGamesPlayed")
    bot_games_played: StrictInt = Field(0, alias="botGamesPlayed")


class RatingInfo(ReplayModel):
    """Ratings per seat plus rating and score deltas indexed by seat."""
    initial_ratings: list[Rating] = Field(default_factory=list, alias="initialRatings")
    final_ratings: list[Rating] = Field(default_factory=list, alias="finalRatings")
    rating_changes: list[list[StrictFloat]] = Field(default_factory=list, alias="ratingChanges")
    score_changes: list[StrictInt] = Field(default_factory=list, alias="scoreChanges")


class VersionInfo(ReplayModel):
    server_version: StrictInt = Field(0, alias="serverVersion")
    player_versions: list[StrictStr] = Field(default_factory=list, alias="playerVersions")


class Command(ReplayModel):
    """One command issued by a player. Parameters are kept as decoded."""
    type: StrictStr = Field("", alias="_type")
    id: StrictInt = Field(0, alias="_id")
    params: Any = Field(None, alias="_params")


class CommandInfo(ReplayModel):
    """Command log of the match (several commands per turn)."""
    command_list: list[Command] = Field(default_factory=list, alias="commandList")
    command_times: list[StrictFloat] = Field(default_factory=list, alias="commandTimes")
    command_forced: list[StrictBool] = Field(default_factory=list, alias="commandForced")
    times_remaining: list[StrictInt] = Field(default_factory=list, alias="timesRemaining")
    time_banks_remaining: list[StrictFloat] = Field(default_factory=list, alias="timeBanksRemaining")
    move_durations: list[StrictFloat] = Field(default_factory=list, alias="moveDurations")
    clicks_per_turn: list[StrictInt] = Field(default_factory=list, alias="clicksPerTurn")


def duration_between(a: datetime, b: datetime) -> timedelta:
    """Elapsed time between two instants, never negative."""
    if b < a:
        a, b = b, a
    return b - a


def _unix_to_datetime(value: float, what: str) -> datetime:
    if value <= 0:
        raise MissingTimeError(f"missing {what} time")
    # Only whole seconds are significant
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MissingTimeError(f"invalid {what} time {value!r}: {e}") from e


class Replay(ReplayModel):
    """Recorded data of one finished Prismata match."""
    code: StrictStr = ""
    start_time_unix: StrictFloat = Field(0.0, alias="startTime")
    end_time_unix: StrictFloat = Field(0.0, alias="endTime")
    deck: Deck = Field(default_factory=Deck, alias="deckInfo")
    # Older archive payloads call the player list "players"
    players: list[Player] = Field(
        default_factory=list,
        validation_alias=AliasChoices("playerInfo", "players"),
    )
    command_info: CommandInfo = Field(default_factory=CommandInfo, alias="commandInfo")
    time_info: TimeInfo = Field(default_factory=TimeInfo, alias="timeInfo")
    rating_info: RatingInfo = Field(default_factory=RatingInfo, alias="ratingInfo")
    result: StrictInt = 0  # see Result
    version_info: VersionInfo = Field(default_factory=VersionInfo, alias="versionInfo")
    seed: StrictInt = 0
    end_condition: StrictInt = Field(0, alias="endCondition")
    format: StrictInt = 0
    raw_hash: StrictInt = Field(0, alias="rawHash")

    @property
    def outcome(self) -> Optional[Result]:
        """The match result, or None for an unrecognized result code."""
        return Result.from_code(self.result)

    def start_time(self) -> datetime:
        """Time at which the match began, truncated to whole seconds (UTC).

        Raises:
            MissingTimeError: The start time was not recorded or is out of range.
        """
        return _unix_to_datetime(self.start_time_unix, "start")

    def end_time(self) -> datetime:
        """Time at which the match ended, truncated to whole seconds (UTC).

        Raises:
            MissingTimeError: The end time was not recorded or is out of range.
        """
        return _unix_to_datetime(self.end_time_unix, "end")

    def duration(self) -> timedelta:
        """Elapsed match time.

        Raises:
            MissingTimeError: Start or end time was not recorded.
        """
        start = self.start_time()
        end = self.end_time()
        return duration_between(start, end)

    def player_one(self) -> Player:
        """Player in seat one.

        Raises:
            MissingPlayerError: No player entries were recorded.
        """
        if len(self.players) < 1:
            raise MissingPlayerError("missing player one info")
        return self.players[0]

    def player_two(self) -> Player:
        """Player in seat two.

        Raises:
            MissingPlayerError: Fewer than two player entries were recorded.
        """
        if len(self.players) < 2:
            raise MissingPlayerError("missing player two info")
        return self.players[1]

    def advanced_set(self) -> list[str]:
        """Shortcut for ``self.deck.advanced_set()``."""
        return self.deck.advanced_set()
