"""Human-readable rendering of decoded replays."""

import pprint

from prismreplay.errors import MissingPlayerError, MissingTimeError, OutOfRangeError
from prismreplay.models import Player, Replay, Result


def _player_line(player: Player) -> str:
    name = player.display_name or player.name or "<unnamed>"
    if player.is_bot:
        return f"{name} (bot: {player.bot})"
    return name


def format_summary(replay: Replay) -> str:
    """One block of text describing a replay.

    Missing data is shown inline instead of raising, so a partially
    recorded replay can still be inspected.
    """
    lines = [f"Replay {replay.code or '<no code>'}"]

    for label, accessor in (("Player 1", replay.player_one), ("Player 2", replay.player_two)):
        try:
            lines.append(f"  {label}: {_player_line(accessor())}")
        except MissingPlayerError:
            lines.append(f"  {label}: <missing>")

    lines.append(f"  Result: {Result.label(replay.result)}")

    try:
        start = replay.start_time()
        lines.append(f"  Started: {start.isoformat()}")
        lines.append(f"  Duration: {replay.duration()}")
    except MissingTimeError as e:
        lines.append(f"  Duration: <{e}>")

    lines.append(f"  Deck: {replay.deck.name or '<unnamed>'} ({len(replay.deck.merged_deck)} units)")

    try:
        advanced = replay.advanced_set()
        lines.append(f"  Advanced set: {', '.join(advanced) if advanced else '<empty>'}")
    except OutOfRangeError:
        lines.append("  Advanced set: <empty>")

    return "\n".join(lines)


def dump_replay(replay: Replay) -> str:
    """Full structure of a replay, pretty-printed."""
    return pprint.pformat(replay.model_dump(), sort_dicts=False)
