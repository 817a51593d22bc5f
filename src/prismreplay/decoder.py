"""Decode archive replay JSON into ``prismreplay.models``.

Parsing and type checking are done by pydantic against the strict replay
models. Missing keys and ``null`` values fall back to the field default,
unknown keys are ignored, and any error fails the whole decode with a
DecodeError naming the offending path.
"""

import logging
from typing import IO, Any, Union

from pydantic import ValidationError

from prismreplay.errors import DecodeError
from prismreplay.models import Replay

logger = logging.getLogger(__name__)


def _format_loc(loc: tuple[Any, ...]) -> str:
    """Render a pydantic error location as a JSON path, e.g. playerInfo[1].id."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


def _decode_error(e: ValidationError) -> DecodeError:
    err = e.errors()[0]
    if err["type"] == "json_invalid":
        return DecodeError(f"replay payload is not valid JSON: {err['msg']}")
    return DecodeError(f"{err['msg']} at {_format_loc(err['loc'])}")


def decode_bytes(data: Union[bytes, str]) -> Replay:
    """Decode a complete replay payload.

    Args:
        data: Decompressed UTF-8 JSON text, as bytes or str.

    Returns:
        A fully populated Replay.

    Raises:
        DecodeError: The payload is not UTF-8, not JSON, or does not fit the schema.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"replay payload is not valid UTF-8: {e}") from e

    try:
        replay = Replay.model_validate_json(data)
    except ValidationError as e:
        raise _decode_error(e) from e
    except RecursionError as e:
        raise DecodeError("replay payload is nested too deeply") from e

    logger.debug(f"Decoded replay {replay.code or '<no code>'} with {len(replay.players)} players")
    return replay


def decode(stream: IO) -> Replay:
    """Read ``stream`` to the end and decode it into a Replay.

    The stream must already be decompressed. It is not closed.

    Raises:
        DecodeError: The content is not valid replay JSON.
    """
    return decode_bytes(stream.read())
