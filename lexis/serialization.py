"""Message envelopes and color map files."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Tuple, Union

from .config import DEFAULT_RANGE
from .data.events import CellSetBinaryOp, SelectedIDs, ToggleIDRequest
from .data.progress import Progress
from .message import DecodeError, Message, build_registry, decode_json
from .render.clip_planes import ClipPlanes
from .render.color_map import Channel, ColorMap
from .render.histogram import Histogram
from .render.image_jpeg import ImageJPEG

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

message_registry = build_registry(
    ColorMap,
    Histogram,
    ClipPlanes,
    ImageJPEG,
    Progress,
    ToggleIDRequest,
    SelectedIDs,
    CellSetBinaryOp,
)


# ------------------ ENVELOPES ------------------
def encode_envelope(message: Message) -> str:
    """Encode a message as one line of JSON: ``{"type": ..., "payload": ...}``."""
    return json.dumps({"type": message.TYPE_NAME, "payload": message.to_dict()})


def decode_envelope(line: str | bytes) -> Message:
    """
    Decode a line written by ``encode_envelope``.

    Raises:
        DecodeError: If the line is not a well formed envelope of a known type.
    """
    data = decode_json(line)
    if not isinstance(data, dict) or "type" not in data or "payload" not in data:
        raise DecodeError("Envelope must be an object with 'type' and 'payload'")
    cls = message_registry.get(data["type"])
    if cls is None:
        raise DecodeError(f"Unknown message type: {data['type']}")
    if not isinstance(data["payload"], dict):
        raise DecodeError(f"Payload of {data['type']} must be an object")
    try:
        return cls.from_dict(data["payload"])
    except DecodeError:
        raise
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise DecodeError(f"Malformed {data['type']} payload: {e}") from e


# ------------------ COLOR MAP FILES ------------------
class ColorMapFallback(str, Enum):
    """What ``load_color_map`` does when the file is missing or unreadable."""
    RAISE = "raise"
    DEFAULT = "default"


def _parse_1dt(text: str, value_range: Tuple[float, float]) -> ColorMap:
    """
    Parse a ``.1dt`` transfer function: a count N followed by N lines of
    ``r g b a`` floats, placed evenly over ``value_range``.
    """
    lines = [line.split() for line in text.splitlines() if line.strip()]
    if not lines:
        raise DecodeError("Empty 1dt file")
    try:
        count = int(lines[0][0])
        rows = [[float(v) for v in row] for row in lines[1:count + 1]]
    except (ValueError, IndexError) as e:
        raise DecodeError(f"Malformed 1dt file: {e}") from e
    if len(rows) != count or any(len(row) != 4 for row in rows):
        raise DecodeError(f"1dt file announces {count} RGBA rows, got {len(rows)}")

    lo, hi = value_range
    cmap = ColorMap()
    for i, row in enumerate(rows):
        position = lo + (hi - lo) * (i / (count - 1) if count > 1 else 0.0)
        for channel, value in zip(Channel, row):
            cmap.add_control_point(position, value, channel)
    return cmap


def load_color_map(
    path: PathLike,
    fallback: ColorMapFallback = ColorMapFallback.RAISE,
    value_range: Tuple[float, float] = DEFAULT_RANGE,
) -> ColorMap:
    """
    Load a color map from a ``.json`` or ``.1dt`` file.

    Args:
        path: File to load
        fallback: RAISE propagates errors; DEFAULT logs a warning and returns
            ``ColorMap.default(*value_range)``
        value_range: Range of the default map, and of the positions of
            ``.1dt`` entries

    Raises:
        FileNotFoundError: Missing file, with ``fallback=RAISE``
        DecodeError: Unparseable file, with ``fallback=RAISE``
    """
    path = Path(path)
    try:
        text = path.read_text()
        if path.suffix.lower() == ".1dt":
            cmap = _parse_1dt(text, value_range)
        else:
            cmap = ColorMap.from_json(text)
    except (OSError, DecodeError) as e:
        if ColorMapFallback(fallback) is ColorMapFallback.RAISE:
            raise
        logger.warning("Cannot load color map %s (%s), using the default color map", path, e)
        return ColorMap.default(*value_range)

    logger.debug("Loaded %r from %s", cmap, path)
    return cmap


def save_color_map(color_map: ColorMap, path: PathLike) -> None:
    """Write a color map as a JSON document."""
    Path(path).write_text(color_map.to_json(indent=2))
