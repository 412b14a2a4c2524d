"""
Color Map Module
================

A 4 channel (red, green, blue, alpha), 1 dimensional color map defined by
per-channel control points, and its resampling into evenly spaced colors.

Features
--------
- Independent control point sets per channel
- Insert-or-replace by position, remove by position
- Sampling into a list of colors, a (count, 4) array or a flat RGBARGBA... buffer
- Integer outputs (uint8, uint16, ...) scaled from normalized values
- Per-channel auto range when sampling "the whole map"

Examples
--------
>>> cmap = ColorMap()
>>> cmap.add_control_point(1.0, 0.0, Channel.RED)
>>> cmap.add_control_point(5.0, 1.0, Channel.RED)
>>> colors = cmap.sample_colors(5, 1.0, 5.0)
>>> [float(c.r) for c in colors]
[0.0, 0.25, 0.5, 0.75, 1.0]
"""

from __future__ import annotations
import logging
from enum import IntEnum
from typing import Any, Dict, Iterable, List, NamedTuple, Tuple, Union
import numpy as np

from ..message import Message, DecodeError
from ..types.output_format import DTypeLike, DEFAULT_OUTPUT_DTYPE, resolve_output_format
from .control_points import ControlPoint, ControlPointLike, ControlPointSet, as_control_point
from .sampling import sample_channel

logger = logging.getLogger(__name__)

NUM_CHANNELS = 4


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    ALPHA = 3


ChannelLike = Union[Channel, int, str]

CHANNEL_NAMES = {
    Channel.RED: "red",
    Channel.GREEN: "green",
    Channel.BLUE: "blue",
    Channel.ALPHA: "alpha",
}


def resolve_channel(channel: ChannelLike) -> Channel:
    """
    Map a channel selector to a Channel.

    Raises:
        ValueError: If the selector names no channel.
    """
    if isinstance(channel, Channel):
        return channel
    if isinstance(channel, str):
        try:
            return Channel[channel.upper()]
        except KeyError:
            raise ValueError(f"Unsupported channel: {channel!r}") from None
    if isinstance(channel, (int, np.integer)) and not isinstance(channel, bool):
        try:
            return Channel(int(channel))
        except ValueError:
            raise ValueError(f"Unsupported channel: {channel!r}") from None
    raise ValueError(f"Unsupported channel: {channel!r}")


class Color(NamedTuple):
    r: Any
    g: Any
    b: Any
    a: Any


# (fraction of [min, max], value) per channel
DEFAULT_CONTROL_POINTS: Dict[Channel, Tuple[Tuple[float, float], ...]] = {
    Channel.RED: ((0.0, 0.0), (0.5, 1.0), (1.0, 1.0)),
    Channel.GREEN: ((0.0, 0.0), (0.5, 0.5), (1.0, 1.0)),
    Channel.BLUE: ((0.0, 0.0), (0.5, 0.0), (1.0, 1.0)),
    Channel.ALPHA: ((0.0, 0.0), (0.5, 0.1), (1.0, 1.0)),
}


def _check_count(count: int) -> int:
    count = int(count)
    if count < 2:
        raise ValueError(f"Sampling needs at least 2 samples, got {count}")
    return count


class ColorMap(Message):
    """
    4 channel, 1 dimensional color map defined with control points.

    Each channel is an independent piecewise-linear function. Mutations only
    mark channels dirty; sampling sorts them first through ``ensure_sorted``.
    Instances are not safe for concurrent use; use ``copy()`` per thread.
    """

    TYPE_NAME = "lexis::render::ColorMap"
    TOPIC = "color_map"

    __slots__ = ('_channels',)

    def __init__(
        self,
        red: Iterable[ControlPointLike] = (),
        green: Iterable[ControlPointLike] = (),
        blue: Iterable[ControlPointLike] = (),
        alpha: Iterable[ControlPointLike] = (),
    ) -> None:
        self._channels: List[ControlPointSet] = [
            ControlPointSet(red),
            ControlPointSet(green),
            ControlPointSet(blue),
            ControlPointSet(alpha),
        ]

    @classmethod
    def default(cls, min: float = 0.0, max: float = 1.0) -> ColorMap:
        """
        The default color map, with the control points of DEFAULT_CONTROL_POINTS
        scaled into ``[min, max]``.
        """
        cmap = cls()
        span = max - min
        for channel, points in DEFAULT_CONTROL_POINTS.items():
            for fraction, value in points:
                cmap.add_control_point(min + fraction * span, value, channel)
        return cmap

    # ------------------ CONTROL POINTS ------------------
    def _get_control_points(self, channel: ChannelLike) -> ControlPointSet:
        return self._channels[resolve_channel(channel)]

    def add_control_point(self, position: float, value: float, channel: ChannelLike) -> None:
        """
        Add a control point to a channel. If the channel already has a point at
        ``position``, its value is replaced.
        """
        self._get_control_points(channel).add(position, value)

    def add_control_points(self, points: Iterable[ControlPointLike], channel: ChannelLike) -> None:
        cps = self._get_control_points(channel)
        for point in points:
            cp = as_control_point(point)
            cps.add(cp.position, cp.value)

    def remove_control_point(self, position: float, channel: ChannelLike) -> bool:
        """Remove the control point at ``position``; returns False if there was none."""
        return self._get_control_points(channel).remove(position)

    def get_control_points(self, channel: ChannelLike) -> List[ControlPoint]:
        """Sorted copies of a channel's control points."""
        return self._get_control_points(channel).points()

    def channel(self, channel: ChannelLike) -> ControlPointSet:
        return self._get_control_points(channel)

    def is_empty(self) -> bool:
        """True if no channel has control points."""
        return all(len(cps) == 0 for cps in self._channels)

    @property
    def is_sorted(self) -> bool:
        return not any(cps.is_dirty for cps in self._channels)

    def ensure_sorted(self) -> None:
        """Sort every dirty channel. Called at the start of each sampling."""
        for cps in self._channels:
            cps.ensure_sorted()

    # ------------------ SAMPLING ------------------
    def sample_array(
        self,
        count: int,
        range_min: float = -np.inf,
        range_max: float = np.inf,
        empty_value=0,
        dtype: DTypeLike = DEFAULT_OUTPUT_DTYPE,
    ) -> np.ndarray:
        """
        Sample ``count`` colors evenly spaced over ``[range_min, range_max]``.

        Args:
            count: Number of samples, at least 2
            range_min: Start of the range; -inf samples from each channel's
                first control point
            range_max: End of the range; +inf samples up to each channel's
                last control point
            empty_value: Channel value for samples outside a channel's control
                points, and for channels without control points. Given in the
                output type, never rescaled.
            dtype: Output type. Integer types scale normalized values by the
                type's maximum.

        Returns:
            Array of shape (count, 4) in RGBA order.
        """
        count = _check_count(count)
        output = resolve_output_format(dtype)
        self.ensure_sorted()

        result = np.empty((count, NUM_CHANNELS), dtype=output.dtype)
        for channel, cps in enumerate(self._channels):
            result[:, channel] = sample_channel(
                cps.positions(),
                cps.values(),
                count,
                range_min,
                range_max,
                empty_value,
                output,
            )
        return result

    def sample_colors(
        self,
        count: int,
        range_min: float = -np.inf,
        range_max: float = np.inf,
        empty_value=0,
        dtype: DTypeLike = DEFAULT_OUTPUT_DTYPE,
    ) -> List[Color]:
        """
        Sample colors linearly over the given range.

        Same arguments as ``sample_array``. If a channel has no control points
        its samples are ``empty_value``; if it has exactly one, every sample
        has that point's value.

        Returns:
            List of ``count`` Color tuples.
        """
        return [Color(*row) for row in self.sample_array(count, range_min, range_max, empty_value, dtype)]

    def sample_colors_into(
        self,
        buffer: np.ndarray,
        count: int,
        range_min: float = -np.inf,
        range_max: float = np.inf,
        empty_value=0,
    ) -> np.ndarray:
        """
        Fill ``buffer`` with colors in RGBARGBA... form.

        The output type is the buffer's dtype.

        Args:
            buffer: Writable 1D numpy array with at least ``4 * count`` elements
            count: Number of samples, at least 2

        Returns:
            The filled ``buffer``.

        Raises:
            ValueError: If the buffer is not 1D or too small.
        """
        count = _check_count(count)
        if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
            raise ValueError("sample_colors_into expects a flat (1D) numpy buffer")
        if buffer.shape[0] < NUM_CHANNELS * count:
            raise ValueError(
                f"Buffer holds {buffer.shape[0]} elements, {NUM_CHANNELS * count} needed"
            )
        samples = self.sample_array(count, range_min, range_max, empty_value, buffer.dtype)
        buffer[: NUM_CHANNELS * count] = samples.reshape(-1)
        return buffer

    # ------------------ COPY / COMPARE ------------------
    def copy(self) -> ColorMap:
        """Deep copy; the copy owns its control points and starts unsorted."""
        other = ColorMap.__new__(ColorMap)
        other._channels = [cps.copy() for cps in self._channels]
        return other

    def __copy__(self) -> ColorMap:
        return self.copy()

    def __deepcopy__(self, memo) -> ColorMap:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMap):
            return NotImplemented
        return all(a == b for a, b in zip(self._channels, other._channels))

    __hash__ = None

    def __repr__(self) -> str:
        sizes = ", ".join(f"{CHANNEL_NAMES[Channel(i)]}={len(cps)}" for i, cps in enumerate(self._channels))
        return f"ColorMap({sizes})"

    # ------------------ SERIALIZATION ------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            CHANNEL_NAMES[Channel(i)]: [cp.to_dict() for cp in cps.points()]
            for i, cps in enumerate(self._channels)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColorMap:
        """
        Build a color map from ``{"red": [{"x":..,"y":..}, ...], ...}``.

        Missing channels stay empty. Points go through ``add_control_point``,
        so a repeated ``x`` keeps the last ``y``.
        """
        unknown = set(data) - set(CHANNEL_NAMES.values())
        if unknown:
            raise DecodeError(f"Unknown color map channels: {sorted(unknown)}")
        cmap = cls()
        for channel, name in CHANNEL_NAMES.items():
            points = data.get(name, [])
            if not isinstance(points, list):
                raise DecodeError(f"Channel {name!r} must be a list of control points")
            for point in points:
                cp = ControlPoint.from_dict(point)
                cmap.add_control_point(cp.position, cp.value, channel)
        logger.debug("Decoded %r", cmap)
        return cmap


def get_default_color_map(min: float = 0.0, max: float = 1.0) -> ColorMap:
    return ColorMap.default(min, max)


def get_texture_sample_range(count: int) -> Tuple[float, float]:
    """
    Range for 1D texture sampling.

    Args:
        count: Number of texels

    Returns:
        (begin, end): the centers of the first and last texel.
    """
    diff = 1.0 / (_check_count(count) - 1)
    return diff, 1.0 - diff


__all__ = [
    'Channel',
    'Color',
    'ColorMap',
    'NUM_CHANNELS',
    'DEFAULT_CONTROL_POINTS',
    'resolve_channel',
    'get_default_color_map',
    'get_texture_sample_range',
]
