#lexis\render\sampling.py
"""
Resampling of a single color map channel into evenly spaced samples.
"""

from __future__ import annotations
import numpy as np
from ..types.output_format import OutputFormat

# Anything at or beyond the float32 extremes requests the channel's own extent.
UNBOUNDED = float(np.finfo(np.float32).max)


def is_unbounded_min(value: float) -> bool:
    return value <= -UNBOUNDED


def is_unbounded_max(value: float) -> bool:
    return value >= UNBOUNDED


def resolve_channel_range(
    positions: np.ndarray,
    range_min: float,
    range_max: float,
) -> tuple[float, float]:
    """Replace unbounded range ends by the channel's first/last position."""
    lo = float(positions[0]) if is_unbounded_min(range_min) else float(range_min)
    hi = float(positions[-1]) if is_unbounded_max(range_max) else float(range_max)
    return lo, hi


def interpolate_sorted(
    positions: np.ndarray,
    values: np.ndarray,
    xs: np.ndarray,
) -> np.ndarray:
    """
    Linearly interpolate sorted control points at query positions.

    All ``xs`` must lie inside ``[positions[0], positions[-1]]``. The bracket
    for each x is the last point at or before x and the point after it; when
    several points share a position the last of them is the bracket start,
    so the two bracket positions always differ.

    Args:
        positions: Non-decreasing control point positions (at least 2)
        values: Control point values
        xs: Query positions

    Returns:
        Interpolated values, same shape as ``xs``
    """
    last = len(positions) - 1
    current = np.searchsorted(positions, xs, side="right") - 1
    at_end = current >= last
    current = np.minimum(current, last - 1)
    nxt = current + 1

    x0 = positions[current]
    x1 = positions[nxt]
    span = np.where(at_end, 1.0, x1 - x0)
    weight = np.where(at_end, 1.0, (xs - x0) / span)
    result = values[current] * (1.0 - weight) + values[nxt] * weight
    # x == last position: the last point is the exact answer
    result[at_end] = values[last]
    return result


def sample_channel(
    positions: np.ndarray,
    values: np.ndarray,
    count: int,
    range_min: float,
    range_max: float,
    empty_value,
    output: OutputFormat,
) -> np.ndarray:
    """
    Sample one channel at ``count`` evenly spaced positions.

    Policies, in order:
        - no control points: every sample is ``empty_value``
        - one control point: every sample is that point's value
        - effective range inverted or disjoint from the points: all empty
        - otherwise samples outside the points' span are empty and the rest
          are linearly interpolated

    Args:
        positions: Sorted control point positions
        values: Control point values in the same order
        count: Number of samples, at least 2
        range_min: Start of the sampled range, or an unbounded sentinel
        range_max: End of the sampled range, or an unbounded sentinel
        empty_value: Fill value already in the output type
        output: Output numeric format

    Returns:
        1D array of ``count`` samples with dtype ``output.dtype``
    """
    empty = output.cast_empty(empty_value)
    result = np.full(count, empty, dtype=output.dtype)

    if len(positions) == 0:
        return result

    if len(positions) == 1:
        result[:] = output.convert(values[:1])[0]
        return result

    lo, hi = resolve_channel_range(positions, range_min, range_max)
    first, last = positions[0], positions[-1]
    if hi < lo or hi < first or lo > last:
        return result

    xs = np.linspace(lo, hi, count)
    inside = (xs >= first) & (xs <= last)
    if np.any(inside):
        result[inside] = output.convert(interpolate_sorted(positions, values, xs[inside]))
    return result


__all__ = [
    'UNBOUNDED',
    'is_unbounded_min',
    'is_unbounded_max',
    'resolve_channel_range',
    'interpolate_sorted',
    'sample_channel',
]
