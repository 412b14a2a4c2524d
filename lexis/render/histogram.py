from __future__ import annotations
import math
from typing import Any, Dict, Sequence, Tuple
import numpy as np

from ..message import Message


class Histogram(Message):
    """
    Histogram of a data range, with uint64 bins.

    A new histogram has no bins, ``min = +inf`` and ``max = -inf``.
    """

    TYPE_NAME = "lexis::render::Histogram"
    TOPIC = "histogram"

    def __init__(
        self,
        bins: Sequence[int] | np.ndarray = (),
        min: float = math.inf,
        max: float = -math.inf,
    ) -> None:
        self.bins = bins
        self.min = float(min)
        self.max = float(max)

    @property
    def bins(self) -> np.ndarray:
        return self._bins

    @bins.setter
    def bins(self, values: Sequence[int] | np.ndarray) -> None:
        values = np.asarray(values)
        if values.size and np.any(values < 0):
            raise ValueError("Histogram bins must be non-negative")
        self._bins = np.array(values, dtype=np.uint64).reshape(-1)

    def __iadd__(self, other: Histogram) -> Histogram:
        """
        Add another histogram's bins to this one.

        If this histogram has no bins, it becomes a copy of ``other``.

        Raises:
            ValueError: If both have bins and the bin counts differ.
        """
        if other.bins.size == 0:
            return self
        if self.bins.size == 0:
            self._bins = other.bins.copy()
            self.min = other.min
            self.max = other.max
            return self
        if other.bins.size != self.bins.size:
            raise ValueError("Addition of incompatible histograms")

        self._bins += other.bins
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)
        return self

    def __add__(self, other: Histogram) -> Histogram:
        result = self.copy()
        result += other
        return result

    def copy(self) -> Histogram:
        return Histogram(self.bins.copy(), self.min, self.max)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Histogram):
            return NotImplemented
        if self is other:
            return True
        return (
            self.min == other.min
            and self.max == other.max
            and np.array_equal(self.bins, other.bins)
        )

    __hash__ = None

    def min_index(self) -> int:
        """Index of the smallest bin (first one on ties)."""
        return int(np.argmin(self.bins))

    def max_index(self) -> int:
        """Index of the largest bin (first one on ties)."""
        return int(np.argmax(self.bins))

    def is_empty(self) -> bool:
        return not np.any(self.bins)

    def sum(self) -> int:
        return int(self.bins.sum(dtype=np.uint64))

    def range(self) -> Tuple[float, float]:
        return self.min, self.max

    def ratio(self, index: int) -> float:
        """Share of the total held by bin ``index``; 0.0 if out of range or empty."""
        if index < 0 or index >= self.bins.size:
            return 0.0
        total = self.sum()
        if total == 0:
            return 0.0
        return float(self.bins[index]) / float(total)

    def resize(self, size: int) -> None:
        """Set the number of bins to ``size``, keeping existing counts; new bins are 0."""
        bins = np.zeros(int(size), dtype=np.uint64)
        kept = min(bins.size, self._bins.size)
        bins[:kept] = self._bins[:kept]
        self._bins = bins

    def sample_curve(self, log_scale: bool = False, range: Tuple[float, float] = (0.0, 1.0)) -> np.ndarray:
        """
        Sample the histogram as a curve for display.

        Heights are normalized by the largest bin (or its log) and flipped so
        that the largest bin maps to 0.

        Args:
            log_scale: Use log heights; bins with fewer than 2 entries map to 1
            range: Normalized (start, end) sub-range of bins to sample

        Returns:
            Array of (x, y) points, shape (N, 2); empty if the histogram is.
        """
        if self.is_empty():
            return np.empty((0, 2), dtype=np.float32)

        bins = self.bins.astype(np.float64)
        height_max = bins[self.max_index()]
        norm = math.log(height_max) if log_scale else height_max
        scale = 1.0 / norm if norm > 0 else 0.0

        size = self.bins.size
        offset = int(math.floor(size * range[0]))
        count = int(math.ceil(size * (range[1] - range[0])))
        count = max(0, min(count, size - offset))

        values = bins[offset:offset + count]
        if log_scale:
            values = np.log(np.maximum(values, 1.0))
        xs = np.arange(count, dtype=np.float64) / count if count else np.empty(0)
        ys = 1.0 - scale * values
        return np.column_stack((xs, ys)).astype(np.float32)

    def to_dict(self) -> Dict[str, Any]:
        return {"bins": [int(b) for b in self.bins], "min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Histogram:
        return cls(data.get("bins", []), data.get("min", math.inf), data.get("max", -math.inf))
