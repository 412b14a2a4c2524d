"""
Control Points
==============

Per-channel knots of a piecewise-linear color map channel.

A ControlPointSet keeps its points in insertion order and sorts them lazily:
adding or removing a point marks the set dirty, and ``ensure_sorted()`` must
run before anything that depends on order. Every read accessor of this
module calls it explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union
import numpy as np


@dataclass
class ControlPoint:
    """A (position, value) knot. Serialized as ``{"x": position, "y": value}``."""
    position: float
    value: float

    def to_dict(self) -> dict:
        return {"x": self.position, "y": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> ControlPoint:
        return cls(float(data["x"]), float(data["y"]))


ControlPointLike = Union[ControlPoint, Tuple[float, float]]


def as_control_point(point: ControlPointLike) -> ControlPoint:
    if isinstance(point, ControlPoint):
        return ControlPoint(point.position, point.value)
    position, value = point
    return ControlPoint(float(position), float(value))


class ControlPointSet:
    """
    Ordered, mutable collection of control points for one channel.

    Two points never share a position when added through ``add``: a point
    whose position equals an existing one overwrites that point's value.
    """

    __slots__ = ('_points', '_dirty')

    def __init__(self, points: Iterable[ControlPointLike] = ()) -> None:
        self._points: List[ControlPoint] = []
        self._dirty = False
        for point in points:
            cp = as_control_point(point)
            self.add(cp.position, cp.value)

    @property
    def is_dirty(self) -> bool:
        """True if the set changed since the last sort."""
        return self._dirty

    def add(self, position: float, value: float) -> bool:
        """
        Insert a point, or replace the value of the point at the same position.

        Replacing does not change the order, so the set is not marked dirty.

        Returns:
            True if a new point was appended, False if a value was replaced.
        """
        position = float(position)
        value = float(value)
        for cp in self._points:
            if cp.position == position:
                cp.value = value
                return False
        self._points.append(ControlPoint(position, value))
        self._dirty = True
        return True

    def remove(self, position: float) -> bool:
        """
        Remove the first point at ``position`` in current internal order.

        Returns:
            True if a point was removed.
        """
        position = float(position)
        for i, cp in enumerate(self._points):
            if cp.position == position:
                del self._points[i]
                self._dirty = True
                return True
        return False

    def clear(self) -> None:
        self._points.clear()
        self._dirty = False

    def ensure_sorted(self) -> None:
        """Sort by position if dirty. The sort is stable, so among equal
        positions the last written point stays last."""
        if not self._dirty:
            return
        self._points.sort(key=lambda cp: cp.position)
        self._dirty = False

    def points(self) -> List[ControlPoint]:
        """Sorted copies of the control points."""
        self.ensure_sorted()
        return [ControlPoint(cp.position, cp.value) for cp in self._points]

    def positions(self) -> np.ndarray:
        self.ensure_sorted()
        return np.array([cp.position for cp in self._points], dtype=np.float64)

    def values(self) -> np.ndarray:
        self.ensure_sorted()
        return np.array([cp.value for cp in self._points], dtype=np.float64)

    def copy(self) -> ControlPointSet:
        """Deep copy. The copy always starts dirty."""
        other = ControlPointSet()
        other._points = [ControlPoint(cp.position, cp.value) for cp in self._points]
        other._dirty = True
        return other

    def __len__(self) -> int:
        return len(self._points)

    def __bool__(self) -> bool:
        return bool(self._points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return iter(self.points())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ControlPointSet):
            return NotImplemented
        return self.points() == other.points()

    def __repr__(self) -> str:
        pts = ", ".join(f"({cp.position}, {cp.value})" for cp in self.points())
        return f"ControlPointSet([{pts}])"
