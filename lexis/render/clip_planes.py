from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence
import numpy as np

from ..message import Message


@dataclass
class Plane:
    """Plane ``normal . p + d = 0``; points with a negative distance are in front of it."""
    normal: np.ndarray
    d: float

    def __post_init__(self):
        self.normal = np.asarray(self.normal, dtype=np.float64).reshape(3)
        self.d = float(self.d)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plane):
            return NotImplemented
        return np.array_equal(self.normal, other.normal) and self.d == other.d

    def to_dict(self) -> Dict[str, Any]:
        return {"normal": [float(v) for v in self.normal], "d": self.d}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Plane:
        return cls(data["normal"], data["d"])


@dataclass(eq=False)
class AABB:
    """Axis aligned bounding box."""
    min_corner: np.ndarray
    max_corner: np.ndarray
    center: np.ndarray = field(init=False, repr=False)
    half_size: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.min_corner = np.asarray(self.min_corner, dtype=np.float64).reshape(3)
        self.max_corner = np.asarray(self.max_corner, dtype=np.float64).reshape(3)
        self.center = (self.min_corner + self.max_corner) * 0.5
        self.half_size = (self.max_corner - self.min_corner) * 0.5

    def is_in_front(self, plane: Plane) -> bool:
        """True if the whole box lies on the negative side of ``plane``."""
        distance = float(np.dot(plane.normal, self.center)) + plane.d
        extent = float(np.dot(self.half_size, np.abs(plane.normal)))
        return distance + extent <= 0.0 and distance - extent < 0.0


# +X, -X, +Y, -Y, +Z, -Z: the unit cube centered on the origin
DEFAULT_PLANES = (
    ((-1.0, 0.0, 0.0), 0.5),
    ((1.0, 0.0, 0.0), 0.5),
    ((0.0, -1.0, 0.0), 0.5),
    ((0.0, 1.0, 0.0), 0.5),
    ((0.0, 0.0, -1.0), 0.5),
    ((0.0, 0.0, 1.0), 0.5),
)


class ClipPlanes(Message):
    """
    Set of clipping planes.

    The default planes bound the AABB (-0.5, -0.5, -0.5) to (0.5, 0.5, 0.5)
    in normalized space.
    """

    TYPE_NAME = "lexis::render::ClipPlanes"
    TOPIC = "clip_planes"

    def __init__(self, planes: Iterable[Plane] | None = None) -> None:
        self.planes: List[Plane] = []
        if planes is None:
            self.reset()
        else:
            self.planes = list(planes)

    def is_empty(self) -> bool:
        return not self.planes

    def clear(self) -> None:
        self.planes.clear()

    def reset(self) -> None:
        """Restore the six default planes."""
        self.planes = [Plane(normal, d) for normal, d in DEFAULT_PLANES]

    def is_outside(self, box: AABB | Sequence[Sequence[float]]) -> bool:
        """True if the box is fully outside any plane, i.e. shall be clipped."""
        if not isinstance(box, AABB):
            box = AABB(*box)
        return any(box.is_in_front(plane) for plane in self.planes)

    def to_dict(self) -> Dict[str, Any]:
        return {"planes": [plane.to_dict() for plane in self.planes]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ClipPlanes:
        return cls(Plane.from_dict(p) for p in data.get("planes", []))
