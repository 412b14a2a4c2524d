"""
Selection and cell set events exchanged between viewers.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterable, List

from ..message import Message


class CellSetBinaryOpType(str, Enum):
    PROJECTIONS = "projections"

    @classmethod
    def from_script_name(cls, name: str) -> CellSetBinaryOpType:
        """Map the script spelling (e.g. ``SYNAPTIC_PROJECTIONS``) to an operation."""
        try:
            return SCRIPT_OPERATION_NAMES[name]
        except KeyError:
            raise ValueError(f"Unknown operation: {name}") from None


SCRIPT_OPERATION_NAMES = {
    "SYNAPTIC_PROJECTIONS": CellSetBinaryOpType.PROJECTIONS,
}


MAX_CELL_ID = 0xFFFFFFFF


def _as_ids(ids: Iterable[int]) -> List[int]:
    result = [int(i) for i in ids]
    for i in result:
        if not 0 <= i <= MAX_CELL_ID:
            raise ValueError(f"Cell id out of uint32 range: {i}")
    return result


class _IDList(Message):
    def __init__(self, ids: Iterable[int] = ()) -> None:
        self.ids = _as_ids(ids)

    def to_dict(self) -> Dict[str, Any]:
        return {"ids": list(self.ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        return cls(data.get("ids", []))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.ids!r})"


class ToggleIDRequest(_IDList):
    """Request to toggle the selection state of cells."""
    TYPE_NAME = "lexis::data::ToggleIDRequest"
    TOPIC = "toggle_id_request"


class SelectedIDs(_IDList):
    """The current cell selection."""
    TYPE_NAME = "lexis::data::SelectedIDs"
    TOPIC = "selected_ids"


class CellSetBinaryOp(Message):
    """Binary operation between two cell sets."""

    TYPE_NAME = "lexis::data::CellSetBinaryOp"
    TOPIC = "cell_set_binary_op"

    def __init__(
        self,
        first: Iterable[int] = (),
        second: Iterable[int] = (),
        operation: CellSetBinaryOpType = CellSetBinaryOpType.PROJECTIONS,
    ) -> None:
        self.first = _as_ids(first)
        self.second = _as_ids(second)
        self.operation = CellSetBinaryOpType(operation)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first": list(self.first),
            "second": list(self.second),
            "operation": self.operation.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CellSetBinaryOp:
        return cls(data.get("first", []), data.get("second", []), data.get("operation", "projections"))

    def __repr__(self) -> str:
        return f"CellSetBinaryOp({self.first!r}, {self.second!r}, {self.operation.name})"
