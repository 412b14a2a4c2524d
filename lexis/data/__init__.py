from .progress import Progress
from .events import CellSetBinaryOp, CellSetBinaryOpType, SelectedIDs, ToggleIDRequest

__all__ = [
    "Progress",
    "CellSetBinaryOp",
    "CellSetBinaryOpType",
    "SelectedIDs",
    "ToggleIDRequest",
]
