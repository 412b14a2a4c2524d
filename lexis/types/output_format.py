from __future__ import annotations
from dataclasses import dataclass
from typing import Union
import numpy as np

DTypeLike = Union[np.dtype, type, str]

DEFAULT_OUTPUT_DTYPE = np.float32


@dataclass(frozen=True)
class OutputFormat:
    """
    Numeric element type of sampled colors.

    Floating point outputs receive interpolated values unchanged. Integer
    outputs treat values as normalized and scale them by ``max_value``,
    truncating toward zero. Values outside ``[0, 1]`` are not clamped and
    may wrap around for integer outputs.
    """
    dtype: np.dtype
    max_value: float
    is_integer: bool

    def convert(self, values: np.ndarray) -> np.ndarray:
        """
        Convert interpolated float values to this output type.

        Args:
            values: Float array of interpolated values

        Returns:
            Array with dtype ``self.dtype``
        """
        values = np.asarray(values, dtype=np.float64)
        if self.is_integer:
            return np.trunc(values * self.max_value).astype(self.dtype)
        return values.astype(self.dtype)

    def cast_empty(self, empty_value) -> np.generic:
        """Empty values are already in the output type and are never rescaled."""
        return self.dtype.type(empty_value)


def resolve_output_format(dtype: DTypeLike) -> OutputFormat:
    """
    Build the OutputFormat for a numpy dtype-like.

    Raises:
        TypeError: If the dtype is neither an integer nor a floating type.
    """
    dt = np.dtype(dtype)
    if np.issubdtype(dt, np.integer):
        return OutputFormat(dtype=dt, max_value=float(np.iinfo(dt).max), is_integer=True)
    if np.issubdtype(dt, np.floating):
        return OutputFormat(dtype=dt, max_value=1.0, is_integer=False)
    raise TypeError(f"Unsupported output type for color sampling: {dt}")
