from __future__ import annotations
from typing import Any, Callable, Dict, Optional

from ..message import Message


class Progress(Message):
    """
    Progress meter for a named operation.

    ``amount`` is the completed fraction in [0, 1]. Each increment recomputes
    it and calls ``on_update`` with the meter, e.g. to publish it on the bus.
    """

    TYPE_NAME = "lexis::data::Progress"
    TOPIC = "progress"

    def __init__(
        self,
        operation: str = "",
        expected: int = 0,
        *,
        amount: float = 0.0,
        on_update: Optional[Callable[[Progress], None]] = None,
    ) -> None:
        self.operation = operation
        self.amount = float(amount)
        self.on_update = on_update
        self._expected = int(expected)
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    @property
    def expected(self) -> int:
        return self._expected

    def restart(self, expected: int) -> None:
        """Reset the count and expect ``expected`` steps."""
        self._expected = int(expected)
        self._count = 0
        self._update()

    def increment(self, inc: int = 1) -> int:
        """Advance by ``inc`` steps; returns the new count."""
        self._count += int(inc)
        return self._update()

    def __iadd__(self, inc: int) -> Progress:
        self.increment(inc)
        return self

    def _update(self) -> int:
        if self._expected <= 0:
            self.amount = 1.0
        else:
            self.amount = min(1.0, self._count / self._expected)
        if self.on_update is not None:
            self.on_update(self)
        return self._count

    def to_dict(self) -> Dict[str, Any]:
        return {"operation": self.operation, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Progress:
        return cls(str(data.get("operation", "")), amount=float(data.get("amount", 0.0)))

    def __repr__(self) -> str:
        return f"Progress({self.operation!r}, amount={self.amount:.3f})"
