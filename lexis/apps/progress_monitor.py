"""lexis-progress-monitor: show the progress of running operations."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from ..bus import Subscriber
from ..config import PROGRESS_MAX_AGE_SEC, setup_logging
from ..data.progress import Progress

logger = logging.getLogger("lexis.progress_monitor")


@dataclass
class Operation:
    amount: float
    updated: float


class ProgressMonitor:
    """
    Tracks Progress messages per operation and prints them.

    Operations are dropped once finished (``amount >= 1``) or when not
    updated for ``max_age`` seconds. A single operation is printed in place
    on one line; several are printed one per line.
    """

    def __init__(
        self,
        out: TextIO,
        subscriber: Optional[Subscriber] = None,
        max_age: float = PROGRESS_MAX_AGE_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.out = out
        self.max_age = max_age
        self.clock = clock
        self.operations: Dict[str, Operation] = {}
        self.subscriber = subscriber if subscriber is not None else Subscriber()
        self.subscriber.subscribe(Progress, self.on_progress)

    def on_progress(self, progress: Progress) -> None:
        self.operations[progress.operation] = Operation(progress.amount, self.clock())

    def expire(self) -> None:
        now = self.clock()
        self.operations = {
            name: op
            for name, op in self.operations.items()
            if op.updated + self.max_age >= now and op.amount < 1.0
        }

    def render(self) -> List[str]:
        return [f"{name}: {int(op.amount * 100)}%" for name, op in sorted(self.operations.items())]

    def update(self) -> None:
        """Drop stale operations and print the remaining ones."""
        self.expire()
        lines = self.render()
        if not lines:
            return
        if len(lines) == 1:
            self.out.write(f"\r{lines[0]} ")
        else:
            self.out.write("\n" + "\n".join(lines) + "\n")
        self.out.flush()

    def run(self, stream: TextIO) -> None:
        """Receive messages from ``stream`` until it ends."""
        while self.subscriber.receive(stream):
            self.update()
        self.out.write("\n")

    def close(self) -> None:
        self.subscriber.unsubscribe_all()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexis-progress-monitor",
        description="Monitor lexis progress events read as JSON lines from stdin.",
    )
    parser.add_argument(
        "--max-age",
        type=float,
        default=PROGRESS_MAX_AGE_SEC,
        help="Seconds without update before an operation is dropped.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    monitor = ProgressMonitor(stdout if stdout is not None else sys.stdout, max_age=args.max_age)
    try:
        monitor.run(stdin if stdin is not None else sys.stdin)
    except KeyboardInterrupt:
        logger.debug("Interrupted")
    finally:
        monitor.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
