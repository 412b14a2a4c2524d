"""
lexis-send-event: publish events read from a script.

The script contains a list of events. Each event is specified with the
following format::

    event_name pause_in_seconds
    parameter_1
    ...
    parameter_n

The pause is optional and tells how long to wait before sending the event.
Each of the following lines is parsed in order as a parameter of the event
type. Blank lines are ignored.

Supported events:
    lexis::data::ToggleIDRequest and lexis::data::SelectedIDs take one
    parameter, a list of space separated integers.

    lexis::data::CellSetBinaryOp takes three parameters, two lists of space
    separated integers and an operation name. At the moment the only
    operation is SYNAPTIC_PROJECTIONS.

Events are written to stdout as JSON envelope lines.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, TextIO, Tuple

from ..bus import Publisher
from ..config import setup_logging
from ..data.events import MAX_CELL_ID, CellSetBinaryOp, CellSetBinaryOpType, SelectedIDs, ToggleIDRequest
from ..message import Message

logger = logging.getLogger("lexis.send_event")

Event = Tuple[float, Message]


class ScriptParseError(ValueError):
    """Raised when an event's parameters cannot be parsed."""
    pass


def _lines(stream: TextIO) -> Iterator[str]:
    for line in stream:
        line = line.strip()
        if line:
            yield line


def _parse_ids(lines: Iterator[str], what: str) -> List[int]:
    line = next(lines, None)
    if line is None:
        raise ScriptParseError(f"Error parsing {what}: missing parameter")
    try:
        ids = [int(token) for token in line.split()]
    except ValueError:
        raise ScriptParseError(f"Error parsing {what}: {line!r} is not a list of integers") from None
    for i in ids:
        if not 0 <= i <= MAX_CELL_ID:
            raise ScriptParseError(f"Error parsing {what}: cell id {i} out of range")
    return ids


def _parse_cell_set_binary_op(lines: Iterator[str]) -> CellSetBinaryOp:
    type_name = CellSetBinaryOp.TYPE_NAME
    first = _parse_ids(lines, f"{type_name} parameter 1")
    second = _parse_ids(lines, f"{type_name} parameter 2")
    name = next(lines, None)
    if name is None:
        raise ScriptParseError(f"Error parsing {type_name}: missing operation")
    try:
        operation = CellSetBinaryOpType.from_script_name(name)
    except ValueError:
        raise ScriptParseError(f"Unknown operation for {type_name} {name}") from None
    return CellSetBinaryOp(first, second, operation)


def _parse_header(line: str) -> Tuple[str, float]:
    # The pause is optional; when it cannot be read it is zero
    tokens = line.split()
    pause = 0.0
    if len(tokens) > 1:
        try:
            pause = float(tokens[1])
        except ValueError:
            pause = 0.0
    return tokens[0], pause


def parse_script(stream: TextIO) -> List[Event]:
    """
    Parse an event script into (pause, message) pairs.

    Unknown event names are logged and skipped line by line.

    Raises:
        ScriptParseError: If the parameters of a known event are malformed.
    """
    events: List[Event] = []
    lines = _lines(stream)
    for line in lines:
        name, pause = _parse_header(line)
        if name == CellSetBinaryOp.TYPE_NAME:
            events.append((pause, _parse_cell_set_binary_op(lines)))
        elif name == ToggleIDRequest.TYPE_NAME:
            events.append((pause, ToggleIDRequest(_parse_ids(lines, f"{name} parameter"))))
        elif name == SelectedIDs.TYPE_NAME:
            events.append((pause, SelectedIDs(_parse_ids(lines, f"{name} parameter"))))
        else:
            logger.error("Unknown event type: %s", name)
    return events


def send_events(
    events: Sequence[Event],
    publisher: Publisher,
    sleep: Optional[Callable[[float], None]] = None,
) -> int:
    """Publish events in order, waiting each event's pause first. Returns the number sent."""
    if sleep is None:
        sleep = time.sleep
    for pause, event in events:
        if pause:
            logger.info("Sleeping for %s seconds", pause)
            sleep(pause)
        logger.info("Sending event %s", event)
        publisher.publish(event)
    return len(events)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexis-send-event",
        description="Publish the events of a script as JSON lines on stdout.",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("script", nargs="?", type=Path, help="Script file; stdin if omitted.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        if args.script is None:
            events = parse_script(stdin)
        else:
            with open(args.script) as f:
                events = parse_script(f)
    except OSError as e:
        logger.error("Error opening file: %s (%s)", args.script, e)
        return 2
    except ScriptParseError as e:
        logger.error("%s", e)
        return 1

    send_events(events, Publisher(stdout))
    return 0


if __name__ == "__main__":
    sys.exit(main())
