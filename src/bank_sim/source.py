# src/bank_sim/source.py

"""
Reads customer arrivals from a text stream.

The input is a sequence of whitespace-separated integer pairs,
`<arrival_time> <service_duration>`, one pair per customer. Arrival
times must never go backwards. The whole stream is read up front and
every arrival is placed into an `EventQueue`; nothing is simulated here.

Reading stops at the end of the stream. A token that is not an integer,
or a final arrival time left without its service duration, also ends the
input. By default that truncation is logged as a warning and the records
read so far are kept; with `strict=True` it raises `MalformedInputError`
instead. Bytes that are not valid UTF-8 count as a non-integer token.
"""

import io
import logging
import re
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from .errors import MalformedInputError, OrderViolationError
from .event_queue import EventQueue
from .events import Event

# Set up the module-level logger
log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")

INPUT_ENCODING = "utf-8"
INPUT_ERRORS = "surrogateescape"


class ArrivalSchedule:
    """
    The output of the Event Source: every arrival, ready to simulate.

    Attributes:
        queue (EventQueue): Holds one ARRIVAL event per customer and
                            no departures yet.
        count (int): Number of customers read.
    """

    def __init__(self, queue: EventQueue, count: int):
        self.queue = queue
        self.count = count

    def __repr__(self):
        return f"ArrivalSchedule(count={self.count})"


def _tokens(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yields (1-based position, token) for every token in the input."""
    position = 0
    for line in lines:
        for token in line.split():
            position += 1
            yield position, token


def read_arrivals(stream: TextIO, strict: bool = False) -> ArrivalSchedule:
    """
    Parses arrival records from `stream` into an ArrivalSchedule.

    Args:
        stream (TextIO): Any iterable of text lines, such as an open
                         file or `sys.stdin`.
        strict (bool, optional): Raise on malformed input instead of
                                 treating it as the end of the stream.
                                 Defaults to False.

    Returns:
        ArrivalSchedule: The filled queue and the customer count.

    Raises:
        OrderViolationError: If an arrival time is lower than the
                             previous one. The first record is compared
                             against time 0.
        MalformedInputError: In strict mode only, on a non-integer token
                             or an unpaired trailing value.
    """
    queue = EventQueue()
    count = 0
    previous_time = 0
    pending: Optional[int] = None
    pending_position = 0

    for position, token in _tokens(stream):
        if not _INTEGER.fullmatch(token):
            _truncate(token, position, "not an integer", strict)
            pending = None
            break

        value = int(token)
        if pending is None:
            pending, pending_position = value, position
            continue

        arrival_time, serving = pending, value
        pending = None
        count += 1

        if arrival_time < previous_time:
            error = OrderViolationError(count, arrival_time, previous_time)
            log.debug(f"Rejecting input: {error}")
            raise error

        queue.push(Event.arrival(arrival_time, serving, customer=count))
        previous_time = arrival_time

    if pending is not None:
        _truncate(str(pending), pending_position,
                  "arrival time without a service duration", strict)

    log.info(f"Read {count} arrival(s) from input.")
    return ArrivalSchedule(queue, count)


def parse_arrivals(text: str, strict: bool = False) -> ArrivalSchedule:
    """Convenience wrapper around `read_arrivals` for in-memory text."""
    return read_arrivals(io.StringIO(text), strict=strict)


def open_arrivals(path: str) -> TextIO:
    """
    Opens an arrival file for `read_arrivals`.

    Bytes that are not valid UTF-8 are decoded with "surrogateescape",
    so they become non-integer tokens instead of aborting the read.

    Raises:
        OSError: If the file cannot be opened.
    """
    return open(path, encoding=INPUT_ENCODING, errors=INPUT_ERRORS)


def _truncate(token: str, position: int, reason: str, strict: bool):
    """Handles input that cannot form another complete record."""
    if strict:
        error = MalformedInputError(token, position, reason)
        log.debug(f"Rejecting input: {error}")
        raise error
    log.warning(f"Input ends at token #{position} ({token!r}): {reason}. "
                f"Remaining input ignored.")
