# src/bank_sim/event_queue.py

"""
Implements the time-ordered event list.

The `EventQueue` is a min-heap managed with Python's `heapq` module.
Entries are stored as `(time, sequence, event)` tuples: ordering by
time first and by insertion sequence second gives first-in-first-out
order among events scheduled for the same instant, and the sequence
number also keeps the heap from ever comparing two Event objects.
"""

import heapq
import itertools
import logging
from typing import Iterator, List, Tuple

from .events import Event

# Set up the module-level logger
log = logging.getLogger(__name__)


class EventQueue:
    """
    A priority-ordered multiset of Events, earliest time first.

    Ties between events with equal time are broken by insertion order.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, Event]] = []
        self._sequence = itertools.count()

    def push(self, event: Event):
        """Schedules an event."""
        heapq.heappush(self._heap, (event.time, next(self._sequence), event))
        log.debug(f"T={event.time}: Scheduled {event.kind.name.lower()} "
                  f"of customer #{event.customer} "
                  f"({len(self._heap)} pending).")

    def pop(self) -> Event:
        """
        Removes and returns the earliest pending event.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._heap:
            raise IndexError("pop from an empty EventQueue")
        _, _, event = heapq.heappop(self._heap)
        return event

    def peek(self) -> Event:
        """Returns the earliest pending event without removing it."""
        if not self._heap:
            raise IndexError("peek at an empty EventQueue")
        return self._heap[0][2]

    def ordered(self) -> Iterator[Event]:
        """Yields the pending events in extraction order, non-destructively."""
        for _, _, event in sorted(self._heap):
            yield event

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self):
        return f"EventQueue(pending={len(self._heap)})"
