# src/bank_sim/events.py

"""
Defines the Event and EventRecord types.

An `Event` is a unit of scheduling held by the `EventQueue`. An
`EventRecord` is what the engine reports after it has processed one.
"""

from typing import Optional

from .constants import EventKind


class Event:
    """
    A customer arriving at, or departing from, the teller.

    Attributes:
        time (int): Simulated clock value at which the event happens.
        kind (EventKind): ARRIVAL or DEPARTURE.
        serving (Optional[int]): Service duration the customer needs.
                                 Only set for ARRIVAL events.
        customer (int): 1-based number of the customer, in input order.
    """

    __slots__ = ("time", "kind", "serving", "customer")

    def __init__(self, time: int, kind: EventKind,
                 serving: Optional[int] = None, customer: int = 0):
        if kind is EventKind.ARRIVAL and serving is None:
            raise ValueError("An ARRIVAL event needs a service duration.")
        if kind is EventKind.DEPARTURE and serving is not None:
            raise ValueError("A DEPARTURE event carries no service duration.")

        self.time: int = time
        self.kind: EventKind = kind
        self.serving: Optional[int] = serving
        self.customer: int = customer

    @classmethod
    def arrival(cls, time: int, serving: int, customer: int = 0) -> "Event":
        return cls(time, EventKind.ARRIVAL, serving, customer)

    @classmethod
    def departure(cls, time: int, customer: int = 0) -> "Event":
        return cls(time, EventKind.DEPARTURE, None, customer)

    @property
    def is_arrival(self) -> bool:
        return self.kind is EventKind.ARRIVAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (self.time, self.kind, self.serving, self.customer) == \
            (other.time, other.kind, other.serving, other.customer)

    def __hash__(self) -> int:
        return hash((self.time, self.kind, self.serving, self.customer))

    def __repr__(self):
        if self.is_arrival:
            return (f"Event(ARRIVAL, time={self.time}, "
                    f"serving={self.serving}, customer={self.customer})")
        return f"Event(DEPARTURE, time={self.time}, customer={self.customer})"


class EventRecord:
    """
    The outcome of processing one event.

    For arrivals, `wait` is the time the customer spent queued and
    `departure_time` is when their service will end. Both are None
    for departures.
    """

    __slots__ = ("kind", "time", "customer", "wait", "departure_time")

    def __init__(self, kind: EventKind, time: int, customer: int,
                 wait: Optional[int] = None,
                 departure_time: Optional[int] = None):
        self.kind = kind
        self.time = time
        self.customer = customer
        self.wait = wait
        self.departure_time = departure_time

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventRecord):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self):
        return (self.kind, self.time, self.customer,
                self.wait, self.departure_time)

    def __repr__(self):
        return (f"EventRecord({self.kind.name}, time={self.time}, "
                f"customer={self.customer}, wait={self.wait}, "
                f"departure_time={self.departure_time})")
