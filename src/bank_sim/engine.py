# src/bank_sim/engine.py

"""
Implements the single-teller simulation engine.

`BankSimulation` drains an `ArrivalSchedule` in time order. Each arrival
is served as soon as the teller is free, its wait is added to the running
total, and a departure is scheduled for the moment its service ends.
Each departure simply retires the customer. Every processed event is
reported as an `EventRecord`, and the run ends when the queue is empty.
"""

import logging
from typing import Callable, Dict, List, Optional

from .constants import EventKind
from .event_queue import EventQueue
from .events import Event, EventRecord
from .measure import Measure
from .source import ArrivalSchedule

# Set up the module-level logger
log = logging.getLogger(__name__)

EventCallback = Callable[[EventRecord], None]


class SimulationState:
    """
    Aggregate state mutated while events are processed.

    Attributes:
        open_time (int): Clock time at which the teller is next free.
        total_wait (int): Sum of all customers' waits so far.
        count (int): Arrivals processed so far.
    """

    def __init__(self):
        self.open_time: int = 0
        self.total_wait: int = 0
        self.count: int = 0

    def __repr__(self):
        return (f"SimulationState(open_time={self.open_time}, "
                f"total_wait={self.total_wait}, count={self.count})")


class SimulationResult:
    """
    Final statistics of a finished run.

    Attributes:
        count (int): Customers processed.
        total_wait (int): Sum of all waits.
        open_time (int): Time at which the teller finally became free.
        records (List[EventRecord]): Every processed event, in order.
    """

    def __init__(self, count: int, total_wait: int, open_time: int,
                 records: List[EventRecord]):
        self.count = count
        self.total_wait = total_wait
        self.open_time = open_time
        self.records = records

    @property
    def average_wait(self) -> Optional[float]:
        """Mean wait per customer, or None when nobody was processed."""
        if self.count == 0:
            return None
        return self.total_wait / self.count

    @property
    def arrivals(self) -> List[EventRecord]:
        return [r for r in self.records if r.kind is EventKind.ARRIVAL]

    @property
    def departures(self) -> List[EventRecord]:
        return [r for r in self.records if r.kind is EventKind.DEPARTURE]

    def __repr__(self):
        return (f"SimulationResult(count={self.count}, "
                f"total_wait={self.total_wait}, "
                f"average_wait={self.average_wait})")


class BankSimulation:
    """
    Runs one simulation over a filled ArrivalSchedule.

    A simulation consumes its schedule and can only be run once.
    """

    def __init__(self, schedule: ArrivalSchedule,
                 measure: Optional[Measure] = None):
        """
        Args:
            schedule (ArrivalSchedule): Arrivals produced by the event source.
            measure (Optional[Measure]): KPI tracker to feed while running.
        """
        self.queue: EventQueue = schedule.queue
        self.expected_count: int = schedule.count
        self.measure: Optional[Measure] = measure
        self.state = SimulationState()
        self._arrival_time: Dict[int, int] = {}
        self._finished = False

        log.info(f"BankSimulation initialized: "
                 f"{self.expected_count} customer(s) scheduled.")

    def run(self, on_event: Optional[EventCallback] = None
            ) -> SimulationResult:
        """
        Processes every event until the queue is empty.

        Args:
            on_event (Optional[EventCallback]): Called with each
                EventRecord as soon as it is processed.

        Returns:
            SimulationResult: Final count, waits and the event log.

        Raises:
            RuntimeError: If the simulation has already been run.
        """
        if self._finished:
            raise RuntimeError("BankSimulation.run() may only be called once.")

        records: List[EventRecord] = []
        while self.queue:
            event = self.queue.pop()
            if event.is_arrival:
                record = self._process_arrival(event)
            else:
                record = self._process_departure(event)
            records.append(record)
            if on_event is not None:
                on_event(record)

        self._finished = True
        state = self.state
        if state.count != self.expected_count:
            log.warning(f"Processed {state.count} arrival(s) but the "
                        f"schedule announced {self.expected_count}.")

        result = SimulationResult(state.count, state.total_wait,
                                  state.open_time, records)
        if result.average_wait is None:
            log.warning("No customers processed; average wait is undefined.")
        log.info(f"Simulation finished: {result}")
        return result

    def _process_arrival(self, event: Event) -> EventRecord:
        """Serves a customer and schedules their departure."""
        state = self.state
        if event.serving < 0:
            log.warning(f"T={event.time}: Customer #{event.customer} has a "
                        f"negative service duration ({event.serving}).")

        service_start = max(event.time, state.open_time)
        wait = service_start - event.time
        state.open_time = service_start + event.serving
        state.total_wait += wait
        state.count += 1

        self.queue.push(Event.departure(state.open_time, event.customer))
        self._arrival_time[event.customer] = event.time

        if self.measure is not None:
            self.measure.log_arrival(event.time)
            self.measure.log_service_start(service_start, wait, event.serving)

        log.debug(f"T={event.time}: Arrival of customer #{event.customer}. "
                  f"Wait={wait}, departs at T={state.open_time}.")
        return EventRecord(EventKind.ARRIVAL, event.time, event.customer,
                           wait=wait, departure_time=state.open_time)

    def _process_departure(self, event: Event) -> EventRecord:
        """Retires a customer. No state changes."""
        arrival_time = self._arrival_time.pop(event.customer, event.time)
        if self.measure is not None:
            self.measure.log_departure(event.time, event.time - arrival_time)

        log.debug(f"T={event.time}: Departure of customer #{event.customer}.")
        return EventRecord(EventKind.DEPARTURE, event.time, event.customer)


def simulate(schedule: ArrivalSchedule,
             on_event: Optional[EventCallback] = None,
             measure: Optional[Measure] = None) -> SimulationResult:
    """Runs a fresh BankSimulation over `schedule` and returns its result."""
    return BankSimulation(schedule, measure=measure).run(on_event)
