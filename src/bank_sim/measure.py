# src/bank_sim/measure.py

"""
Provides the Measure class, a data collection and statistical analysis
tool for the bank simulation.

The engine reports every arrival, service start and departure to an
attached Measure. From those observations it calculates per-customer
statistics (wait, service and system times) and how busy the teller
was over the run.

It is a passive component; it only records data when its 'log_...'
methods are called by the engine.
"""

import logging
import math
from typing import List, Tuple, Dict, Any, Optional

# Set up the module-level logger
log = logging.getLogger(__name__)

# Z-score for a two-sided 95% confidence interval
Z_95 = 1.96


class Measure:
    """
    Collects, stores, and calculates KPIs for a single-teller run.

    Attributes:
        start_time (float): The simulation timestamp when this tracker was
                            initialized.

        # Observation-based data lists
        wait_times (List[float]): Queuing delay of each customer.
        service_times (List[float]): Service duration of each customer.
        system_times (List[float]): Departure minus arrival time of each
                                    customer that has left.

        # Teller activity
        service_intervals (List[Tuple[float, float]]):
            (service_start, service_end) of every customer, in the order
            service began.

        # Simple counters
        total_arrivals (int): Customers that arrived.
        total_waited (int): Customers that had to wait (wait > 0).
        total_served (int): Customers that departed.

        last_update_time (float): The latest timestamp seen so far.
    """

    def __init__(self, start_time: float = 0.0):
        self.start_time: float = start_time
        self.last_update_time: float = start_time

        self.wait_times: List[float] = []
        self.service_times: List[float] = []
        self.system_times: List[float] = []

        self.service_intervals: List[Tuple[float, float]] = []

        self.total_arrivals: int = 0
        self.total_waited: int = 0
        self.total_served: int = 0

        log.debug(f"Measure tracker initialized (StartTime={start_time})")

    def log_arrival(self, time: float):
        """Logs the arrival of a new customer."""
        self.total_arrivals += 1
        self._update_last_time(time)
        log.debug(f"T={time}: Arrival logged. "
                  f"Total arrivals: {self.total_arrivals}")

    def log_service_start(self, time: float, wait_time: float,
                          service_time: float):
        """
        Logs a customer reaching the teller.

        The end of service is known as soon as service starts, so the
        whole busy interval is recorded here.
        """
        if wait_time > 0:
            self.total_waited += 1
        self.wait_times.append(wait_time)
        self.service_times.append(service_time)
        self.service_intervals.append((time, time + service_time))
        self._update_last_time(time)
        log.debug(f"T={time}: Service started. Wait: {wait_time}, "
                  f"Service: {service_time}")

    def log_departure(self, time: float, system_time: float):
        """Logs a customer leaving the bank."""
        self.system_times.append(system_time)
        self.total_served += 1
        self._update_last_time(time)
        log.debug(f"T={time}: Departure logged. System time: {system_time}")

    def _update_last_time(self, time: float):
        """Internal helper to keep track of the latest event time."""
        self.last_update_time = max(self.last_update_time, time)

    def busy_timeline(self) -> List[Tuple[float, int]]:
        """
        Returns the teller's busy state as a step series.

        Each entry is (timestamp, busy) with busy being 1 or 0, starting
        at `start_time`. Back-to-back services are merged into a single
        busy period.
        """
        periods: List[Tuple[float, float]] = []
        for start, end in self.service_intervals:
            if end <= start:
                continue
            if periods and start <= periods[-1][1]:
                periods[-1] = (periods[-1][0], max(end, periods[-1][1]))
            else:
                periods.append((start, end))

        timeline: List[Tuple[float, int]] = [(self.start_time, 0)]
        for start, end in periods:
            if start == timeline[-1][0]:
                timeline[-1] = (start, 1)
            else:
                timeline.append((start, 1))
            timeline.append((end, 0))
        return timeline

    def busy_time(self) -> float:
        """Total time the teller spent serving customers."""
        return sum(max(end - start, 0) for start, end in self.service_intervals)

    def _calculate_statistical_summary(
        self, data: List[float]
    ) -> Dict[str, Any]:
        """
        Calculates a statistical summary for a list of observations.

        Includes mean, std_dev, count, max and a 95% confidence interval
        on the mean using the normal approximation.
        """
        n = len(data)
        if n == 0:
            return {
                "mean": 0.0, "std_dev": 0.0, "count": 0, "max": 0.0,
                "confidence_interval_95": (0.0, 0.0)
            }

        mean = sum(data) / n

        if n > 1:
            variance = sum((x - mean) ** 2 for x in data) / (n - 1)
            std_dev = math.sqrt(variance)
        else:
            std_dev = 0.0  # Cannot calculate variance with one sample

        margin_of_error = Z_95 * (std_dev / math.sqrt(n))

        return {
            "mean": mean,
            "std_dev": std_dev,
            "count": n,
            "max": float(max(data)),
            "confidence_interval_95": (mean - margin_of_error,
                                       mean + margin_of_error)
        }

    def get_final_kpis(self, simulation_end_time: Optional[float] = None
                       ) -> Dict[str, Any]:
        """
        Calculates and returns the final dictionary of all KPIs.

        Args:
            simulation_end_time (Optional[float]): The final timestamp
                of the simulation. Defaults to the latest logged time,
                which for a finished run is the last departure.

        Returns:
            Dict[str, Any]: A nested dictionary containing all KPIs.
        """
        end_time = self.last_update_time if simulation_end_time is None \
            else simulation_end_time
        total_duration = end_time - self.start_time

        if total_duration > 0:
            utilization = self.busy_time() / total_duration
        else:
            log.warning("Total simulation duration is 0. "
                        "Reporting zero utilization.")
            utilization = 0.0

        prob_wait = (self.total_waited / self.total_arrivals) \
            if self.total_arrivals > 0 else 0.0

        log.info(f"Calculating final KPIs for total duration: "
                 f"{total_duration} (from {self.start_time} to {end_time})")

        return {
            "simulation_summary": {
                "start_time": self.start_time,
                "end_time": end_time,
                "total_duration": total_duration
            },
            "arrivals_and_throughput": {
                "total_arrivals": self.total_arrivals,
                "total_served": self.total_served,
                "total_who_waited": self.total_waited,
                "probability_of_waiting": prob_wait
            },
            "wait_time": self._calculate_statistical_summary(self.wait_times),
            "service_time": self._calculate_statistical_summary(
                self.service_times),
            "system_time": self._calculate_statistical_summary(
                self.system_times),
            "server_utilization": {
                "busy_time": self.busy_time(),
                "utilization": utilization
            }
        }
