# tests/test_measure.py

"""
Unit tests for the Measure class (src/bank_sim/measure.py).

This file tests the statistical calculation logic of the Measure
class in isolation, ensuring that wait-time summaries, utilization
and the teller busy timeline are calculated correctly.
"""

import pytest
from pytest import approx

from bank_sim.measure import Measure


@pytest.fixture
def empty_measure() -> Measure:
    """Returns a default Measure starting at T=0."""
    return Measure(start_time=0.0)


@pytest.fixture
def simple_measure() -> Measure:
    """
    Returns a Measure fed by hand with three customers:

    - #1 arrives 0, served 0-4 (wait 0), leaves 4
    - #2 arrives 2, served 4-7 (wait 2), leaves 7
    - #3 arrives 10, served 10-12 (wait 0), leaves 12
    """
    m = Measure(start_time=0.0)
    m.log_arrival(0)
    m.log_service_start(0, wait_time=0, service_time=4)
    m.log_arrival(2)
    m.log_service_start(4, wait_time=2, service_time=3)
    m.log_departure(4, system_time=4)
    m.log_departure(7, system_time=5)
    m.log_arrival(10)
    m.log_service_start(10, wait_time=0, service_time=2)
    m.log_departure(12, system_time=2)
    return m


def test_measure_initialization():
    m = Measure(start_time=10.0)

    assert m.start_time == 10.0
    assert m.last_update_time == 10.0
    assert m.total_arrivals == 0
    assert m.wait_times == []
    assert m.busy_timeline() == [(10.0, 0)]


def test_get_final_kpis_on_empty_data(empty_measure: Measure):
    """No data and zero duration must not divide by zero."""
    kpis = empty_measure.get_final_kpis()

    assert kpis["simulation_summary"]["total_duration"] == 0.0
    assert kpis["arrivals_and_throughput"]["total_arrivals"] == 0
    assert kpis["arrivals_and_throughput"]["probability_of_waiting"] == 0.0

    wait_stats = kpis["wait_time"]
    assert wait_stats["mean"] == 0.0
    assert wait_stats["std_dev"] == 0.0
    assert wait_stats["count"] == 0
    assert wait_stats["confidence_interval_95"] == (0.0, 0.0)

    assert kpis["server_utilization"]["utilization"] == 0.0


def test_internal_statistical_summary(empty_measure: Measure):
    """
    Known dataset: n=5, mean=12.2, std_dev=1.923538...,
    95% CI = 12.2 +/- 1.96 * 1.923538 / sqrt(5).
    """
    data = [10.0, 12.0, 15.0, 11.0, 13.0]

    stats = empty_measure._calculate_statistical_summary(data)

    assert stats["count"] == 5
    assert stats["mean"] == approx(12.2)
    assert stats["std_dev"] == approx(1.923538, abs=1e-5)
    assert stats["max"] == 15.0

    ci_low, ci_high = stats["confidence_interval_95"]
    assert ci_low == approx(10.51394, abs=1e-5)
    assert ci_high == approx(13.88605, abs=1e-5)


def test_single_observation_has_no_spread(empty_measure: Measure):
    stats = empty_measure._calculate_statistical_summary([3.0])
    assert stats["std_dev"] == 0.0
    assert stats["confidence_interval_95"] == (3.0, 3.0)


def test_get_final_kpis_with_data(simple_measure: Measure):
    kpis = simple_measure.get_final_kpis()

    assert kpis["simulation_summary"]["end_time"] == 12
    assert kpis["arrivals_and_throughput"]["total_arrivals"] == 3
    assert kpis["arrivals_and_throughput"]["total_served"] == 3
    assert kpis["arrivals_and_throughput"]["total_who_waited"] == 1
    assert kpis["arrivals_and_throughput"]["probability_of_waiting"] == \
        approx(1 / 3)

    assert kpis["wait_time"]["mean"] == approx(2 / 3)
    assert kpis["wait_time"]["max"] == 2.0
    assert kpis["service_time"]["mean"] == approx(3.0)
    assert kpis["system_time"]["mean"] == approx(11 / 3)

    # Busy 0-7 and 10-12 out of 12
    assert kpis["server_utilization"]["busy_time"] == 9
    assert kpis["server_utilization"]["utilization"] == approx(0.75)


def test_explicit_end_time(simple_measure: Measure):
    kpis = simple_measure.get_final_kpis(simulation_end_time=18.0)
    assert kpis["server_utilization"]["utilization"] == approx(0.5)


def test_busy_timeline_merges_back_to_back_service(simple_measure: Measure):
    assert simple_measure.busy_timeline() == [
        (0, 1), (7, 0), (10, 1), (12, 0)
    ]


def test_busy_timeline_starts_idle(empty_measure: Measure):
    empty_measure.log_service_start(3, wait_time=0, service_time=2)
    assert empty_measure.busy_timeline() == [(0.0, 0), (3, 1), (5, 0)]


def test_zero_length_service_is_not_busy(empty_measure: Measure):
    empty_measure.log_service_start(3, wait_time=0, service_time=0)
    assert empty_measure.busy_timeline() == [(0.0, 0)]
    assert empty_measure.busy_time() == 0


def test_engine_call_sequence(empty_measure: Measure):
    """Arrival, service start and departure fed by keyword, as the engine does."""
    empty_measure.log_arrival(time=1)
    empty_measure.log_service_start(time=1, wait_time=0, service_time=4)
    empty_measure.log_departure(time=5, system_time=4)

    kpis = empty_measure.get_final_kpis(simulation_end_time=10)

    assert kpis["simulation_summary"]["end_time"] == 10
    assert kpis["system_time"]["mean"] == approx(4.0)
    assert kpis["server_utilization"]["busy_time"] == 4
    assert kpis["server_utilization"]["utilization"] == approx(0.4)
