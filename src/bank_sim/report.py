# src/bank_sim/report.py

"""
Renders simulation output as console text.

The layout (labels and right-justified numeric fields) is fixed in
`bank_sim.constants`.
"""

from typing import List, Optional

from .constants import (
    ARRIVAL_LABEL, ARRIVAL_TIME_WIDTH, AVERAGE_WAIT_LABEL, COUNT_LABEL,
    DEPARTURE_LABEL, DEPARTURE_TIME_WIDTH, EventKind, NO_CUSTOMERS_TEXT,
    SUMMARY_HEADER, SUMMARY_LABEL_WIDTH
)
from .engine import SimulationResult
from .events import EventRecord


def format_event(record: EventRecord) -> str:
    """One line describing a processed event."""
    if record.kind is EventKind.ARRIVAL:
        return f"{ARRIVAL_LABEL}{record.time:>{ARRIVAL_TIME_WIDTH}}"
    return f"{DEPARTURE_LABEL}{record.time:>{DEPARTURE_TIME_WIDTH}}"


def format_average(value: Optional[float]) -> str:
    """
    Formats the average wait with six significant digits, dropping
    trailing zeros (0 -> "0", 1.5 -> "1.5", 7/3 -> "2.33333").
    """
    if value is None:
        return NO_CUSTOMERS_TEXT
    return f"{value:g}"


def format_summary(result: SimulationResult) -> List[str]:
    """The final statistics block, starting with its blank separator line."""
    return [
        "",
        SUMMARY_HEADER,
        f"{COUNT_LABEL:>{SUMMARY_LABEL_WIDTH}}{result.count}",
        f"{AVERAGE_WAIT_LABEL:>{SUMMARY_LABEL_WIDTH}}"
        f"{format_average(result.average_wait)}",
    ]


def render(result: SimulationResult) -> str:
    """The complete console output of a run, newline-terminated."""
    lines = [format_event(record) for record in result.records]
    lines.extend(format_summary(result))
    return "\n".join(lines) + "\n"
