# src/bank_sim/constants.py

"""
Defines core enumerations and fixed settings used across the simulator.

This module provides the event tag used by the event queue, the exit
statuses reported by the command-line front end, and the field widths
and labels of the console report. Keeping them here means the text
format can be checked in one place.
"""

from enum import Enum, IntEnum, auto


class EventKind(Enum):
    """
    Tags every scheduled event with what it represents.
    """

    # A customer walks into the bank. Always comes from the input stream.
    ARRIVAL = auto()

    # A customer finishes service and leaves. Always created by the
    # engine while it processes the matching ARRIVAL.
    DEPARTURE = auto()


class ExitStatus(IntEnum):
    """Process exit statuses of the `bank-sim` command."""

    OK = 0
    FILE_OPEN_FAILURE = 1
    USAGE_ERROR = 2
    ORDER_VIOLATION = 3
    MALFORMED_INPUT = 4


# Console Report Layout
ARRIVAL_LABEL = "Processing an arrival event at time:"
ARRIVAL_TIME_WIDTH = 5

DEPARTURE_LABEL = "Processing a departure event at time:"
DEPARTURE_TIME_WIDTH = 4

SUMMARY_HEADER = "Final statistics:"
SUMMARY_LABEL_WIDTH = 41
COUNT_LABEL = "Total number of people processed:     "
AVERAGE_WAIT_LABEL = "Average amount of time spent waiting: "

# Printed instead of the average when nobody came through the door.
NO_CUSTOMERS_TEXT = "n/a (no customers processed)"
