# src/bank_sim/__init__.py

"""
Initializes the 'bank_sim' package.

This file sets up the package-level logger and "lifts" the
most important classes and functions to the top-level namespace.
This allows users to import core components directly, e.g.:

from bank_sim import parse_arrivals, simulate, render
"""

import logging

# Setup Package-Level Logger
# A NullHandler keeps the library silent unless the application
# configures logging itself (the CLI does, with -v).
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


# Lift constants and errors
from .constants import EventKind, ExitStatus
from .errors import BankSimError, OrderViolationError, MalformedInputError

# Lift the event model
from .events import Event, EventRecord
from .event_queue import EventQueue

# Lift the two components and the KPI tracker
from .source import ArrivalSchedule, read_arrivals, parse_arrivals, open_arrivals
from .engine import BankSimulation, SimulationState, SimulationResult, simulate
from .measure import Measure
from .report import format_event, format_summary, render


__all__ = [
    # Constants
    "EventKind",
    "ExitStatus",

    # Errors
    "BankSimError",
    "OrderViolationError",
    "MalformedInputError",

    # Event model
    "Event",
    "EventRecord",
    "EventQueue",

    # Event source
    "ArrivalSchedule",
    "read_arrivals",
    "parse_arrivals",
    "open_arrivals",

    # Engine
    "BankSimulation",
    "SimulationState",
    "SimulationResult",
    "simulate",
    "Measure",

    # Output
    "format_event",
    "format_summary",
    "render"
]
