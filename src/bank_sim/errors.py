# src/bank_sim/errors.py

"""
Exception types raised while reading simulation input.

Every error carries the process exit status the command-line front end
should terminate with, so the library never has to know about
`sys.exit` itself.
"""

from .constants import ExitStatus


class BankSimError(ValueError):
    """Base class for all input errors raised by the simulator."""

    exit_status: ExitStatus


class OrderViolationError(BankSimError):
    """
    An arrival time is earlier than the one before it.

    Attributes:
        record (int): 1-based index of the offending record.
        time (int): The offending arrival time.
        previous_time (int): The arrival time of the previous record
                             (0 for the first record).
    """

    exit_status = ExitStatus.ORDER_VIOLATION

    def __init__(self, record: int, time: int, previous_time: int):
        self.record = record
        self.time = time
        self.previous_time = previous_time
        super().__init__(
            f"customer #{record} out of order "
            f"(time = {time}, previous time = {previous_time})"
        )


class MalformedInputError(BankSimError):
    """
    A token could not be read as an integer, or a record was left
    without its service duration. Only raised in strict mode.
    """

    exit_status = ExitStatus.MALFORMED_INPUT

    def __init__(self, token: str, position: int, reason: str):
        self.token = token
        self.position = position
        self.reason = reason
        super().__init__(f"token #{position} ({token!r}): {reason}")
