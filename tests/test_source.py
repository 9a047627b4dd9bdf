# tests/test_source.py

"""
Unit tests for the event source (src/bank_sim/source.py).

Covers reading pairs from text, the arrival-order check, and how
malformed or truncated input is handled in lenient and strict mode.
"""

import io
import logging

import pytest

from bank_sim import (
    BankSimError,
    EventKind,
    ExitStatus,
    MalformedInputError,
    OrderViolationError,
    open_arrivals,
    parse_arrivals,
    read_arrivals
)


def drain(schedule):
    """Pops every event of a schedule's queue, in order."""
    events = []
    while schedule.queue:
        events.append(schedule.queue.pop())
    return events


def test_reads_pairs_as_arrivals():
    schedule = parse_arrivals("0 5\n2 3\n")

    assert schedule.count == 2
    events = drain(schedule)
    assert [(e.time, e.serving, e.customer) for e in events] == \
        [(0, 5, 1), (2, 3, 2)]
    assert all(e.kind is EventKind.ARRIVAL for e in events)


def test_any_whitespace_separates_tokens():
    """Pairs may span lines and use tabs or repeated spaces."""
    schedule = parse_arrivals("  1\t4 \n\n 3\n  2   7 1")

    assert schedule.count == 3
    assert [(e.time, e.serving) for e in drain(schedule)] == \
        [(1, 4), (3, 2), (7, 1)]


def test_reads_from_file_like_stream():
    schedule = read_arrivals(io.StringIO("10 1\n10 2\n"))
    assert schedule.count == 2


def test_empty_input():
    schedule = parse_arrivals("")

    assert schedule.count == 0
    assert len(schedule.queue) == 0


def test_equal_arrival_times_are_allowed():
    schedule = parse_arrivals("3 1 3 1 3 1")
    assert schedule.count == 3


def test_signed_integers():
    """Explicit signs are accepted; service durations are not validated."""
    schedule = parse_arrivals("+2 -4")
    event = drain(schedule)[0]
    assert (event.time, event.serving) == (2, -4)


def test_order_violation():
    """
    An arrival earlier than the previous one is fatal and reports the
    1-based record index and both times.
    """
    with pytest.raises(OrderViolationError) as excinfo:
        parse_arrivals("5 1\n3 1\n")

    error = excinfo.value
    assert error.record == 2
    assert error.time == 3
    assert error.previous_time == 5
    assert error.exit_status == ExitStatus.ORDER_VIOLATION
    assert str(error) == "customer #2 out of order (time = 3, previous time = 5)"


def test_order_violation_later_in_stream():
    with pytest.raises(OrderViolationError) as excinfo:
        parse_arrivals("1 1 2 1 4 1 3 1 9 1")
    assert excinfo.value.record == 4


def test_negative_first_arrival_is_out_of_order():
    """The first record is compared against time 0."""
    with pytest.raises(OrderViolationError) as excinfo:
        parse_arrivals("-1 3")
    assert excinfo.value.record == 1
    assert excinfo.value.previous_time == 0


def test_malformed_token_ends_input(caplog):
    """
    In lenient mode a non-integer token ends the input like end of
    stream; earlier records are kept and a warning is logged.
    """
    with caplog.at_level(logging.WARNING, logger="bank_sim"):
        schedule = parse_arrivals("0 5\n2 x\n4 1\n")

    assert schedule.count == 1
    assert "token #4" in caplog.text


def test_unpaired_trailing_value_is_dropped(caplog):
    with caplog.at_level(logging.WARNING, logger="bank_sim"):
        schedule = parse_arrivals("0 5 7")

    assert schedule.count == 1
    assert "without a service duration" in caplog.text


def test_malformed_token_strict():
    with pytest.raises(MalformedInputError) as excinfo:
        parse_arrivals("0 5 abc 1", strict=True)

    error = excinfo.value
    assert error.token == "abc"
    assert error.position == 3
    assert error.exit_status == ExitStatus.MALFORMED_INPUT


def test_unpaired_trailing_value_strict():
    with pytest.raises(MalformedInputError) as excinfo:
        parse_arrivals("0 5 7", strict=True)
    assert excinfo.value.token == "7"


def test_order_violation_wins_over_later_garbage():
    """Errors are reported in stream order."""
    with pytest.raises(OrderViolationError):
        parse_arrivals("5 1 3 1 oops", strict=True)


def test_parsing_is_repeatable():
    text = "0 3 1 4 1 5 9 2"
    first = [(e.time, e.serving) for e in drain(parse_arrivals(text))]
    second = [(e.time, e.serving) for e in drain(parse_arrivals(text))]
    assert first == second


def test_non_ascii_digits_are_not_integers():
    """Only ASCII digits form integers; other scripts end the input."""
    assert parse_arrivals("٣ ٥").count == 0

    with pytest.raises(MalformedInputError) as excinfo:
        parse_arrivals("0 5 ٣ ٥", strict=True)
    assert excinfo.value.position == 3


def test_undecodable_bytes_end_input(tmp_path, caplog):
    """
    Invalid UTF-8 in a file becomes a non-integer token: earlier records
    are kept and the truncation is logged.
    """
    path = tmp_path / "customers.txt"
    path.write_bytes(b"0 5\n2 3\n\xff\xfe\n")

    with caplog.at_level(logging.WARNING, logger="bank_sim"):
        with open_arrivals(str(path)) as stream:
            schedule = read_arrivals(stream)

    assert schedule.count == 2
    assert "token #5" in caplog.text


def test_undecodable_bytes_strict(tmp_path):
    path = tmp_path / "customers.txt"
    path.write_bytes(b"0 5\n\xff 3\n")

    with open_arrivals(str(path)) as stream:
        with pytest.raises(MalformedInputError) as excinfo:
            read_arrivals(stream, strict=True)

    assert excinfo.value.position == 3


def test_fatal_errors_are_not_logged_above_debug(caplog):
    """The caller reports fatal input errors; the source only traces them."""
    with caplog.at_level(logging.INFO, logger="bank_sim"):
        with pytest.raises(OrderViolationError):
            parse_arrivals("5 1 3 1")
        with pytest.raises(MalformedInputError):
            parse_arrivals("0 1 x", strict=True)

    assert [r for r in caplog.records if r.levelno > logging.INFO] == []


def test_exit_status_belongs_to_concrete_errors():
    """The base class carries no exit status of its own."""
    assert not hasattr(BankSimError, "exit_status")
    assert OrderViolationError.exit_status == ExitStatus.ORDER_VIOLATION
    assert MalformedInputError.exit_status == ExitStatus.MALFORMED_INPUT
