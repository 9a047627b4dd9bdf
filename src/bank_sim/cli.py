# src/bank_sim/cli.py

"""
Command-line front end: `bank-sim [datafile]`.

Reads arrival records from `datafile`, or from standard input when no
file is given, runs the simulation and prints one line per event
followed by the final statistics. Exit statuses are listed in
`bank_sim.constants.ExitStatus`.
"""

import argparse
import io
import logging
import sys
from typing import List, Optional, TextIO

from .constants import ExitStatus
from .engine import BankSimulation
from .errors import BankSimError
from .measure import Measure
from .report import format_event, format_summary
from .source import (
    INPUT_ENCODING, INPUT_ERRORS, ArrivalSchedule, open_arrivals, read_arrivals
)

log = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Simulate a single-teller bank queue from a list of "
                    "'<arrival_time> <service_duration>' pairs."
    )
    parser.add_argument(
        "datafile", nargs="?",
        help="file holding the arrival records (default: standard input)"
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="fail on non-integer or unpaired input instead of "
             "stopping at it"
    )
    parser.add_argument(
        "--plot", metavar="PATH",
        help="save wait-time and teller-activity plots to PATH "
             "(needs the 'analysis' extra)"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="log progress to stderr (-vv for per-event detail)"
    )
    return parser


def configure_logging(verbosity: int):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr,
                        force=True)


def _load(args: argparse.Namespace) -> ArrivalSchedule:
    """Reads the schedule from the requested source. Raises OSError on open."""
    if args.datafile is None:
        # Piped input gets the same decoding as files
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(encoding=INPUT_ENCODING, errors=INPUT_ERRORS)
        return read_arrivals(sys.stdin, strict=args.strict)
    with open_arrivals(args.datafile) as stream:
        return read_arrivals(stream, strict=args.strict)


def main(argv: Optional[List[str]] = None, prog: Optional[str] = None) -> int:
    """
    Runs the command line and returns the process exit status.

    argparse exits with status 2 by itself on usage errors.
    """
    parser = build_parser(prog)
    args = parser.parse_args(argv)
    prog = parser.prog
    configure_logging(args.verbose)

    plotting = None
    if args.plot:
        try:
            from .analysis import plotting
        except ImportError:
            parser.error("--plot needs matplotlib and seaborn: "
                         "pip install bank-sim[analysis]")

    try:
        schedule = _load(args)
    except OSError as e:
        log.debug(f"Opening {args.datafile!r} failed: {e}")
        print(f"{prog}: couldn't open {args.datafile}", file=sys.stderr)
        return ExitStatus.FILE_OPEN_FAILURE
    except BankSimError as e:
        print(str(e), file=sys.stderr)
        return e.exit_status

    out: TextIO = sys.stdout
    measure = Measure()
    simulation = BankSimulation(schedule, measure=measure)
    result = simulation.run(lambda record: print(format_event(record),
                                                 file=out))
    for line in format_summary(result):
        print(line, file=out)

    if plotting is not None:
        plotting.save_run_figure(measure, result, args.plot)

    return ExitStatus.OK


def run(prog: Optional[str] = None):
    """Console-script entry point."""
    sys.exit(int(main(prog=prog)))
