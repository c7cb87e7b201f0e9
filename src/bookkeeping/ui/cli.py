from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, getsignal, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bookkeeping.app import (
    list_data_passes,
    schedule_data_pass_synchronization,
    synchronize_data_passes,
)
from bookkeeping.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from bookkeeping.domain.model import DataPass
    from bookkeeping.domain.synchronization import SynchronizationReport

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise bookkeeping data from MonALISA")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Run one data-pass synchronization")
    sync.add_argument(
        "--year-lower-limit",
        type=int,
        help="Only synchronize data passes of LHC periods from this year on (defaults to config)",
    )

    schedule = subparsers.add_parser(
        "schedule",
        help="Synchronize data passes now and then periodically until interrupted",
    )
    schedule.add_argument(
        "--interval",
        type=float,
        help="Seconds between two synchronizations (defaults to config)",
    )
    schedule.add_argument(
        "--year-lower-limit",
        type=int,
        help="Only synchronize data passes of LHC periods from this year on (defaults to config)",
    )

    data_passes = subparsers.add_parser("data-passes", help="List stored data passes")
    data_passes.add_argument(
        "--period",
        type=str,
        help="Only list data passes of this LHC period (e.g. LHC23f)",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "schedule" and args.interval is not None and args.interval <= 0:
        raise ValueError("Interval must be positive")


def _log_report(report: SynchronizationReport | None) -> None:
    if report is None:
        log.warning("Synchronization skipped: another run is in progress")
        return
    if report.failed_detail_fetches:
        log.warning(
            "Details could not be fetched for: %s", ", ".join(report.failed_detail_fetches)
        )
    if report.skipped:
        log.warning("Skipped data passes without LHC period: %s", ", ".join(report.skipped))


def _print_data_passes(data_passes: Sequence[DataPass]) -> None:
    for data_pass in data_passes:
        print(  # noqa: T201
            f"{data_pass.name}\truns={len(data_pass.run_numbers)}\t"
            f"last_run={data_pass.last_run_number}\t{data_pass.description or ''}"
        )


def _run_schedule(args: argparse.Namespace) -> None:
    schedule = schedule_data_pass_synchronization(
        interval_seconds=args.interval,
        year_lower_limit=args.year_lower_limit,
    )

    def stop_handler(_signal_received: int, _frame: FrameType | None) -> None:
        log.info("Stopping scheduled synchronization (Ctrl+C)")
        schedule.stop()

    previous_handler = getsignal(SIGINT)
    signal(SIGINT, stop_handler)
    try:
        schedule.run_forever()
    finally:
        signal(SIGINT, previous_handler)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync":
            report = synchronize_data_passes(year_lower_limit=parsed_args.year_lower_limit)
            _log_report(report)
        elif parsed_args.command == "schedule":
            _run_schedule(parsed_args)
        elif parsed_args.command == "data-passes":
            _print_data_passes(list_data_passes(period_name=parsed_args.period))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
