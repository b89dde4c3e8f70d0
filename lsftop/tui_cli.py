#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Command-line entry point for lsftop.

Usage:
    lsftop                        # Live dashboard of bjobs output
    lsftop -i 10                  # Refresh every 10 seconds
    lsftop --test random          # Random mock jobs, no LSF needed
    lsftop --test file -f jobs.txt
    lsftop --command "python3 -m lsftop.mockdata"
    lsftop --summary              # One-shot grouped text summary (no TUI)
"""

import argparse
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from lsftop._version import __version__
from lsftop.config import get_bjobs_command, get_fetch_timeout, get_refresh_interval
from lsftop.debug_logger import get_logger
from lsftop.models import COLUMNS
from lsftop.sources import (
    BjobsSource,
    CommandSource,
    FileSource,
    RandomSource,
    RecordSource,
    RecordSourceError,
)
from lsftop.tui.app_state import SortState
from lsftop.tui.formatting import format_summary
from lsftop.tui.grouping import group_records, sort_groups

DEFAULT_DATA_FILE = "mock_bjobs_output.txt"
SORT_CHOICES = [column.label.lower() for column in COLUMNS]


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lsftop",
        description="lsftop - interactive top-like viewer for LSF jobs, grouped by job group",
        epilog="Keys: arrows/jk move, left/right change sort column, s reverse, "
        "Enter expand/collapse, e/c expand/collapse all, r refresh, q quit",
    )
    parser.add_argument(
        "--version", action="version", version=f"lsftop {__version__}"
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=_positive_float,
        help="Refresh interval in seconds (default: settings file, else 5)",
    )
    parser.add_argument(
        "-t",
        "--test",
        choices=["random", "file"],
        help="Offline mode: random mock jobs, or jobs read from --file",
    )
    parser.add_argument(
        "-f",
        "--file",
        default=DEFAULT_DATA_FILE,
        help=f"Job data file for --test file (default: {DEFAULT_DATA_FILE})",
    )
    parser.add_argument(
        "--command",
        help="Run this command instead of bjobs; its output must use the bjobs layout",
    )
    parser.add_argument("--seed", type=int, help="Random seed for --test random")
    parser.add_argument(
        "--sort",
        choices=SORT_CHOICES,
        default=SORT_CHOICES[0],
        help="Initial sort column (default: jobid)",
    )
    parser.add_argument(
        "--descending", action="store_true", help="Start with descending sort"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Print a grouped summary once and exit (no TUI)"
    )
    return parser


def build_source(args: argparse.Namespace) -> RecordSource:
    """Pick the record source from parsed flags and settings."""
    timeout = get_fetch_timeout()
    if args.test == "random":
        return RandomSource(seed=args.seed)
    if args.test == "file":
        return FileSource(Path(args.file))
    if args.command:
        return CommandSource(shlex.split(args.command), timeout=timeout)
    return BjobsSource(get_bjobs_command(), timeout=timeout)


def run_summary(source: RecordSource, sort: SortState) -> int:
    """Fetch once and print every group with its jobs. Returns an exit code."""
    try:
        records = source.fetch()
    except RecordSourceError as e:
        get_logger().fetch_error(source.label, str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    groups = sort_groups(group_records(records), sort.column, sort.descending)
    print(format_summary(groups, color=sys.stdout.isatty()))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is not None:
        try:
            command_argv = shlex.split(args.command)
        except ValueError as e:
            get_logger().config_error(f"bad --command: {e}")
            parser.error(f"--command: {e}")
        if not command_argv:
            get_logger().config_error("empty --command")
            parser.error("--command must not be empty")
    if args.seed is not None and args.test != "random":
        get_logger().config_error("--seed without --test random")
        parser.error("--seed requires --test random")

    interval = args.interval or get_refresh_interval()
    sort = SortState(column=SORT_CHOICES.index(args.sort), descending=args.descending)
    source = build_source(args)

    if args.summary:
        sys.exit(run_summary(source, sort))

    try:
        from lsftop.tui.app import run_app
    except ImportError as e:
        print(f"Error: TUI requires textual package: {e}", file=sys.stderr)
        print("Install with: pip install textual", file=sys.stderr)
        sys.exit(1)
    run_app(source, refresh_interval=interval, sort=sort)


if __name__ == "__main__":
    main()
