#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Record sources for lsftop.

Every source returns the full current job set as a tuple of Records, or
raises RecordSourceError. The dashboard treats a failed fetch as an empty
job set for that cycle and keeps running.

Job lines carry eleven fields in FIELD_NAMES order. Tab-delimited lines are
split on tabs, so fields such as the submit time may contain spaces.
Other lines are split on runs of whitespace, which only lines up when no
field contains spaces: a submit time like "Oct 17 09:41:05" shifts every
later field. The built-in bjobs command asks for tab-delimited output.
Invalid UTF-8 bytes are replaced rather than failing the fetch.
"""

import random
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from lsftop.mockdata import generate_lines
from lsftop.models import FIELD_NAMES, Record

# bjobs -o field names, in FIELD_NAMES order
BJOBS_FIELDS = (
    "jobid",
    "user",
    "stat",
    "queue",
    "from_host",
    "exec_host",
    "job_name",
    "submit_time",
    "cpu_used",
    "mem",
    "job_group",
)

DEFAULT_BJOBS_COMMAND = [
    "bjobs",
    "-u",
    "all",
    "-noheader",
    "-o",
    " ".join(BJOBS_FIELDS) + " delimiter='\t'",
]


class RecordSourceError(Exception):
    """A record source could not produce a job set."""


def parse_line(line: str) -> Optional[Record]:
    """
    Parse one job line into a Record.

    Args:
        line: A line of bjobs-style output

    Returns:
        Record, or None for blank lines. Short lines are padded with "".
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None
    if "\t" in line:
        fields = line.split("\t")
    else:
        fields = line.split(None, len(FIELD_NAMES) - 1)
    return Record.from_fields(fields)


def parse_output(text: str) -> Tuple[Record, ...]:
    """Parse multi-line job output, skipping blank lines."""
    records = (parse_line(line) for line in text.splitlines())
    return tuple(r for r in records if r is not None)


class RecordSource(ABC):
    """Base class for anything that can produce the current job set."""

    #: Short description shown in the title bar and the debug log
    label: str = "source"

    @abstractmethod
    def fetch(self) -> Tuple[Record, ...]:
        """Return the current job set.

        Raises:
            RecordSourceError: if the jobs could not be read
        """


class CommandSource(RecordSource):
    """Runs an external command and parses its stdout as job lines.

    Used both for the scheduler query and for generator processes that print
    the same layout. The command is abandoned after ``timeout`` seconds.
    """

    def __init__(self, argv: Sequence[str], timeout: float = 30.0) -> None:
        if not argv:
            raise ValueError("CommandSource needs a command")
        self.argv = list(argv)
        self.timeout = timeout
        self.label = Path(self.argv[0]).name

    def fetch(self) -> Tuple[Record, ...]:
        try:
            result = subprocess.run(
                self.argv,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise RecordSourceError(f"{self.argv[0]}: command not found") from e
        except subprocess.TimeoutExpired as e:
            raise RecordSourceError(
                f"{self.argv[0]}: no response after {self.timeout:g}s"
            ) from e
        except OSError as e:
            raise RecordSourceError(f"{self.argv[0]}: {e}") from e

        if result.returncode != 0:
            err = (result.stderr or "").strip().splitlines()
            detail = err[-1] if err else f"exit status {result.returncode}"
            raise RecordSourceError(f"{self.argv[0]}: {detail}")

        return parse_output(result.stdout)


class BjobsSource(CommandSource):
    """Queries LSF with bjobs for all users' jobs."""

    def __init__(self, argv: Optional[Sequence[str]] = None, timeout: float = 30.0) -> None:
        super().__init__(argv or DEFAULT_BJOBS_COMMAND, timeout=timeout)
        self.label = "bjobs"


class FileSource(RecordSource):
    """Reads job lines from a file, re-reading it on every fetch."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.label = f"file:{self.path.name}"

    def fetch(self) -> Tuple[Record, ...]:
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise RecordSourceError(f"{self.path}: {e.strerror or e}") from e
        return parse_output(text)


class RandomSource(RecordSource):
    """Generates a fresh mock job set in-process on every fetch."""

    label = "random"

    def __init__(self, count: int = 100, seed: Optional[int] = None) -> None:
        self.count = count
        self._rng = random.Random(seed)

    def fetch(self) -> Tuple[Record, ...]:
        return parse_output("\n".join(generate_lines(self.count, rng=self._rng)))


class StaticSource(RecordSource):
    """Returns a fixed job set supplied by the caller."""

    label = "static"

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self.records: Tuple[Record, ...] = tuple(records)

    def fetch(self) -> Tuple[Record, ...]:
        return self.records

