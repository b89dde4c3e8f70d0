#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Data models for lsftop.

Contains the job record, group and column dataclasses, the job status enum,
and the constants shared by the record sources and the TUI.
"""

from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Callable, Optional, Sequence, Tuple


# =============================================================================
# Constants
# =============================================================================

NO_GROUP = "No Group"  # Sentinel group key for jobs without a job group
EMPTY_PLACEHOLDER = "-"  # bjobs prints "-" for unset fields

# Field order of one job line, as produced by bjobs -o and the mock generator
FIELD_NAMES = (
    "job_id",
    "user",
    "status_code",
    "queue",
    "from_host",
    "exec_host",
    "name",
    "submit_time",
    "cpu_used",
    "memory",
    "group",
)


# =============================================================================
# Enums
# =============================================================================


class JobStatus(str, Enum):
    """Job state as reported by the scheduler."""
    RUNNING = "RUN"
    PENDING = "PEND"
    DONE = "DONE"
    EXITED = "EXIT"
    ZOMBIE = "ZOMBI"
    UNKNOWN = "UNKWN"
    UNRECOGNIZED = "?"


# Checked in order; first matching prefix wins
_STATUS_PREFIXES = (
    ("RUN", JobStatus.RUNNING),
    ("PEND", JobStatus.PENDING),
    ("DONE", JobStatus.DONE),
    ("EXIT", JobStatus.EXITED),
    ("ZOMBI", JobStatus.ZOMBIE),
    ("UNKWN", JobStatus.UNKNOWN),
)


def classify_status(code: str) -> JobStatus:
    """Map raw status text to a JobStatus.

    Matching is by prefix and case-insensitive. Anything that matches no
    known prefix (including empty text) is UNRECOGNIZED.

    Args:
        code: Status column text, e.g. "RUN" or "PEND"

    Returns:
        The JobStatus for the code.
    """
    text = (code or "").strip().upper()
    if not text:
        return JobStatus.UNRECOGNIZED
    for prefix, status in _STATUS_PREFIXES:
        if text.startswith(prefix):
            return status
    return JobStatus.UNRECOGNIZED


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class Record:
    """One job as reported by the record source.

    Records are immutable; a refresh replaces the whole record set.
    The status enum is derived from status_code once, at construction.
    """
    job_id: str
    user: str = ""
    status_code: str = ""
    queue: str = ""
    from_host: str = ""
    exec_host: str = ""
    name: str = ""
    submit_time: str = ""
    cpu_used: str = ""
    memory: str = ""
    group: Optional[str] = None
    status: JobStatus = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", classify_status(self.status_code))

    @property
    def group_key(self) -> str:
        """Group key used for grouping; NO_GROUP when the job has none."""
        if not self.group or self.group == EMPTY_PLACEHOLDER:
            return NO_GROUP
        return self.group

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Record":
        """Build a record from a split job line.

        Missing trailing fields default to an empty string; extra fields
        are ignored. An empty group field means no group.
        """
        values = [f.strip() for f in fields[: len(FIELD_NAMES)]]
        values += [""] * (len(FIELD_NAMES) - len(values))
        kwargs = dict(zip(FIELD_NAMES, values))
        kwargs["group"] = kwargs["group"] or None
        return cls(**kwargs)


@dataclass(frozen=True)
class Group:
    """A bucket of records sharing one group key."""
    key: str
    records: Tuple[Record, ...] = ()

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class Column:
    """One entry of the column registry.

    Attributes:
        label: Header text
        width: Display width in cells
        accessor: Returns the column's text for a record
        align: "left" or "right"
    """
    label: str
    width: int
    accessor: Callable[[Record], str]
    align: str = "left"

    def value(self, record: Record) -> str:
        """Field text for sorting and display; missing values are ""."""
        return self.accessor(record) or ""


COLUMNS: Tuple[Column, ...] = (
    Column("JOBID", 8, attrgetter("job_id"), align="right"),
    Column("USER", 10, attrgetter("user")),
    Column("STAT", 6, attrgetter("status_code")),
    Column("QUEUE", 10, attrgetter("queue")),
    Column("FROM_HOST", 15, attrgetter("from_host")),
    Column("EXEC_HOST", 15, attrgetter("exec_host")),
    Column("JOB_NAME", 20, attrgetter("name")),
    Column("SUBMIT_TIME", 15, attrgetter("submit_time")),
    Column("CPU_USED", 10, attrgetter("cpu_used"), align="right"),
    Column("MEM", 8, attrgetter("memory"), align="right"),
)

# Sorting by this column also orders the group list by group key
NAME_COLUMN = 6
