#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Shared formatting utilities for the dashboard and the text summary.

Builds the logical lines the render surface shows (title, column header,
group headers, job lines, footer) and the color definitions used by both
the Textual app (Rich styles) and --summary (ANSI codes).
"""

from collections import Counter
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from rich.text import Text

from lsftop.models import COLUMNS, Column, Group, JobStatus, Record
from lsftop.tui.app_state import AppState, SortState
from lsftop.tui.rows import HeaderRow, VisibleRow

# Semantic color mapping for Rich styles (color names, not ANSI codes)
STATUS_COLORS = {
    JobStatus.RUNNING: "green",
    JobStatus.PENDING: "yellow",
    JobStatus.DONE: "cyan",
    JobStatus.EXITED: "bold red",
    JobStatus.ZOMBIE: "magenta",
    JobStatus.UNKNOWN: "dim",
    JobStatus.UNRECOGNIZED: "",
}

# ANSI color codes for terminal output
ANSI_COLORS = {
    JobStatus.RUNNING: "\033[32m",  # green
    JobStatus.PENDING: "\033[33m",  # yellow
    JobStatus.DONE: "\033[36m",  # cyan
    JobStatus.EXITED: "\033[1;31m",  # bold red
    JobStatus.ZOMBIE: "\033[35m",  # magenta
    JobStatus.UNKNOWN: "\033[2m",  # dim
    JobStatus.UNRECOGNIZED: "",
    "group": "\033[1m",  # bold
    "reset": "\033[0m",
}

GROUP_STYLE = "bold"
HEADER_STYLE = "bold reverse"
SELECTED_STYLE = "reverse"
EXPANDED_MARK = "▼"
COLLAPSED_MARK = "▶"
SORT_ASC_MARK = "^"
SORT_DESC_MARK = "v"
MEMBER_INDENT = "  "

FOOTER_HINT = (
    "q:Quit  ↑↓:Move  ←→:Sort column  s:Direction  "
    "Enter:Expand  e:Expand all  c:Collapse all  r:Refresh  p:Pause"
)

# Order of the per-status counts in the title
STATUS_ORDER = (
    JobStatus.RUNNING,
    JobStatus.PENDING,
    JobStatus.DONE,
    JobStatus.EXITED,
    JobStatus.ZOMBIE,
    JobStatus.UNKNOWN,
    JobStatus.UNRECOGNIZED,
)


def fit(text: str, width: int, align: str = "left") -> str:
    """Truncate or pad text to exactly width cells."""
    text = text[:width]
    return text.rjust(width) if align == "right" else text.ljust(width)


def format_cell(column: Column, record: Record) -> str:
    return fit(column.value(record), column.width, column.align)


def format_record_line(record: Record, columns: Sequence[Column] = COLUMNS) -> str:
    """A job as one line of fixed-width cells, indented under its group."""
    return MEMBER_INDENT + " ".join(format_cell(col, record) for col in columns)


def format_group_line(group: Group, expanded: bool) -> str:
    mark = EXPANDED_MARK if expanded else COLLAPSED_MARK
    noun = "job" if group.count == 1 else "jobs"
    return f"{mark} {group.key} ({group.count} {noun})"


def format_column_header(sort: Optional[SortState], columns: Sequence[Column] = COLUMNS) -> str:
    """Column labels, with the active sort column marked ^ (asc) or v (desc)."""
    cells = []
    for index, column in enumerate(columns):
        label = column.label
        if sort is not None and index == sort.column:
            label += SORT_DESC_MARK if sort.descending else SORT_ASC_MARK
        cells.append(fit(label, column.width, column.align))
    return MEMBER_INDENT + " ".join(cells)


def status_counts(records: Iterable[Record]) -> str:
    """Per-status counts like "3 RUN, 1 PEND", in STATUS_ORDER."""
    counts = Counter(record.status for record in records)
    return ", ".join(
        f"{counts[status]} {status.value}" for status in STATUS_ORDER if counts[status]
    )


def format_title(
    state: AppState, source_label: str = "", now: Optional[datetime] = None
) -> str:
    """Title line: job and group counts, status breakdown, sort, source, time."""
    now = now or datetime.now()
    column = COLUMNS[state.sort.column]
    direction = "desc" if state.sort.descending else "asc"
    parts = [f"lsftop - {len(state.records)} jobs in {len(state.groups)} groups"]
    counts = status_counts(state.records)
    if counts:
        parts.append(counts)
    parts.append(f"sort: {column.label} {direction}")
    if source_label:
        parts.append(source_label)
    if state.paused:
        parts.append("[PAUSED]")
    parts.append(now.strftime("%H:%M:%S"))
    return " | ".join(parts)


def render_row(row: VisibleRow, selected: bool = False, width: Optional[int] = None) -> Text:
    """Render one visible row as Rich Text for the job list widget."""
    if isinstance(row, HeaderRow):
        text = Text(format_group_line(row.group, row.expanded), style=GROUP_STYLE)
    else:
        line = format_record_line(row.record)
        text = Text(line, style=STATUS_COLORS.get(row.record.status, ""))
    if width is not None:
        text.truncate(width, pad=selected)
    if selected:
        text.stylize(SELECTED_STYLE)
    return text


def render_rows(rows: Sequence[VisibleRow], selected_offset: int, width: Optional[int] = None) -> Text:
    """Join window rows into one Text; selected_offset is relative to the window."""
    lines: List[Text] = [
        render_row(row, selected=(i == selected_offset), width=width)
        for i, row in enumerate(rows)
    ]
    if not lines:
        return Text("No jobs", style="dim")
    return Text("\n").join(lines)


def format_summary(groups: Sequence[Group], color: bool = True) -> str:
    """
    One-shot text summary: every group header followed by its jobs.

    Args:
        groups: Sorted groups
        color: Whether to use ANSI colors

    Returns:
        Multi-line string for printing
    """
    reset = ANSI_COLORS["reset"] if color else ""
    group_color = ANSI_COLORS["group"] if color else ""
    lines = [format_column_header(None)]
    for group in groups:
        lines.append(f"{group_color}{format_group_line(group, True)}{reset}")
        for record in group.records:
            status_color = ANSI_COLORS.get(record.status, "") if color else ""
            line = format_record_line(record)
            lines.append(f"{status_color}{line}{reset}" if status_color else line)
    if not groups:
        lines.append("No jobs")
    return "\n".join(lines)
