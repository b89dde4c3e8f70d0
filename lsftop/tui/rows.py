#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Visible rows: the flattened view of groups plus expand state.

The sequence is: for each group, its header row, followed by its members
when the group is expanded. It is recomputed from its inputs on demand and
never stored; row_at() and visible_window() skip whole groups by count
instead of building the full list.
"""

from dataclasses import dataclass
from itertools import islice
from typing import Iterator, List, Mapping, Optional, Sequence, Union

from lsftop.models import Group, Record


@dataclass(frozen=True)
class HeaderRow:
    """A group header line."""

    group: Group
    expanded: bool


@dataclass(frozen=True)
class MemberRow:
    """A job inside an expanded group."""

    group: Group
    record: Record


VisibleRow = Union[HeaderRow, MemberRow]


def _is_open(group: Group, expanded: Mapping[str, bool]) -> bool:
    return expanded.get(group.key, False)


def _group_size(group: Group, expanded: Mapping[str, bool]) -> int:
    return 1 + (group.count if _is_open(group, expanded) else 0)


def iter_visible_rows(
    groups: Sequence[Group], expanded: Mapping[str, bool]
) -> Iterator[VisibleRow]:
    """Yield visible rows in display order."""
    for group in groups:
        is_open = _is_open(group, expanded)
        yield HeaderRow(group=group, expanded=is_open)
        if is_open:
            for record in group.records:
                yield MemberRow(group=group, record=record)


def count_visible(groups: Sequence[Group], expanded: Mapping[str, bool]) -> int:
    """Number of header rows plus members of expanded groups."""
    return sum(_group_size(group, expanded) for group in groups)


def row_at(
    groups: Sequence[Group], expanded: Mapping[str, bool], index: int
) -> Optional[VisibleRow]:
    """
    Get the visible row at a 0-based index.

    Returns:
        The row, or None when index is negative or past the end.
    """
    if index < 0:
        return None
    for group in groups:
        size = _group_size(group, expanded)
        if index < size:
            if index == 0:
                return HeaderRow(group=group, expanded=_is_open(group, expanded))
            return MemberRow(group=group, record=group.records[index - 1])
        index -= size
    return None


def visible_window(
    groups: Sequence[Group], expanded: Mapping[str, bool], start: int, stop: int
) -> List[VisibleRow]:
    """Rows with indices in [start, stop), as shown in the viewport."""
    start = max(0, start)
    if stop <= start:
        return []
    skipped = 0
    first_group = 0
    for first_group, group in enumerate(groups):
        size = _group_size(group, expanded)
        if skipped + size > start:
            break
        skipped += size
    else:
        return []
    rows = iter_visible_rows(groups[first_group:], expanded)
    return list(islice(rows, start - skipped, stop - skipped))
