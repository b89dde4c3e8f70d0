#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Grouping and sorting of job records.

group_records() buckets jobs by job group; sort_groups() orders each
group's members by a registry column. Both return new Group objects and
leave their inputs untouched.

Field values are compared as case-insensitive strings, including numeric
looking fields such as JOBID and MEM ("9MB" sorts after "10MB").
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from lsftop.models import COLUMNS, NAME_COLUMN, Group, Record


def group_records(records: Iterable[Record]) -> List[Group]:
    """
    Partition records into groups, one per distinct group key.

    Groups are ordered by plain string ordering of their keys; members keep
    their input order. Jobs without a group land in the NO_GROUP bucket.

    Args:
        records: Jobs from the record store

    Returns:
        Non-empty groups in key order
    """
    buckets: Dict[str, List[Record]] = defaultdict(list)
    for record in records:
        buckets[record.group_key].append(record)
    return [Group(key=key, records=tuple(buckets[key])) for key in sorted(buckets)]


def sort_groups(groups: Iterable[Group], column: int, descending: bool = False) -> List[Group]:
    """
    Sort each group's members by a column, and the groups themselves when
    the column is the job name column.

    The sort is stable in both directions: members that compare equal keep
    their prior relative order, so re-sorting unchanged data never reshuffles
    rows.

    Args:
        groups: Groups as produced by group_records()
        column: Index into COLUMNS
        descending: Reverse the order

    Returns:
        New list of new Group objects
    """
    col = COLUMNS[column]

    def member_key(record: Record) -> str:
        return col.value(record).lower()

    result = [
        Group(
            key=group.key,
            records=tuple(sorted(group.records, key=member_key, reverse=descending)),
        )
        for group in groups
    ]
    if column == NAME_COLUMN:
        result.sort(key=lambda group: group.key.lower(), reverse=descending)
    return result
