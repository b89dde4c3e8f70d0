#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Command dispatch for the dashboard.

Maps decoded key tokens to Commands and applies Commands to an AppState.
Everything here is a pure state transition: no I/O, no widgets. QUIT and
REFRESH need the app (to exit or to start a fetch), so dispatch() leaves
them to the caller; the app applies the fetched records with
apply_records().

Every transition ends with reconcile(), so the cursor invariants hold after
each call.
"""

from enum import Enum
from typing import Dict, Iterable

from lsftop.models import COLUMNS, Record
from lsftop.tui.app_state import AppState
from lsftop.tui.grouping import group_records, sort_groups
from lsftop.tui.navigation import (
    move_down,
    move_to_end,
    move_up,
    reconcile,
    selected_row,
)
from lsftop.tui.rows import HeaderRow


class Command(str, Enum):
    """Discrete input events."""
    QUIT = "quit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    SORT_PREV = "sort_prev"
    SORT_NEXT = "sort_next"
    TOGGLE_SORT_DIRECTION = "toggle_sort_direction"
    TOGGLE_EXPAND = "toggle_expand"
    EXPAND_ALL = "expand_all"
    COLLAPSE_ALL = "collapse_all"
    REFRESH = "refresh"


# Textual key names -> command
KEY_COMMANDS: Dict[str, Command] = {
    "q": Command.QUIT,
    "up": Command.MOVE_UP,
    "k": Command.MOVE_UP,
    "down": Command.MOVE_DOWN,
    "j": Command.MOVE_DOWN,
    "pageup": Command.PAGE_UP,
    "pagedown": Command.PAGE_DOWN,
    "home": Command.HOME,
    "end": Command.END,
    "left": Command.SORT_PREV,
    "h": Command.SORT_PREV,
    "right": Command.SORT_NEXT,
    "l": Command.SORT_NEXT,
    "s": Command.TOGGLE_SORT_DIRECTION,
    "enter": Command.TOGGLE_EXPAND,
    "space": Command.TOGGLE_EXPAND,
    "e": Command.EXPAND_ALL,
    "c": Command.COLLAPSE_ALL,
    "r": Command.REFRESH,
}


def resort(state: AppState) -> None:
    """Rebuild sorted_groups from the key-ordered groups and the sort state."""
    state.sorted_groups = sort_groups(state.groups, state.sort.column, state.sort.descending)


def apply_records(state: AppState, records: Iterable[Record]) -> None:
    """
    Replace the record store with a new job set.

    Regroups and re-sorts. Expand and sort state are left alone, so a group
    that disappears and later comes back keeps its expand flag.
    """
    state.records = tuple(records)
    state.groups = group_records(state.records)
    resort(state)
    reconcile(state)


def set_viewport(state: AppState, height: int) -> None:
    """Record a new terminal height and reconcile."""
    state.viewport_height = height
    reconcile(state)


def toggle_expand(state: AppState) -> None:
    """Flip the group under the cursor; no-op on a job row."""
    row = selected_row(state)
    if isinstance(row, HeaderRow):
        state.expanded[row.group.key] = not state.is_expanded(row.group.key)


def set_all_expanded(state: AppState, value: bool) -> None:
    """Expand or collapse every group in the current snapshot."""
    for group in state.groups:
        state.expanded[group.key] = value


def change_sort_column(state: AppState, step: int) -> None:
    state.sort.column = (state.sort.column + step) % len(COLUMNS)
    resort(state)


def toggle_sort_direction(state: AppState) -> None:
    state.sort.descending = not state.sort.descending
    resort(state)


def dispatch(state: AppState, command: Command) -> None:
    """
    Apply a command to the state, then reconcile.

    QUIT and REFRESH only reconcile; the app performs them.
    """
    if command is Command.MOVE_UP:
        move_up(state)
    elif command is Command.MOVE_DOWN:
        move_down(state)
    elif command is Command.PAGE_UP:
        move_up(state, state.display_rows)
    elif command is Command.PAGE_DOWN:
        move_down(state, state.display_rows)
    elif command is Command.HOME:
        state.cursor.selected = 0
    elif command is Command.END:
        move_to_end(state)
    elif command is Command.SORT_PREV:
        change_sort_column(state, -1)
    elif command is Command.SORT_NEXT:
        change_sort_column(state, 1)
    elif command is Command.TOGGLE_SORT_DIRECTION:
        toggle_sort_direction(state)
    elif command is Command.TOGGLE_EXPAND:
        toggle_expand(state)
    elif command is Command.EXPAND_ALL:
        set_all_expanded(state, True)
    elif command is Command.COLLAPSE_ALL:
        set_all_expanded(state, False)
    reconcile(state)
