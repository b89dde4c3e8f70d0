#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Selection and scroll reconciliation.

reconcile() restores the cursor invariants after anything that can change
the number of visible rows or the viewport size:

- 0 <= selected < total when total > 0, selected == 0 otherwise
- scroll_offset <= selected < scroll_offset + display_rows
- scroll_offset >= 0

Only the index is kept; if rows above the cursor disappear, the cursor
lands on whatever row now has that index (clamped to the last row).
"""

from typing import List, Optional

from lsftop.tui.app_state import AppState
from lsftop.tui.rows import VisibleRow, count_visible, row_at, visible_window


def total_rows(state: AppState) -> int:
    return count_visible(state.sorted_groups, state.expanded)


def reconcile(state: AppState) -> None:
    """Clamp the selection and scroll offset against the current rows."""
    cursor = state.cursor
    total = total_rows(state)
    if total == 0:
        cursor.selected = 0
        cursor.scroll_offset = 0
        return

    cursor.selected = min(max(cursor.selected, 0), total - 1)

    display_rows = state.display_rows
    if cursor.selected < cursor.scroll_offset:
        cursor.scroll_offset = cursor.selected
    elif cursor.selected >= cursor.scroll_offset + display_rows:
        cursor.scroll_offset = cursor.selected - display_rows + 1

    cursor.scroll_offset = max(0, cursor.scroll_offset)


def selected_row(state: AppState) -> Optional[VisibleRow]:
    """The row under the cursor, or None when nothing is visible."""
    return row_at(state.sorted_groups, state.expanded, state.cursor.selected)


def window_rows(state: AppState) -> List[VisibleRow]:
    """The rows currently on screen."""
    start = state.cursor.scroll_offset
    return visible_window(
        state.sorted_groups, state.expanded, start, start + state.display_rows
    )


def move_up(state: AppState, steps: int = 1) -> None:
    state.cursor.selected = max(0, state.cursor.selected - steps)


def move_down(state: AppState, steps: int = 1) -> None:
    """Move the cursor down; reconcile() clamps it at the last row."""
    state.cursor.selected += steps


def move_to_end(state: AppState) -> None:
    state.cursor.selected = max(0, total_rows(state) - 1)
