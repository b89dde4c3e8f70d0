# SPDX-License-Identifier: MIT
"""State management dataclasses for the TUI app.

All mutable dashboard state lives in one AppState owned by the app's
event loop. The dataclasses group related state together:

- SortState: Column index and direction for sorting
- CursorState: Selected visible-row index and scroll offset
- AppState: Record store, derived groups, expand map, and the above
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from lsftop.models import Group, Record

RESERVED_ROWS = 3  # Title, column header and footer lines
DEFAULT_VIEWPORT_HEIGHT = 24


@dataclass
class SortState:
    """Sorting state.

    column indexes the column registry (lsftop.models.COLUMNS).
    """

    column: int = 0
    descending: bool = False


@dataclass
class CursorState:
    """Selection and scroll position over the visible rows."""

    selected: int = 0
    scroll_offset: int = 0


@dataclass
class AppState:
    """Top-level app state container.

    ``groups`` is the grouping of ``records`` in group-key order;
    ``sorted_groups`` is what the flattener and renderer see. Both are
    rebuilt from ``records`` and never edited in place.
    """

    records: Tuple[Record, ...] = ()
    groups: List[Group] = field(default_factory=list)
    sorted_groups: List[Group] = field(default_factory=list)
    expanded: Dict[str, bool] = field(default_factory=dict)
    sort: SortState = field(default_factory=SortState)
    cursor: CursorState = field(default_factory=CursorState)
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    paused: bool = False
    last_refresh: Optional[datetime] = None
    last_error: Optional[str] = None

    def is_expanded(self, key: str) -> bool:
        """Absent keys are collapsed."""
        return self.expanded.get(key, False)

    @property
    def display_rows(self) -> int:
        """Rows available for the job list, never less than one."""
        return max(1, self.viewport_height - RESERVED_ROWS)
