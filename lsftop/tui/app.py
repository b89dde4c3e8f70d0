#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Main TUI application for lsftop.

Shows LSF jobs grouped by job group, refreshed on a fixed interval:
- Title line with job counts, status breakdown and active sort
- Column header marking the sort column and direction
- Scrolling list of group headers and, for expanded groups, their jobs
- Footer with key hints

All dashboard state lives in one AppState owned by the app's event loop.
Fetches run in a worker thread and hand back an immutable record tuple,
which is applied on the event loop between renders.
"""

import asyncio
import time
from datetime import datetime
from typing import Iterable, Optional

from rich.text import Text
from textual import events, work
from textual.app import App, ComposeResult, SystemCommand
from textual.binding import Binding
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Static

from lsftop.debug_logger import get_logger
from lsftop.sources import RecordSource, RecordSourceError
from lsftop.tui.app_state import AppState, SortState
from lsftop.tui.commands import (
    KEY_COMMANDS,
    Command,
    apply_records,
    dispatch,
    set_viewport,
)
from lsftop.tui.formatting import (
    FOOTER_HINT,
    HEADER_STYLE,
    format_column_header,
    format_title,
    render_rows,
)
from lsftop.tui.navigation import window_rows

DEFAULT_REFRESH_INTERVAL = 5.0


def _command_bindings() -> list:
    """Hidden bindings for every navigation/sort/expand key."""
    return [
        Binding(key, f"command('{command.value}')", command.value, show=False)
        for key, command in KEY_COMMANDS.items()
        if command not in (Command.QUIT, Command.REFRESH)
    ]


class LsfTopApp(App):
    """
    Textual application for monitoring LSF jobs.

    Displays jobs grouped by job group with collapsible groups,
    column sorting and keyboard navigation.
    """

    TITLE = "lsftop"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("p", "toggle_pause", "Pause"),
        *_command_bindings(),
    ]

    def __init__(
        self,
        source: RecordSource,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
        sort: Optional[SortState] = None,
    ) -> None:
        """
        Initialize the app.

        Args:
            source: Where jobs come from on each refresh
            refresh_interval: Seconds between automatic refreshes
            sort: Initial sort column and direction (optional)
        """
        super().__init__()
        self.state = AppState(sort=sort or SortState())
        self.source = source
        self.refresh_interval = refresh_interval
        self._refresh_timer = None

    def get_system_commands(self, screen: Screen) -> Iterable[SystemCommand]:
        """Add custom commands to the command palette."""
        yield from super().get_system_commands(screen)
        yield SystemCommand("Refresh", "Fetch jobs now", self.action_refresh)
        yield SystemCommand(
            "Toggle Pause", "Pause or resume auto-refresh", self.action_toggle_pause
        )
        yield SystemCommand(
            "Expand All Groups",
            "Show the jobs of every group",
            lambda: self.action_command(Command.EXPAND_ALL.value),
        )
        yield SystemCommand(
            "Collapse All Groups",
            "Show only group headers",
            lambda: self.action_command(Command.COLLAPSE_ALL.value),
        )

    def compose(self) -> ComposeResult:
        """Compose the app layout: title, column header, job list, footer."""
        yield Static(id="title")
        yield Static(id="column-header")
        yield Static(id="job-list")
        yield Static(FOOTER_HINT, id="footer")

    def on_mount(self) -> None:
        """Start the first fetch and the refresh timer."""
        get_logger().session_start(self.source.label, self.refresh_interval)
        set_viewport(self.state, self.size.height)
        self._render_view()
        self.refresh_records()
        self._refresh_timer = self.set_interval(self.refresh_interval, self._on_refresh_timer)

    def on_resize(self, event: events.Resize) -> None:
        set_viewport(self.state, event.size.height)
        self._render_view()

    def _on_refresh_timer(self) -> None:
        """Timer callback - updates the clock and starts a fetch unless paused."""
        if not self.state.paused:
            self.refresh_records()
        else:
            self._render_title()

    @work(exclusive=True, group="fetch")
    async def refresh_records(self) -> None:
        """Fetch jobs off the event loop, then apply them here.

        A newer refresh cancels an older one still waiting on its fetch.
        A failed fetch counts as an empty job set for this cycle.
        """
        started = time.monotonic()
        try:
            records = await asyncio.to_thread(self.source.fetch)
        except RecordSourceError as e:
            self.state.last_error = str(e)
            self.log.warning(f"Fetch failed: {e}")
            get_logger().fetch_error(self.source.label, str(e))
            self.notify(f"Fetch failed: {e}", severity="error")
            records = ()
        else:
            self.state.last_error = None

        apply_records(self.state, records)
        self.state.last_refresh = datetime.now()
        get_logger().refresh(
            self.source.label,
            len(self.state.records),
            len(self.state.groups),
            (time.monotonic() - started) * 1000,
        )
        self._render_view()

    def action_command(self, name: str) -> None:
        """Apply a navigation, sort or expand command and redraw."""
        command = Command(name)
        dispatch(self.state, command)
        get_logger().command(name, self.state.cursor.selected, self.state.cursor.scroll_offset)
        self._render_view()

    def action_refresh(self) -> None:
        """Fetch jobs now instead of waiting for the timer."""
        self.refresh_records()

    def action_toggle_pause(self) -> None:
        """Toggle pause/resume of auto-refresh."""
        self.state.paused = not self.state.paused
        status = "PAUSED" if self.state.paused else "RUNNING"
        self.notify(f"Auto-refresh: {status}")
        self._render_title()

    def _render_title(self) -> None:
        title = format_title(self.state, self.source.label)
        if self.state.last_error:
            title += f" | {self.state.last_error}"
        self.query_one("#title", Static).update(Text(title))

    def _render_view(self) -> None:
        """Push the current state to the widgets."""
        try:
            self._render_title()
        except NoMatches:
            return
        self.query_one("#column-header", Static).update(
            Text(format_column_header(self.state.sort), style=HEADER_STYLE)
        )
        cursor = self.state.cursor
        self.query_one("#job-list", Static).update(
            render_rows(
                window_rows(self.state),
                cursor.selected - cursor.scroll_offset,
                width=self.size.width or None,
            )
        )


def run_app(
    source: RecordSource,
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    sort: Optional[SortState] = None,
) -> None:
    """
    Run the TUI application.

    Args:
        source: Record source to poll
        refresh_interval: Seconds between refreshes
        sort: Initial sort state (optional)
    """
    app = LsfTopApp(source=source, refresh_interval=refresh_interval, sort=sort)
    app.run()
