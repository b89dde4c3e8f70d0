#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Tests for LsfTopApp lifecycle behavior.

Tests cover compose, mounting, the first fetch and constructor parameters.
"""

import json

import pytest

pytest.importorskip("textual")

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

from textual.widgets import Static

from lsftop.models import NAME_COLUMN
from lsftop.sources import StaticSource
from lsftop.tui.app import DEFAULT_REFRESH_INTERVAL, LsfTopApp
from lsftop.tui.app_state import SortState


@pytest.fixture
def app(sample_records):
    """App over a fixed job set; the timer never fires during a test."""
    return LsfTopApp(source=StaticSource(sample_records), refresh_interval=3600)


def test_constructor_defaults(sample_records):
    app = LsfTopApp(source=StaticSource(sample_records))

    assert app.refresh_interval == DEFAULT_REFRESH_INTERVAL
    assert app.state.sort == SortState()
    assert app.state.records == ()


def test_constructor_sort(sample_records):
    sort = SortState(column=NAME_COLUMN, descending=True)
    app = LsfTopApp(source=StaticSource(sample_records), sort=sort)

    assert app.state.sort is sort


@pytest.mark.asyncio
async def test_compose_creates_regions(app):
    async with app.run_test(size=(120, 20)) as pilot:
        await pilot.pause()

        for widget_id in ("title", "column-header", "job-list", "footer"):
            assert app.query_one(f"#{widget_id}", Static) is not None


@pytest.mark.asyncio
async def test_mount_fetches_and_groups(app):
    async with app.run_test(size=(120, 20)) as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert len(app.state.records) == 5
        assert [g.key for g in app.state.sorted_groups] == ["/proj1", "/proj2", "No Group"]
        assert app.state.expanded == {}
        assert app.state.last_refresh is not None
        assert app.state.last_error is None


@pytest.mark.asyncio
async def test_mount_sets_viewport_from_terminal(app):
    async with app.run_test(size=(120, 17)) as pilot:
        await pilot.pause()

        assert app.state.viewport_height == 17
        assert app.state.display_rows == 14


@pytest.mark.asyncio
async def test_resize_updates_viewport(app):
    async with app.run_test(size=(120, 20)) as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

        await pilot.resize_terminal(120, 8)
        await pilot.pause()

        assert app.state.viewport_height == 8


@pytest.mark.asyncio
async def test_mount_logs_session_start(app, temp_state_dir):
    async with app.run_test(size=(120, 20)) as pilot:
        await app.workers.wait_for_complete()
        await pilot.pause()

    events = [
        json.loads(line)
        for line in (temp_state_dir / "debug.log").read_text().splitlines()
    ]
    names = [e["event"] for e in events]
    assert names[0] == "session_start"
    assert "refresh" in names
    assert events[0]["source"] == "static"
