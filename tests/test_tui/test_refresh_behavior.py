#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Tests for refresh behavior in LsfTopApp.

A refresh replaces the job set but keeps expand state, sort state and the
cursor index. A failed fetch shows the error and leaves an empty job set.
"""

from typing import List, Sequence

import pytest

pytest.importorskip("textual")

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

from lsftop.models import Record
from lsftop.sources import FileSource, RecordSource, RecordSourceError
from lsftop.tui.app import LsfTopApp


class ScriptedSource(RecordSource):
    """Returns queued job sets in order; an exception in the queue is raised."""

    label = "scripted"

    def __init__(self, results: Sequence) -> None:
        self.results: List = list(results)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return tuple(result)


async def settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.asyncio
async def test_refresh_key_fetches_again(sample_records):
    source = ScriptedSource([sample_records])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        assert source.calls == 1

        await pilot.press("r")
        await settle(app, pilot)

        assert source.calls == 2


@pytest.mark.asyncio
async def test_refresh_keeps_expand_sort_and_cursor(sample_records, record_factory):
    second: List[Record] = sample_records + [record_factory("106", name="eps", group="/proj1")]
    source = ScriptedSource([sample_records, second])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        await pilot.press("enter", "down", "s")

        await pilot.press("r")
        await settle(app, pilot)

        assert len(app.state.records) == 6
        assert app.state.is_expanded("/proj1")
        assert app.state.sort.descending is True
        assert app.state.cursor.selected == 1
        assert app.state.sorted_groups[0].count == 3


@pytest.mark.asyncio
async def test_fetch_failure_clears_jobs_and_reports(sample_records, temp_state_dir):
    source = ScriptedSource([sample_records, RecordSourceError("bjobs: command not found")])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        await pilot.press("enter")

        await pilot.press("r")
        await settle(app, pilot)

        assert app.state.records == ()
        assert app.state.sorted_groups == []
        assert app.state.cursor.selected == 0
        assert app.state.last_error == "bjobs: command not found"
        assert app.state.is_expanded("/proj1")
        assert app.is_running

    log = (temp_state_dir / "debug.log").read_text()
    assert '"fetch_error"' in log


@pytest.mark.asyncio
async def test_recovery_after_failure(sample_records):
    source = ScriptedSource([RecordSourceError("timeout"), sample_records])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        assert app.state.last_error == "timeout"

        await pilot.press("r")
        await settle(app, pilot)

        assert app.state.last_error is None
        assert len(app.state.records) == 5


@pytest.mark.asyncio
async def test_paused_timer_does_not_fetch(sample_records):
    source = ScriptedSource([sample_records])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        await pilot.press("p")

        app._on_refresh_timer()
        await settle(app, pilot)

        assert source.calls == 1

        await pilot.press("p")
        app._on_refresh_timer()
        await settle(app, pilot)

        assert source.calls == 2


@pytest.mark.asyncio
async def test_manual_refresh_works_while_paused(sample_records):
    source = ScriptedSource([sample_records])
    app = LsfTopApp(source=source, refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)
        await pilot.press("p", "r")
        await settle(app, pilot)

        assert source.calls == 2
        assert app.state.paused is True


@pytest.mark.asyncio
async def test_invalid_utf8_file_keeps_app_running(tmp_path):
    data = tmp_path / "jobs.txt"
    data.write_bytes(
        b"1\tuser1\tRUN\tnormal\th1\tc1\tname\xff\tOct 17 10:00:00\t0:01:00\t10MB\t/proj1\n"
    )
    app = LsfTopApp(source=FileSource(data), refresh_interval=3600)

    async with app.run_test(size=(120, 20)) as pilot:
        await settle(app, pilot)

        assert app.is_running
        assert app.state.last_error is None
        assert [g.key for g in app.state.sorted_groups] == ["/proj1"]
        assert app.state.records[0].name == "name\ufffd"
