#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""Tests for the mock job data generator."""

import random

import pytest

from lsftop.mockdata import (
    EXEC_HOSTS,
    FIRST_JOB_ID,
    JOB_GROUPS,
    QUEUES,
    USERS,
    generate_lines,
    main,
)
from lsftop.sources import parse_output

NOW = 1_760_000_000.0


@pytest.fixture
def lines():
    return generate_lines(200, rng=random.Random(11), now=NOW)


def test_one_line_per_job(lines):
    assert len(lines) == 200
    assert all(len(line.split("\t")) == 11 for line in lines)


def test_job_ids_are_sequential(lines):
    ids = [int(line.split("\t")[0]) for line in lines]
    assert ids == list(range(FIRST_JOB_ID, FIRST_JOB_ID + 200))


def test_values_come_from_pools(lines):
    for record in parse_output("\n".join(lines)):
        assert record.user in USERS
        assert record.queue in QUEUES
        assert record.group in JOB_GROUPS


def test_pending_jobs_have_no_exec_host(lines):
    for record in parse_output("\n".join(lines)):
        if record.status_code == "PEND":
            assert record.exec_host == "-"
        else:
            assert record.exec_host in EXEC_HOSTS


def test_only_busy_jobs_report_usage(lines):
    for record in parse_output("\n".join(lines)):
        if record.status_code in ("RUN", "DONE"):
            assert record.memory.endswith("MB")
        else:
            assert record.cpu_used == "0:00:00"
            assert record.memory == "0MB"


def test_zero_jobs():
    assert generate_lines(0) == []


def test_main_prints_lines(capsys):
    main(["-n", "3", "--seed", "5"])

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 3
    assert out[0].startswith(str(FIRST_JOB_ID))


def test_main_rejects_negative_count():
    with pytest.raises(SystemExit) as exc:
        main(["-n", "-1"])
    assert exc.value.code == 2
