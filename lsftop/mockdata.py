#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Mock LSF job data for running lsftop without a cluster.

Prints tab-delimited job lines in the same field order lsftop asks bjobs for,
so the output can be saved to a file for ``lsftop --test file`` or used
directly as a generator process with ``lsftop --command``.

Usage:
    python3 -m lsftop.mockdata > mock_bjobs_output.txt
    python3 -m lsftop.mockdata -n 500 --seed 42
"""

import argparse
import random
import time
from typing import List, Optional

DEFAULT_JOB_COUNT = 100
FIRST_JOB_ID = 10001
USERS = [f"user{i}" for i in range(1, 6)]
JOB_GROUPS = [
    "/project1",
    "/project1/subgroup1",
    "/project1/subgroup2",
    "/project2",
    "/project2/analysis",
    "/project2/simulation",
    "/testing",
    "/production",
]
QUEUES = ["normal", "short", "long", "gpu", "interactive", "high_mem"]
HOSTS = [f"host{i}.example.com" for i in range(1, 11)]
EXEC_HOSTS = HOSTS + ["compute-0-1", "compute-0-2", "compute-1-1", "gpu-0-1"]

# (status, weight out of 100)
STATUS_WEIGHTS = [
    ("RUN", 50),
    ("PEND", 30),
    ("DONE", 10),
    ("EXIT", 5),
    ("ZOMBI", 3),
    ("UNKWN", 2),
]

JOB_PREFIXES = [
    "analysis", "simulation", "backup", "test", "processing", "render",
    "compile", "optimize", "validate", "extract", "transform",
]
JOB_SUFFIXES = [
    "data", "model", "results", "batch", "job", "task",
    "process", "run", "iteration", "phase",
]

SUBMIT_WINDOW_SECONDS = 7 * 24 * 60 * 60


def random_job_name(rng: random.Random) -> str:
    return f"{rng.choice(JOB_PREFIXES)}_{rng.choice(JOB_SUFFIXES)}"


def random_timestamp(rng: random.Random, now: float) -> str:
    """A submit time within the last seven days, e.g. "Oct 17 09:41:05"."""
    seconds_ago = rng.randrange(SUBMIT_WINDOW_SECONDS)
    return time.strftime("%b %d %H:%M:%S", time.localtime(now - seconds_ago))


def random_cpu_time(rng: random.Random) -> str:
    return f"{rng.randrange(100)}:{rng.randrange(60):02d}:{rng.randrange(60):02d}"


def random_memory(rng: random.Random) -> str:
    return f"{rng.randrange(32000)}MB"


def generate_lines(
    count: int = DEFAULT_JOB_COUNT,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
) -> List[str]:
    """
    Generate mock job lines.

    Pending jobs have no execution host ("-"). Only running and finished
    jobs report CPU time and memory; the rest show zero usage.

    Args:
        count: Number of jobs
        rng: Random generator (a fresh unseeded one if omitted)
        now: Reference epoch time for submit times (current time if omitted)

    Returns:
        One tab-delimited line per job, without trailing newlines
    """
    rng = rng or random.Random()
    now = time.time() if now is None else now
    statuses = [status for status, _ in STATUS_WEIGHTS]
    weights = [weight for _, weight in STATUS_WEIGHTS]

    lines = []
    for i in range(count):
        status = rng.choices(statuses, weights=weights)[0]
        busy = status in ("RUN", "DONE")
        fields = [
            str(FIRST_JOB_ID + i),
            rng.choice(USERS),
            status,
            rng.choice(QUEUES),
            rng.choice(HOSTS),
            "-" if status == "PEND" else rng.choice(EXEC_HOSTS),
            random_job_name(rng),
            random_timestamp(rng, now),
            random_cpu_time(rng) if busy else "0:00:00",
            random_memory(rng) if busy else "0MB",
            rng.choice(JOB_GROUPS),
        ]
        lines.append("\t".join(fields))
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Generate mock LSF job data for testing lsftop"
    )
    parser.add_argument(
        "-n", "--count", type=int, default=DEFAULT_JOB_COUNT, help="Number of jobs"
    )
    parser.add_argument("--seed", type=int, help="Random seed for repeatable output")
    args = parser.parse_args(argv)

    if args.count < 0:
        parser.error("--count must not be negative")

    for line in generate_lines(args.count, rng=random.Random(args.seed)):
        print(line)


if __name__ == "__main__":
    main()
