"""
Pytest configuration and fixtures for lsftop tests.
"""

import sys
from pathlib import Path

# Ensure project root is in sys.path for 'lsftop' module imports
# This must happen before any imports from lsftop
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from typing import List, Optional

import pytest

from lsftop.models import Record


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "tui: marks TUI tests")


@pytest.fixture
def temp_state_dir(tmp_path: Path, monkeypatch) -> Path:
    """Create and return a temporary state directory.

    Sets LSFTOP_STATE and points LSFTOP_SETTINGS at a file that does not
    exist, then resets the debug logger so it picks up the new path.
    """
    state_dir = tmp_path / ".local" / "state" / "lsftop"
    state_dir.mkdir(parents=True)
    monkeypatch.setenv("LSFTOP_STATE", str(state_dir))
    monkeypatch.setenv("LSFTOP_SETTINGS", str(tmp_path / "no-settings.json"))
    monkeypatch.delenv("LSFTOP_DEBUG", raising=False)

    from lsftop.debug_logger import reset_logger
    reset_logger()

    return state_dir


@pytest.fixture(autouse=True)
def isolate_state_dir(temp_state_dir: Path):
    """Autouse fixture that keeps every test away from the real
    ~/.local/state/lsftop/debug.log and ~/.config/lsftop/settings.json.
    """
    yield temp_state_dir

    from lsftop.debug_logger import reset_logger
    reset_logger()


def make_record(
    job_id: str,
    name: str = "",
    group: Optional[str] = None,
    status: str = "RUN",
    user: str = "user1",
    **fields,
) -> Record:
    """Build a Record with sensible defaults for tests."""
    return Record(
        job_id=job_id,
        user=user,
        status_code=status,
        name=name,
        group=group,
        **fields,
    )


@pytest.fixture
def sample_records() -> List[Record]:
    """Three groups: /proj2 (2 jobs), /proj1 (2 jobs) and one ungrouped job."""
    return [
        make_record("101", name="zeta", group="/proj2"),
        make_record("102", name="Alpha", group="/proj1", status="PEND"),
        make_record("103", name="beta", group="/proj2", status="DONE"),
        make_record("104", name="gamma", status="EXIT"),
        make_record("105", name="delta", group="/proj1"),
    ]


@pytest.fixture
def record_factory():
    """The make_record helper, for tests that build their own jobs."""
    return make_record
