#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Structured debug logging for lsftop.

Writes one JSON object per line to debug.log in the lsftop state directory.
The TUI never prints diagnostics to the terminal it draws on, so refresh
timings and fetch failures land here instead.

Levels:
    0 - off
    1 - info (session start, refreshes, fetch errors)
    2 - debug (also every dispatched command)
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from lsftop.config import get_int_setting

DEFAULT_LEVEL = 1
MAX_LOG_BYTES = 5 * 1024 * 1024  # Rotate to debug.log.1 beyond this size


def get_state_dir() -> Path:
    """
    Get the lsftop state directory.

    Uses LSFTOP_STATE env var if set, otherwise the XDG state directory
    (~/.local/state/lsftop).
    """
    explicit_state = os.environ.get("LSFTOP_STATE")
    if explicit_state:
        return Path(explicit_state)

    xdg_state = os.environ.get("XDG_STATE_HOME") or (Path.home() / ".local" / "state")
    return Path(xdg_state) / "lsftop"


def get_default_log_path() -> Path:
    """Path to debug.log inside the state directory."""
    return get_state_dir() / "debug.log"


def _resolve_level() -> int:
    env_level = os.environ.get("LSFTOP_DEBUG")
    if env_level is not None:
        try:
            return int(env_level)
        except ValueError:
            return DEFAULT_LEVEL
    return get_int_setting("debugLevel", DEFAULT_LEVEL)


class DebugLogger:
    """Append-only JSON-lines logger."""

    def __init__(self, log_path: Optional[Path] = None, level: Optional[int] = None) -> None:
        self.log_path = log_path or get_default_log_path()
        self.level = _resolve_level() if level is None else level

    def _write(self, event: Dict[str, Any]) -> None:
        """Write one event. Logging failures are never raised to callers."""
        if self.level < 1:
            return
        record = {
            "event": event.pop("event", "unknown"),
            "level": event.pop("level", "info"),
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "pid": os.getpid(),
        }
        record.update(event)
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            if self.log_path.exists() and self.log_path.stat().st_size > MAX_LOG_BYTES:
                self.log_path.replace(self.log_path.with_name(self.log_path.name + ".1"))
            with open(self.log_path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError:
            pass

    def session_start(self, source: str, interval: float) -> None:
        self._write({"event": "session_start", "source": source, "interval": interval})

    def refresh(self, source: str, job_count: int, group_count: int, duration_ms: float) -> None:
        self._write(
            {
                "event": "refresh",
                "source": source,
                "jobs": job_count,
                "groups": group_count,
                "ms": round(duration_ms, 1),
            }
        )

    def fetch_error(self, source: str, err: str) -> None:
        self._write({"event": "fetch_error", "level": "error", "source": source, "err": err})

    def config_error(self, message: str) -> None:
        self._write({"event": "config_error", "level": "error", "err": message})

    def command(self, name: str, selected: int, scroll_offset: int) -> None:
        """Log a dispatched command (debug level only)."""
        if self.level < 2:
            return
        self._write(
            {
                "event": "command",
                "level": "debug",
                "command": name,
                "selected": selected,
                "scroll": scroll_offset,
            }
        )


_logger: Optional[DebugLogger] = None


def get_logger() -> DebugLogger:
    """Get the shared DebugLogger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = DebugLogger()
    return _logger


def reset_logger() -> None:
    """Drop the shared logger so the next get_logger() re-reads env and settings."""
    global _logger
    _logger = None
