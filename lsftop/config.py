# SPDX-License-Identifier: MIT
"""Configuration reader for lsftop.

Settings live in a single JSON file. Command-line flags override them,
and built-in defaults apply when neither is given.

Example ``~/.config/lsftop/settings.json``::

    {
        "interval": 10,
        "fetchTimeout": 20,
        "bjobsCommand": ["bjobs", "-u", "all", "-noheader", "-o", "..."],
        "debugLevel": 1
    }
"""
import json
import os
from pathlib import Path
from typing import Any, List, Optional

DEFAULT_INTERVAL = 5.0
DEFAULT_FETCH_TIMEOUT = 30.0


def get_settings_path() -> Path:
    """Get path to the lsftop settings file.

    Returns:
        Path to settings.json, respecting the LSFTOP_SETTINGS env var.
    """
    custom = os.environ.get("LSFTOP_SETTINGS")
    if custom:
        return Path(custom)
    xdg_config = os.environ.get("XDG_CONFIG_HOME") or (Path.home() / ".config")
    return Path(xdg_config) / "lsftop" / "settings.json"


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value by dot-notation key.

    Args:
        key: Dot-notation key like "interval" or "colors.running"
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings_path = get_settings_path()

    if not settings_path.exists():
        return default

    try:
        with open(settings_path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError):
        return default

    parts = key.split(".")
    current = data
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]

    return current


def get_int_setting(key: str, default: int = 0) -> int:
    """Get an integer setting, or default if conversion fails."""
    value = get_setting(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_float_setting(key: str, default: float = 0.0) -> float:
    """Get a float setting, or default if conversion fails."""
    value = get_setting(key, default)
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def get_refresh_interval() -> float:
    """Polling interval in seconds. Non-positive values fall back to the default."""
    interval = get_float_setting("interval", DEFAULT_INTERVAL)
    return interval if interval > 0 else DEFAULT_INTERVAL


def get_fetch_timeout() -> float:
    """Seconds before an external fetch command is abandoned."""
    timeout = get_float_setting("fetchTimeout", DEFAULT_FETCH_TIMEOUT)
    return timeout if timeout > 0 else DEFAULT_FETCH_TIMEOUT


def get_bjobs_command() -> Optional[List[str]]:
    """Custom bjobs argv from settings, or None to use the built-in command.

    Accepts either a list of arguments or a single string split on whitespace.
    """
    value = get_setting("bjobsCommand")
    if isinstance(value, str) and value.strip():
        return value.split()
    if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
        return list(value)
    return None
