"""XDG-compliant path helpers for Octopai storage."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


def get_config_dir() -> Path:
    """Get the config directory (config.json, local issue stores)."""
    override = os.environ.get("OCTOPAI_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("octopai"))


def get_data_dir() -> Path:
    """Get the data directory (debug log exports)."""
    override = os.environ.get("OCTOPAI_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir("octopai"))


def get_config_path() -> Path:
    return get_config_dir() / "config.json"


def get_local_issues_dir() -> Path:
    return get_config_dir() / "local_issues"


def get_debug_log_path() -> Path:
    return get_data_dir() / "debug.log"
