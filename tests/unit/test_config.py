"""Tests for config persistence and storage paths."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from octopai.atomic import atomic_write
from octopai.config import OctopaiConfig
from octopai.paths import (
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_debug_log_path,
    get_local_issues_dir,
)

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_path_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OCTOPAI_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("OCTOPAI_DATA_DIR", str(tmp_path / "data"))

    assert get_config_dir() == tmp_path / "config"
    assert get_config_path() == tmp_path / "config" / "config.json"
    assert get_local_issues_dir() == tmp_path / "config" / "local_issues"
    assert get_data_dir() == tmp_path / "data"
    assert get_debug_log_path() == tmp_path / "data" / "debug.log"


def test_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    OctopaiConfig(repo="acme/widgets").save(path)

    assert json.loads(path.read_text()) == {"repo": "acme/widgets"}
    assert OctopaiConfig.load(path).repo == "acme/widgets"


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert OctopaiConfig.load(tmp_path / "absent.json").repo == ""


@pytest.mark.parametrize("content", ["{not json", '{"repo": 5}', "[]"])
def test_malformed_file_gives_defaults(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content)

    assert OctopaiConfig.load(path) == OctopaiConfig()


def test_atomic_write_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    atomic_write(path, "one")
    atomic_write(path, "two")

    assert path.read_text() == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]
