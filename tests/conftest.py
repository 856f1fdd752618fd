"""Pytest fixtures for Octopai tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="octopai-tests-"))
os.environ["OCTOPAI_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["OCTOPAI_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ.pop("OCTOPAI_DEBUG", None)

from octopai.adapters import GitClient, GitHubClient, LocalIssueStore, TmuxClient  # noqa: E402
from octopai.controller import Dashboard  # noqa: E402
from tests.helpers.runner import FakeCommandRunner  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Callable


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def runner() -> FakeCommandRunner:
    """Runner answering every board listing with an empty result."""
    return FakeCommandRunner.with_empty_board()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "config.json"


@pytest.fixture
def local_store(tmp_path: Path) -> LocalIssueStore:
    return LocalIssueStore(tmp_path / "local_issues")


@pytest.fixture
def make_dashboard(
    runner: FakeCommandRunner, config_path: Path, local_store: LocalIssueStore
) -> Callable[..., Dashboard]:
    def _make(**kwargs) -> Dashboard:
        return Dashboard(
            github=GitHubClient(runner),
            git=GitClient(runner),
            tmux=TmuxClient(runner),
            local_issues=local_store,
            config_path=config_path,
            **kwargs,
        )

    return _make
