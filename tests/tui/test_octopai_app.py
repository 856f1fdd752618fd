"""Pilot-driven smoke tests for the Octopai app."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from octopai.adapters import LocalIssueStore
from octopai.app import OctopaiApp
from octopai.constants import Section
from octopai.state import RepoSelectPhase
from octopai.ui.screens import BoardScreen, RepoSelectScreen
from octopai.ui.widgets import ConfirmDialog, IssueForm, SectionColumn
from tests.helpers import FakeCommandRunner, gh_issue, porcelain

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.tui

SIZE = (160, 45)


def _app(runner: FakeCommandRunner, tmp_path: Path) -> OctopaiApp:
    return OctopaiApp(
        runner,
        config_path=tmp_path / "config.json",
        local_issues=LocalIssueStore(tmp_path / "local_issues"),
    )


def _active_columns(app: OctopaiApp) -> set[str | None]:
    return {column.id for column in app.screen.query(SectionColumn) if column.has_class("active")}


def _saved_repo(tmp_path: Path, repo: str = "acme/widgets") -> None:
    (tmp_path / "config.json").write_text(json.dumps({"repo": repo}))


async def test_pick_repository_and_open_board(tmp_path: Path) -> None:
    runner = FakeCommandRunner.with_empty_board()
    runner.on("gh", "repo", "list", stdout="acme/gadgets\nacme/widgets\n")
    app = _app(runner, tmp_path)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        assert isinstance(app.screen, RepoSelectScreen)

        await pilot.press("a", "c", "m", "e", "enter")
        await pilot.pause()
        assert app.dashboard.state.repo_select.phase is RepoSelectPhase.PICKING

        await pilot.press("j", "enter")
        await pilot.pause()

        assert isinstance(app.screen, BoardScreen)
        assert app.dashboard.state.repo == "acme/widgets"
        assert len(app.screen.query(SectionColumn)) == 4

    assert json.loads((tmp_path / "config.json").read_text()) == {"repo": "acme/widgets"}


async def test_escape_on_first_run_quits(tmp_path: Path) -> None:
    app = _app(FakeCommandRunner.with_empty_board(), tmp_path)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("escape")
        await pilot.pause()

    assert app.return_code == 0


async def test_board_overlays_follow_state(tmp_path: Path) -> None:
    _saved_repo(tmp_path)
    runner = FakeCommandRunner.with_empty_board()
    runner.on("gh", "issue", "list", stdout=[gh_issue(7, "Crash on save")])
    runner.on("git", "worktree", "list", stdout=porcelain(("/src/widgets", "main")))
    app = _app(runner, tmp_path)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, BoardScreen)
        assert not screen.query_one(IssueForm).display
        assert not screen.query_one(ConfirmDialog).display

        await pilot.press("n")
        await pilot.pause()
        assert screen.query_one(IssueForm).display

        await pilot.press("escape", "d")
        await pilot.pause()
        assert not screen.query_one(IssueForm).display
        assert screen.query_one(ConfirmDialog).display

        await pilot.press("n")
        await pilot.pause()
        assert not screen.query_one(ConfirmDialog).display
        assert not runner.ran("gh", "issue", "close")


async def test_tab_and_filter_keys_reach_the_dashboard(tmp_path: Path) -> None:
    _saved_repo(tmp_path)
    runner = FakeCommandRunner.with_empty_board()
    runner.on("gh", "issue", "list", stdout=[gh_issue(7, "Crash"), gh_issue(8, "Docs")])
    app = _app(runner, tmp_path)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.pause()
        await pilot.press("tab", "shift+tab", "slash", "d", "o")
        await pilot.pause()

        state = app.dashboard.state
        assert state.board.active_section == Section.ISSUES
        assert state.filter_query == "do"
        assert _active_columns(app) == {"column-issues"}

        await pilot.press("escape", "q")
        await pilot.pause()

    assert app.return_code == 0