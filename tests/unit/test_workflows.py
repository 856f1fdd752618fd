"""Tests for environment provisioning and teardown."""

from __future__ import annotations

import shlex

import pytest

from octopai.adapters import GitClient, TmuxClient
from octopai.adapters.base import CommandError
from octopai.models import IssueKind, IssueRef
from octopai.workflows import (
    EnvironmentPlan,
    EnvironmentWorkflows,
    Outcome,
    WorkflowError,
    WorkflowStep,
    run_workflow,
)
from tests.helpers import FakeCommandRunner

pytestmark = pytest.mark.unit


def _plan(body: str = "It crashes.") -> EnvironmentPlan:
    return EnvironmentPlan(
        repo="acme/widgets",
        issue=IssueRef(IssueKind.REMOTE, 7),
        title="#7 Crash on save",
        body=body,
    )


def _workflows(runner: FakeCommandRunner) -> EnvironmentWorkflows:
    return EnvironmentWorkflows(GitClient(runner), TmuxClient(runner))


class TestEnvironmentPlan:
    def test_branch_and_path(self) -> None:
        plan = _plan()

        assert plan.branch == "issue-7"
        assert plan.worktree_path == "../widgets-issue-7"

    def test_local_issue_branch_and_prompt(self) -> None:
        plan = EnvironmentPlan("acme/widgets", IssueRef(IssueKind.LOCAL, 3), "L-3 Tidy", "")

        assert plan.branch == "local-3"
        assert plan.worktree_path == "../widgets-local-3"
        assert plan.prompt().startswith("You are working on local issue L-3 for the repo acme/widgets.")

    def test_prompt_embeds_issue_details(self) -> None:
        prompt = _plan().prompt()

        assert prompt == (
            "You are working on GitHub issue #7 for the repo acme/widgets.\n\n"
            "Title: #7 Crash on save\n\n"
            "It crashes.\n\n"
            "Please investigate the codebase and implement a solution for this issue."
        )

    def test_empty_body_placeholder(self) -> None:
        assert "\n\nNo description provided.\n\n" in _plan(body="").prompt()

    def test_assistant_command_round_trips_through_a_shell(self) -> None:
        plan = _plan(body="Don't 'quote' me")

        words = shlex.split(plan.assistant_command())

        assert words == [
            "claude",
            "-p",
            plan.prompt(),
            "--allowedTools",
            "Read,Edit,Bash",
            "--max-turns",
            "10",
        ]


class TestProvision:
    async def test_runs_every_step_in_order(self) -> None:
        runner = FakeCommandRunner()

        report = await _workflows(runner).provision(_plan())

        assert [call[:2] for call in runner.calls] == [
            ("git", "worktree"),
            ("tmux", "new-session"),
            ("tmux", "split-window"),
            ("tmux", "send-keys"),
        ]
        assert runner.calls[0] == ("git", "worktree", "add", "../widgets-issue-7", "-b", "issue-7")
        assert runner.calls[1] == (
            "tmux", "new-session", "-d", "-s", "issue-7", "-c", "../widgets-issue-7", "nvim", ".",
        )  # fmt: skip
        assert runner.calls[3][-1] == "Enter"
        assert report.ignored_failures == []

    async def test_worktree_failure_stops_before_tmux(self) -> None:
        runner = FakeCommandRunner()
        runner.fail("git", "worktree", "add", stderr="fatal: a branch named 'issue-7' already exists")

        with pytest.raises(WorkflowError) as excinfo:
            await _workflows(runner).provision(_plan())

        assert not runner.ran("tmux")
        assert "fatal: a branch named 'issue-7' already exists" in str(excinfo.value)
        assert excinfo.value.left_behind == ()

    async def test_split_failure_reports_orphans(self) -> None:
        runner = FakeCommandRunner()
        runner.fail("tmux", "split-window", stderr="no space for new pane")

        with pytest.raises(WorkflowError) as excinfo:
            await _workflows(runner).provision(_plan())

        error = excinfo.value
        assert error.step == "split pane"
        assert error.left_behind == ("worktree ../widgets-issue-7", "tmux session issue-7")
        assert str(error) == (
            "tmux split error: no space for new pane "
            "(left in place: worktree ../widgets-issue-7, tmux session issue-7)"
        )
        assert not runner.ran("tmux", "send-keys")

    async def test_assistant_dispatch_failure_is_swallowed(self) -> None:
        runner = FakeCommandRunner()
        runner.fail("tmux", "send-keys", stderr="pane gone")

        report = await _workflows(runner).provision(_plan())

        assert report.completed == ["create worktree", "start session", "split pane"]
        assert report.ignored_failures == [("dispatch assistant", "tmux send-keys error: pane gone")]


class TestTeardown:
    async def test_runs_every_step(self) -> None:
        runner = FakeCommandRunner()

        await _workflows(runner).teardown("../widgets-issue-7", "issue-7")

        assert runner.calls == [
            ("tmux", "kill-session", "-t", "issue-7"),
            ("git", "worktree", "remove", "../widgets-issue-7"),
            ("git", "branch", "-D", "issue-7"),
        ]

    async def test_missing_session_is_ignored(self) -> None:
        runner = FakeCommandRunner()
        runner.fail("tmux", "kill-session", stderr="can't find session: issue-7")

        report = await _workflows(runner).teardown("../widgets-issue-7", "issue-7")

        assert report.completed == ["remove worktree", "delete branch"]

    async def test_remove_failure_skips_branch_delete(self) -> None:
        runner = FakeCommandRunner()
        runner.fail("git", "worktree", "remove", stderr="contains modified files")

        with pytest.raises(WorkflowError, match="git worktree remove error: contains modified files"):
            await _workflows(runner).teardown("../widgets-issue-7", "issue-7")

        assert not runner.ran("git", "branch")


async def test_run_workflow_only_catches_command_errors() -> None:
    async def boom() -> None:
        raise ValueError("bug")

    steps = [WorkflowStep("explode", Outcome.BEST_EFFORT, boom)]

    with pytest.raises(ValueError, match="bug"):
        await run_workflow("test", steps)


async def test_run_workflow_must_succeed_wraps_error() -> None:
    async def fail() -> None:
        raise CommandError("tool: nope")

    with pytest.raises(WorkflowError, match="^tool: nope$"):
        await run_workflow("test", [WorkflowStep("only", Outcome.MUST_SUCCEED, fail)])
