"""Provisioning and teardown of per-issue work environments.

An environment is a git worktree on a dedicated branch plus a detached tmux
session (editor in the first pane, coding assistant in the second). Each
workflow is an ordered list of steps; every step declares whether its failure
aborts the workflow (``MUST_SUCCEED``) or is logged and ignored
(``BEST_EFFORT``). Nothing is rolled back: when a later step fails, artifacts
from earlier steps stay in place and are named in the error.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from octopai.adapters.base import CommandError
from octopai.constants import (
    ASSISTANT_ALLOWED_TOOLS,
    ASSISTANT_EXECUTABLE,
    ASSISTANT_MAX_TURNS,
    EDITOR_COMMAND,
    NO_BODY_PLACEHOLDER,
)
from octopai.debug_log import log
from octopai.models import IssueKind, IssueRef, repo_short_name

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from octopai.adapters.git import GitClient
    from octopai.adapters.tmux import TmuxClient


class Outcome(Enum):
    MUST_SUCCEED = "must_succeed"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True, slots=True)
class WorkflowStep:
    name: str
    outcome: Outcome
    run: Callable[[], Awaitable[None]]
    leaves: str | None = None  # artifact left behind once this step has run


@dataclass(slots=True)
class WorkflowReport:
    completed: list[str] = field(default_factory=list)
    ignored_failures: list[tuple[str, str]] = field(default_factory=list)


class WorkflowError(RuntimeError):
    """A must-succeed step failed; later steps did not run."""

    def __init__(self, step: str, message: str, left_behind: Sequence[str] = ()) -> None:
        self.step = step
        self.message = message
        self.left_behind = tuple(left_behind)
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.left_behind:
            return self.message
        return f"{self.message} (left in place: {', '.join(self.left_behind)})"


async def run_workflow(name: str, steps: Sequence[WorkflowStep]) -> WorkflowReport:
    """Run ``steps`` in order, honoring each step's outcome policy."""
    report = WorkflowReport()
    left_behind: list[str] = []
    for step in steps:
        try:
            await step.run()
        except CommandError as exc:
            if step.outcome is Outcome.BEST_EFFORT:
                log.warning("Ignoring best-effort step failure", workflow=name, step=step.name)
                log.debug(str(exc))
                report.ignored_failures.append((step.name, str(exc)))
                continue
            log.error("Workflow aborted", workflow=name, step=step.name, error=str(exc))
            raise WorkflowError(step.name, str(exc), left_behind) from exc
        report.completed.append(step.name)
        if step.leaves:
            left_behind.append(step.leaves)
    log.info("Workflow finished", workflow=name, completed=len(report.completed))
    return report


@dataclass(frozen=True, slots=True)
class EnvironmentPlan:
    """Everything derived from an issue card before any command runs."""

    repo: str
    issue: IssueRef
    title: str
    body: str

    @property
    def branch(self) -> str:
        return self.issue.branch

    @property
    def worktree_path(self) -> str:
        return f"../{repo_short_name(self.repo)}-{self.issue.branch}"

    def prompt(self) -> str:
        if self.issue.kind is IssueKind.LOCAL:
            subject = f"local issue {self.issue.label}"
        else:
            subject = f"GitHub issue {self.issue.label}"
        return (
            f"You are working on {subject} for the repo {self.repo}.\n\n"
            f"Title: {self.title}\n\n"
            f"{self.body or NO_BODY_PLACEHOLDER}\n\n"
            "Please investigate the codebase and implement a solution for this issue."
        )

    def assistant_command(self) -> str:
        """One-shot assistant command line typed into the second pane."""
        return " ".join(
            [
                ASSISTANT_EXECUTABLE,
                "-p",
                shlex.quote(self.prompt()),
                "--allowedTools",
                shlex.quote(ASSISTANT_ALLOWED_TOOLS),
                "--max-turns",
                str(ASSISTANT_MAX_TURNS),
            ]
        )


class EnvironmentWorkflows:
    """Builds and runs the provisioning and teardown step lists."""

    def __init__(self, git: GitClient, tmux: TmuxClient) -> None:
        self._git = git
        self._tmux = tmux

    def provisioning_steps(self, plan: EnvironmentPlan) -> list[WorkflowStep]:
        branch, path = plan.branch, plan.worktree_path
        return [
            WorkflowStep(
                "create worktree",
                Outcome.MUST_SUCCEED,
                lambda: self._git.add_worktree(path, branch),
                leaves=f"worktree {path}",
            ),
            WorkflowStep(
                "start session",
                Outcome.MUST_SUCCEED,
                lambda: self._tmux.new_session(branch, path, EDITOR_COMMAND),
                leaves=f"tmux session {branch}",
            ),
            WorkflowStep(
                "split pane",
                Outcome.MUST_SUCCEED,
                lambda: self._tmux.split_window(branch, path),
            ),
            WorkflowStep(
                "dispatch assistant",
                Outcome.BEST_EFFORT,
                lambda: self._tmux.send_keys(branch, plan.assistant_command()),
            ),
        ]

    def teardown_steps(self, path: str, branch: str) -> list[WorkflowStep]:
        return [
            WorkflowStep(
                "kill session",
                Outcome.BEST_EFFORT,
                lambda: self._tmux.kill_session(branch),
            ),
            WorkflowStep(
                "remove worktree",
                Outcome.MUST_SUCCEED,
                lambda: self._git.remove_worktree(path),
            ),
            WorkflowStep(
                "delete branch",
                Outcome.BEST_EFFORT,
                lambda: self._git.delete_branch(branch),
            ),
        ]

    async def provision(self, plan: EnvironmentPlan) -> WorkflowReport:
        log.info("Provisioning environment", branch=plan.branch, path=plan.worktree_path)
        return await run_workflow("provision", self.provisioning_steps(plan))

    async def teardown(self, path: str, branch: str) -> WorkflowReport:
        log.info("Tearing down environment", branch=branch, path=path)
        return await run_workflow("teardown", self.teardown_steps(path, branch))


__all__ = [
    "EnvironmentPlan",
    "EnvironmentWorkflows",
    "Outcome",
    "WorkflowError",
    "WorkflowReport",
    "WorkflowStep",
    "run_workflow",
]
