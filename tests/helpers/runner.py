"""Scripted command runner standing in for gh, git and tmux."""

from __future__ import annotations

import json
from typing import Any

from octopai.process import ProcessResult


class FakeCommandRunner:
    """Records every command and answers from registered prefixes.

    ``on("gh", "issue", "list", stdout=...)`` answers any command starting
    with those words. The most recent matching registration wins; anything
    unregistered succeeds with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._responses: list[tuple[tuple[str, ...], ProcessResult]] = []

    @classmethod
    def with_empty_board(cls) -> FakeCommandRunner:
        runner = cls()
        runner.on("gh", "issue", "list", stdout="[]")
        runner.on("gh", "pr", "list", stdout="[]")
        runner.on("git", "worktree", "list", stdout="")
        runner.on("tmux", "list-sessions", stdout="")
        return runner

    def on(
        self,
        *prefix: str,
        stdout: str | list[Any] = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> None:
        if not isinstance(stdout, str):
            stdout = json.dumps(stdout)
        result = ProcessResult(returncode, stdout.encode(), stderr.encode())
        self._responses.append((prefix, result))

    def fail(self, *prefix: str, stderr: str) -> None:
        self.on(*prefix, stderr=stderr, returncode=1)

    async def run(self, executable: str, *args: str, cwd=None) -> ProcessResult:
        command = (executable, *args)
        self.calls.append(command)
        for prefix, result in reversed(self._responses):
            if command[: len(prefix)] == prefix:
                return result
        return ProcessResult(0, b"", b"")

    def commands(self, *prefix: str) -> list[tuple[str, ...]]:
        """Recorded commands starting with ``prefix``."""
        return [call for call in self.calls if call[: len(prefix)] == prefix]

    def ran(self, *prefix: str) -> bool:
        return bool(self.commands(*prefix))


def gh_issue(number: int, title: str, body: str = "", labels: list[str] | None = None) -> dict:
    return {
        "number": number,
        "title": title,
        "body": body,
        "labels": [{"name": name} for name in labels or []],
    }


def gh_pull_request(
    number: int,
    title: str,
    head: str,
    *,
    state: str = "OPEN",
    draft: bool = False,
) -> dict:
    return {
        "number": number,
        "title": title,
        "body": "",
        "isDraft": draft,
        "state": state,
        "headRefName": head,
        "url": f"https://github.com/acme/widgets/pull/{number}",
    }


def porcelain(*worktrees: tuple[str, str]) -> str:
    """``git worktree list --porcelain`` text for ``(path, branch)`` pairs."""
    records = [
        f"worktree {path}\nHEAD 0123456789abcdef\nbranch refs/heads/{branch}\n"
        for path, branch in worktrees
    ]
    return "\n".join(records)
