"""Git worktree operations and porcelain parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from octopai.adapters.base import CliAdapterBase
from octopai.constants import PRIMARY_BRANCHES
from octopai.models import Card, IssueRef

if TYPE_CHECKING:
    from collections.abc import Iterator

_WORKTREE_PREFIX = "worktree "
_BRANCH_PREFIX = "branch refs/heads/"
_BARE_MARKER = "bare"


def _iter_records(porcelain: str) -> Iterator[tuple[str, str, bool]]:
    """Yield ``(path, branch, is_bare)`` for each blank-line separated record."""
    for block in porcelain.split("\n\n"):
        path = ""
        branch = ""
        is_bare = False
        for line in block.splitlines():
            if line.startswith(_WORKTREE_PREFIX):
                path = line[len(_WORKTREE_PREFIX) :]
            elif line.startswith(_BRANCH_PREFIX):
                branch = line[len(_BRANCH_PREFIX) :]
            elif line == _BARE_MARKER:
                is_bare = True
        if path:
            yield path, branch, is_bare


def worktree_card(path: str, branch: str) -> Card:
    """Build the card for one worktree record."""
    display_name = branch or path.rstrip("/").rsplit("/", 1)[-1]
    is_primary = display_name in PRIMARY_BRANCHES

    related: frozenset[str] = frozenset()
    if (ref := IssueRef.parse(display_name)) is not None:
        related = frozenset({ref.card_id})

    return Card(
        id=f"wt-{display_name}",
        title=display_name,
        description=path,
        tag="primary" if is_primary else "branch",
        tag_color="green" if is_primary else "yellow",
        related=related,
        head_branch=branch or None,
        path=path,
    )


def parse_worktree_porcelain(porcelain: str) -> list[Card]:
    """Parse ``git worktree list --porcelain`` output, skipping bare repositories."""
    return [
        worktree_card(path, branch)
        for path, branch, is_bare in _iter_records(porcelain)
        if not is_bare
    ]


class GitClient(CliAdapterBase):
    """Version-control collaborator backed by the git CLI."""

    executable = "git"

    async def list_worktrees(self) -> list[Card]:
        result = await self._run_checked(
            "git worktree list error", "worktree", "list", "--porcelain"
        )
        return parse_worktree_porcelain(result.stdout_text())

    async def add_worktree(self, path: str, branch: str) -> None:
        """Create a worktree at ``path`` on a new branch ``branch``."""
        await self._run_checked("git worktree add error", "worktree", "add", path, "-b", branch)

    async def remove_worktree(self, path: str) -> None:
        await self._run_checked("git worktree remove error", "worktree", "remove", path)

    async def delete_branch(self, branch: str) -> None:
        await self._run_checked("git branch delete error", "branch", "-D", branch)


__all__ = ["GitClient", "parse_worktree_porcelain", "worktree_card"]
