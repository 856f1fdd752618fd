"""Card model shared by every board section."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from octopai.constants import (
    DESCRIPTION_ELLIPSIS,
    DESCRIPTION_MAX_LENGTH,
    NO_DESCRIPTION,
)

_ISSUE_BRANCH_RE = re.compile(r"^(?P<kind>issue|local)-(?P<number>\d+)$")


@dataclass(frozen=True, slots=True)
class Card:
    """Normalized view of an issue, worktree, pull request, session or local issue.

    ``related`` holds ids of cards in other sections. They are cross-references
    used for highlighting only; the board resolves them through its own index.
    """

    id: str
    title: str
    description: str
    tag: str
    tag_color: str
    full_description: str | None = None
    related: frozenset[str] = field(default_factory=frozenset)
    url: str | None = None
    pr_number: int | None = None
    is_draft: bool | None = None
    is_merged: bool | None = None
    head_branch: str | None = None
    path: str | None = None
    is_local: bool = False


class IssueKind(StrEnum):
    REMOTE = "issue"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class IssueRef:
    """Issue identity derived from a card id such as ``issue-42`` or ``local-3``."""

    kind: IssueKind
    number: int

    @property
    def card_id(self) -> str:
        return f"{self.kind.value}-{self.number}"

    @property
    def branch(self) -> str:
        """Branch (and tmux session) name used for this issue's environment."""
        return self.card_id

    @property
    def label(self) -> str:
        if self.kind is IssueKind.LOCAL:
            return f"L-{self.number}"
        return f"#{self.number}"

    @classmethod
    def parse(cls, value: str) -> IssueRef | None:
        """Parse ``issue-<N>``/``local-<N>``; anything else returns None."""
        match = _ISSUE_BRANCH_RE.match(value)
        if match is None:
            return None
        return cls(IssueKind(match["kind"]), int(match["number"]))


def summarize_body(body: str) -> tuple[str, str | None]:
    """Return ``(description, full_description)`` for an issue-like body.

    Bodies longer than the limit are cut so that the description, ellipsis
    included, is exactly ``DESCRIPTION_MAX_LENGTH`` characters.
    """
    if not body:
        return NO_DESCRIPTION, None
    if len(body) > DESCRIPTION_MAX_LENGTH:
        keep = DESCRIPTION_MAX_LENGTH - len(DESCRIPTION_ELLIPSIS)
        return body[:keep] + DESCRIPTION_ELLIPSIS, body
    return body, body


def label_color(name: str) -> str:
    """Map an issue label name to a display color."""
    lowered = name.lower()
    if "bug" in lowered:
        return "red"
    if "feature" in lowered or "enhancement" in lowered:
        return "green"
    if "documentation" in lowered or "docs" in lowered:
        return "blue"
    if "good first issue" in lowered or "help wanted" in lowered:
        return "cyan"
    if any(word in lowered for word in ("duplicate", "wontfix", "invalid")):
        return "grey50"
    if any(word in lowered for word in ("priority", "critical", "urgent")):
        return "bright_red"
    return "yellow"


def repo_owner(repo: str) -> str:
    """Owner segment of a repository identifier, or an empty string when there is none."""
    if "/" not in repo:
        return ""
    return repo.split("/", 1)[0]


def repo_short_name(repo: str) -> str:
    """Last path segment of a repository identifier."""
    return repo.rsplit("/", 1)[-1]


__all__ = [
    "Card",
    "IssueKind",
    "IssueRef",
    "label_color",
    "repo_owner",
    "repo_short_name",
    "summarize_body",
]
