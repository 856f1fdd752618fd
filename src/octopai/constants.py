"""Board constants shared by the state machine and the widgets."""

from __future__ import annotations

from enum import IntEnum


class Section(IntEnum):
    """The four parallel card lists, in column order."""

    ISSUES = 0
    WORKTREES = 1
    PULL_REQUESTS = 2
    SESSIONS = 3


SECTION_COUNT = len(Section)

SECTION_LABELS = {
    Section.ISSUES: "Issues",
    Section.WORKTREES: "Worktrees",
    Section.PULL_REQUESTS: "Pull Requests",
    Section.SESSIONS: "Sessions",
}

SECTION_COLORS = {
    Section.ISSUES: "green",
    Section.WORKTREES: "yellow",
    Section.PULL_REQUESTS: "magenta",
    Section.SESSIONS: "blue",
}

DESCRIPTION_MAX_LENGTH = 80
DESCRIPTION_ELLIPSIS = "..."
NO_DESCRIPTION = "No description"
NO_BODY_PLACEHOLDER = "No description provided."

PRIMARY_BRANCHES = frozenset({"main", "master"})

ISSUE_LIST_LIMIT = 30
PR_LIST_LIMIT = 30
REPO_LIST_LIMIT = 50

EDITOR_COMMAND = ("nvim", ".")
ASSISTANT_EXECUTABLE = "claude"
ASSISTANT_ALLOWED_TOOLS = "Read,Edit,Bash"
ASSISTANT_MAX_TURNS = 10

MAX_LOG_MESSAGE_LENGTH = 4096
MAX_LOG_LINES = 2000

__all__ = [
    "ASSISTANT_ALLOWED_TOOLS",
    "ASSISTANT_EXECUTABLE",
    "ASSISTANT_MAX_TURNS",
    "DESCRIPTION_ELLIPSIS",
    "DESCRIPTION_MAX_LENGTH",
    "EDITOR_COMMAND",
    "ISSUE_LIST_LIMIT",
    "MAX_LOG_LINES",
    "MAX_LOG_MESSAGE_LENGTH",
    "NO_BODY_PLACEHOLDER",
    "NO_DESCRIPTION",
    "PRIMARY_BRANCHES",
    "PR_LIST_LIMIT",
    "REPO_LIST_LIMIT",
    "SECTION_COLORS",
    "SECTION_COUNT",
    "SECTION_LABELS",
    "Section",
]
