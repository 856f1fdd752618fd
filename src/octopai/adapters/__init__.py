"""Collaborator adapters for the external CLIs the board drives."""

from octopai.adapters.base import CommandError
from octopai.adapters.git import GitClient, parse_worktree_porcelain
from octopai.adapters.github import GitHubClient
from octopai.adapters.local_issues import LocalIssueError, LocalIssueStore
from octopai.adapters.tmux import TmuxClient

__all__ = [
    "CommandError",
    "GitClient",
    "GitHubClient",
    "LocalIssueError",
    "LocalIssueStore",
    "TmuxClient",
    "parse_worktree_porcelain",
]
