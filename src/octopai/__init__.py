"""Octopai: a terminal board for issues, worktrees, pull requests and sessions."""

__version__ = "0.1.0"
