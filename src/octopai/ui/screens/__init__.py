"""Octopai screens."""

from octopai.ui.screens.board import BoardScreen
from octopai.ui.screens.repo_select import RepoSelectScreen

__all__ = ["BoardScreen", "RepoSelectScreen"]
