"""Repository picker screen."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.text import Text
from textual.containers import Center, Vertical
from textual.widgets import Static

from octopai.keybindings import REPO_PICKING_HINTS, REPO_TYPING_HINTS, format_hints
from octopai.state import RepoSelectPhase
from octopai.ui.screens.base import OctopaiScreen

if TYPE_CHECKING:
    from rich.console import RenderableType
    from textual.app import ComposeResult

    from octopai.state import RepoSelectState

MAX_LISTED_REPOS = 15


def render_repo_list(picker: RepoSelectState) -> RenderableType:
    lines: list[RenderableType] = [
        Text(f"/{picker.filter_query}", style="bold") if picker.filter_query else Text(""),
    ]
    if not picker.filtered_repos:
        lines.append(Text("No matching repositories", style="dim italic"))
    start = max(0, picker.selected - MAX_LISTED_REPOS + 1)
    for index, repo in enumerate(
        picker.filtered_repos[start : start + MAX_LISTED_REPOS], start=start
    ):
        if index == picker.selected:
            lines.append(Text(f"> {repo}", style="bold reverse"))
        else:
            lines.append(Text(f"  {repo}"))
    lines.append(Text(f"{len(picker.filtered_repos)}/{len(picker.repos)}", style="dim"))
    return Group(*lines)


class RepoSelectScreen(OctopaiScreen):
    """Owner prompt, loading indicator and filterable repository list."""

    def compose(self) -> ComposeResult:
        with Center(), Vertical(id="repo-select"):
            yield Static("[bold]Select a repository[/]", id="repo-select-title")
            yield Static("Enter an org or user name:", id="repo-select-prompt")
            yield Static(id="repo-select-input")
            yield Static(id="repo-select-error")
            yield Static(id="repo-select-list")
            yield Static(id="repo-select-hints")

    def sync_state(self) -> None:
        picker = self.app_state.repo_select
        typing = picker.phase is RepoSelectPhase.TYPING
        cursor = "▏" if typing else ""
        self.query_one("#repo-select-input", Static).update(Text(f"> {picker.input}{cursor}"))

        error = self.query_one("#repo-select-error", Static)
        error.display = picker.error is not None
        error.update(Text(picker.error or "", style="bold red"))

        listing = self.query_one("#repo-select-list", Static)
        match picker.phase:
            case RepoSelectPhase.LOADING:
                listing.display = True
                listing.update(Text(f"Loading repositories for '{picker.input.strip()}'..."))
            case RepoSelectPhase.PICKING:
                listing.display = True
                listing.update(render_repo_list(picker))
            case _:
                listing.display = False

        hints = REPO_TYPING_HINTS if typing else REPO_PICKING_HINTS
        self.query_one("#repo-select-hints", Static).update(format_hints(hints))


__all__ = ["RepoSelectScreen", "render_repo_list"]
