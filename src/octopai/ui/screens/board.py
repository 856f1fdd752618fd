"""Board screen: four section columns, legend and overlays."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.containers import Horizontal
from textual.widgets import Static

from octopai.constants import Section
from octopai.ui.screens.base import OctopaiScreen
from octopai.ui.widgets import ConfirmDialog, IssueForm, Legend, SectionColumn

if TYPE_CHECKING:
    from textual.app import ComposeResult


class BoardScreen(OctopaiScreen):
    def compose(self) -> ComposeResult:
        yield Static(id="repo-bar")
        with Horizontal(id="board-columns"):
            for section in Section:
                yield SectionColumn(section)
        yield Legend(id="legend")
        yield IssueForm(id="issue-form", classes="overlay")
        yield ConfirmDialog(id="confirm-dialog", classes="overlay")

    def sync_state(self) -> None:
        state = self.app_state
        self.query_one("#repo-bar", Static).update(
            Text.assemble(("octopai ", "bold"), (state.repo, "bold cyan"))
        )
        query = state.filter_query
        for column in self.query(SectionColumn):
            column.show(state.board, query)
        self.query_one(Legend).show(state)
        self.query_one(IssueForm).show(state.issue_modal)
        self.query_one(ConfirmDialog).show(state.confirm_modal)


__all__ = ["BoardScreen"]
