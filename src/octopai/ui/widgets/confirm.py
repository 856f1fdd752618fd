"""Yes/no confirmation drawn over the board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.text import Text
from textual.containers import Container
from textual.widgets import Static

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from octopai.state import ConfirmModal


class ConfirmDialog(Container):
    ALLOW_SELECT = False
    can_focus = False

    def compose(self) -> ComposeResult:
        yield Static(id="confirm-body", classes="dialog")

    def show(self, modal: ConfirmModal | None) -> None:
        self.display = modal is not None
        if modal is None:
            return
        self.query_one("#confirm-body", Static).update(
            Group(
                Text(modal.message),
                Text(""),
                Text.from_markup("[bold]y[/] confirm · [bold]n[/] cancel"),
            )
        )


__all__ = ["ConfirmDialog"]
