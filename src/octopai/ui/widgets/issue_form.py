"""New-issue form drawn over the board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.text import Text
from textual.containers import Container
from textual.widgets import Static

from octopai.state import BODY_FIELD, TITLE_FIELD

if TYPE_CHECKING:
    from rich.console import RenderableType
    from textual.app import ComposeResult

    from octopai.state import IssueModal

CURSOR = "▏"


def _field(label: str, value: str, *, active: bool) -> RenderableType:
    caption = Text(label, style="bold" if active else "dim")
    content = Text(value + (CURSOR if active else ""))
    if not value and not active:
        content = Text("(empty)", style="dim italic")
    return Group(caption, content, Text(""))


class IssueForm(Container):
    """Overlay container; hidden unless an issue modal is open."""

    ALLOW_SELECT = False
    can_focus = False

    def compose(self) -> ComposeResult:
        yield Static(id="issue-form-body", classes="dialog")

    def show(self, modal: IssueModal | None) -> None:
        self.display = modal is not None
        if modal is None:
            return
        parts: list[RenderableType] = [
            Text("New issue", style="bold"),
            Text(""),
            _field("Title", modal.title, active=modal.active_field == TITLE_FIELD),
            _field("Body", modal.body, active=modal.active_field == BODY_FIELD),
        ]
        if modal.error:
            parts.append(Text(modal.error, style="bold red"))
        self.query_one("#issue-form-body", Static).update(Group(*parts))


__all__ = ["IssueForm"]
