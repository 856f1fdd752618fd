"""Legend bar: transient status message, otherwise contextual key hints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.widgets import Static

from octopai.constants import Section
from octopai.keybindings import (
    BOARD_HINTS,
    CONFIRM_HINTS,
    FILTER_HINTS,
    ISSUE_FORM_HINTS,
    ISSUE_SECTION_HINTS,
    WORKTREE_SECTION_HINTS,
    format_hints,
)
from octopai.state import ConfirmingMode, CreatingIssueMode, FilteringMode

if TYPE_CHECKING:
    from octopai.keybindings import Hint
    from octopai.state import AppState


def board_hints(state: AppState) -> list[Hint]:
    match state.mode:
        case FilteringMode():
            return FILTER_HINTS
        case CreatingIssueMode():
            return ISSUE_FORM_HINTS
        case ConfirmingMode():
            return CONFIRM_HINTS

    section_hints: list[Hint] = []
    if state.board.active_section == Section.ISSUES:
        section_hints = ISSUE_SECTION_HINTS
    elif state.board.active_section == Section.WORKTREES:
        section_hints = WORKTREE_SECTION_HINTS
    return [*section_hints, *BOARD_HINTS]


class Legend(Static):
    ALLOW_SELECT = False
    can_focus = False

    def show(self, state: AppState) -> None:
        if state.status_message:
            self.add_class("status")
            self.update(Text(state.status_message, style="bold"))
        else:
            self.remove_class("status")
            self.update(format_hints(board_hints(state)))


__all__ = ["Legend", "board_hints"]
