"""Board column widget: one section of cards."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.text import Text
from textual.widgets import Static

from octopai.constants import SECTION_COLORS, SECTION_LABELS, Section
from octopai.ui.widgets.card import CARD_HEIGHT, render_card

if TYPE_CHECKING:
    from rich.console import RenderableType

    from octopai.state import Board

HEADER_LINES = 2


def visible_window(selected: int, count: int, capacity: int) -> range:
    """Indices to draw so that ``selected`` stays on screen."""
    capacity = max(capacity, 1)
    start = max(0, min(selected - capacity + 1, count - capacity))
    return range(start, min(start + capacity, count))


class SectionColumn(Static):
    """Renders one board section from the board state."""

    ALLOW_SELECT = False
    can_focus = False

    def __init__(self, section: Section, **kwargs) -> None:
        super().__init__(id=f"column-{section.name.lower()}", classes="section-column", **kwargs)
        self.section = section
        self._board: Board | None = None
        self._query: str | None = None

    def show(self, board: Board, query: str | None) -> None:
        self._board, self._query = board, query
        is_active = board.active_section == self.section
        self.set_class(is_active, "active")
        self.update(self._render_section(board, query, is_active))

    def on_resize(self) -> None:
        if self._board is not None:
            self.show(self._board, self._query)

    def _render_section(self, board: Board, query: str | None, is_active: bool) -> RenderableType:
        accent = SECTION_COLORS[self.section]
        cards = board.visible_cards(self.section, query)
        selected = board.selected_card[self.section]
        related = board.related_ids(query)

        header = Text(
            f"{SECTION_LABELS[self.section]} ({len(cards)})",
            style=f"bold {accent}" if is_active else accent,
        )
        if is_active and query is not None:
            filter_line = Text(f"/{query}▏", style="bold")
        else:
            filter_line = Text("")
        parts: list[RenderableType] = [header, filter_line]

        if not cards:
            parts.append(Text("Nothing here", style="dim italic"))
            return Group(*parts)

        capacity = (self.size.height - HEADER_LINES) // CARD_HEIGHT
        for index in visible_window(selected, len(cards), capacity):
            card = cards[index]
            parts.append(
                render_card(
                    card,
                    selected=is_active and index == selected,
                    related=card.id in related,
                    accent=accent,
                )
            )
        return Group(*parts)


__all__ = ["SectionColumn", "visible_window"]
