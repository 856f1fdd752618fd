"""Rich renderables for board cards."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from octopai.models import Card

CARD_HEIGHT = 4  # border, title, description, border


def card_title(card: Card) -> Text:
    title = Text()
    title.append(f" {card.tag} ", style=f"bold black on {card.tag_color}")
    title.append(" ")
    title.append(card.title, style="bold")
    return title


def render_card(card: Card, *, selected: bool, related: bool, accent: str) -> Panel:
    """Panel for one card. Selection wins over relation highlighting."""
    if selected:
        border_style = f"bold {accent}"
    elif related:
        border_style = "bold yellow"
    else:
        border_style = "grey37"

    body = Group(
        card_title(card),
        Text(card.description, style="dim" if card.full_description is None else ""),
    )
    return Panel(body, border_style=border_style, height=CARD_HEIGHT, padding=(0, 1))


__all__ = ["CARD_HEIGHT", "card_title", "render_card"]
