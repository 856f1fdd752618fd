"""Ordered-subsequence matching for the repo picker and column filters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from octopai.models import Card


def fuzzy_match(query: str, target: str) -> bool:
    """Return True when every character of ``query`` occurs in ``target`` in order.

    Matching is case-insensitive and characters need not be contiguous.
    An empty query matches everything.

    Examples:
        fuzzy_match("gh", "github") -> True
        fuzzy_match("hg", "github") -> False
    """
    remaining = iter(target.lower())
    return all(char in remaining for char in query.lower())


def card_matches(card: Card, query: str) -> bool:
    """A card passes the filter when its title or its description matches."""
    return fuzzy_match(query, card.title) or fuzzy_match(query, card.description)


def filter_cards(cards: Iterable[Card], query: str) -> list[Card]:
    """Stable filter: keeps input order, no ranking."""
    if not query:
        return list(cards)
    return [card for card in cards if card_matches(card, query)]


def filter_names(names: Iterable[str], query: str) -> list[str]:
    if not query:
        return list(names)
    return [name for name in names if fuzzy_match(query, name)]


__all__ = ["card_matches", "filter_cards", "filter_names", "fuzzy_match"]
