"""Key hint catalogs for the Octopai screens.

Keys are dispatched by the dashboard state machine, not by Textual bindings;
each catalog lists the ``(key, description)`` pairs the legend bar shows in
one screen or mode.
"""

from __future__ import annotations

Hint = tuple[str, str]

# =============================================================================
# Repository picker
# =============================================================================

REPO_TYPING_HINTS: list[Hint] = [
    ("Enter", "Search"),
    ("Esc", "Back/Quit"),
]

REPO_PICKING_HINTS: list[Hint] = [
    ("j/k", "Move"),
    ("Enter", "Select"),
    ("/", "Clear filter"),
    ("Esc", "Back"),
]

# =============================================================================
# Board
# =============================================================================

BOARD_HINTS: list[Hint] = [
    ("j/k", "Move"),
    ("Tab", "Section"),
    ("/", "Filter"),
    ("r", "Refresh"),
    ("Enter", "Repo"),
    ("q", "Quit"),
]

ISSUE_SECTION_HINTS: list[Hint] = [
    ("n", "New"),
    ("w", "Worktree"),
    ("d", "Close"),
]

WORKTREE_SECTION_HINTS: list[Hint] = [
    ("d", "Remove"),
]

FILTER_HINTS: list[Hint] = [
    ("↑/↓", "Move"),
    ("Esc", "Clear"),
]

ISSUE_FORM_HINTS: list[Hint] = [
    ("Tab", "Field"),
    ("^s", "Create"),
    ("^l", "Create local"),
    ("Esc", "Cancel"),
]

CONFIRM_HINTS: list[Hint] = [
    ("y", "Yes"),
    ("n", "No"),
]


def format_hints(hints: list[Hint], separator: str = " · ") -> str:
    """Render ``(key, description)`` pairs as Rich markup: ``[bold]key[/] description``."""
    parts = []
    for key, description in hints:
        if not key:
            continue
        if description:
            parts.append(f"[bold]{key}[/] {description}")
        else:
            parts.append(f"[bold]{key}[/]")
    return separator.join(parts)


__all__ = [
    "BOARD_HINTS",
    "CONFIRM_HINTS",
    "FILTER_HINTS",
    "ISSUE_FORM_HINTS",
    "ISSUE_SECTION_HINTS",
    "REPO_PICKING_HINTS",
    "REPO_TYPING_HINTS",
    "WORKTREE_SECTION_HINTS",
    "Hint",
    "format_hints",
]
