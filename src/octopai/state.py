"""Application state: screens, board modes, modal payloads and the board itself.

Everything here is plain data owned by a single ``AppState``. The controller is
the only code that mutates it; widgets only read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TypeAlias

from octopai.constants import SECTION_COUNT, Section
from octopai.fuzzy import filter_cards, filter_names
from octopai.models import Card


class Screen(Enum):
    REPO_SELECT = auto()
    BOARD = auto()


class RepoSelectPhase(Enum):
    TYPING = auto()
    LOADING = auto()
    PICKING = auto()


# =============================================================================
# Board modes
# =============================================================================


@dataclass(slots=True)
class NormalMode:
    pass


@dataclass(slots=True)
class FilteringMode:
    query: str = ""


@dataclass(slots=True)
class CreatingIssueMode:
    pass


@dataclass(slots=True)
class ConfirmingMode:
    pass


Mode: TypeAlias = NormalMode | FilteringMode | CreatingIssueMode | ConfirmingMode


# =============================================================================
# Modal payloads
# =============================================================================

TITLE_FIELD = 0
BODY_FIELD = 1


@dataclass(slots=True)
class IssueModal:
    """New-issue form. Exists only while the board is in ``CreatingIssueMode``."""

    title: str = ""
    body: str = ""
    active_field: int = TITLE_FIELD
    error: str | None = None

    def toggle_field(self) -> None:
        self.active_field = BODY_FIELD if self.active_field == TITLE_FIELD else TITLE_FIELD

    def insert(self, text: str) -> None:
        if self.active_field == TITLE_FIELD:
            self.title += text
        else:
            self.body += text

    def backspace(self) -> None:
        if self.active_field == TITLE_FIELD:
            self.title = self.title[:-1]
        else:
            self.body = self.body[:-1]


@dataclass(frozen=True, slots=True)
class CloseIssue:
    number: int


@dataclass(frozen=True, slots=True)
class CloseLocalIssue:
    issue_id: int


@dataclass(frozen=True, slots=True)
class RemoveWorktree:
    path: str
    branch: str


ConfirmAction: TypeAlias = CloseIssue | CloseLocalIssue | RemoveWorktree


@dataclass(frozen=True, slots=True)
class ConfirmModal:
    """Pending destructive action. Exists only while in ``ConfirmingMode``."""

    message: str
    action: ConfirmAction


# =============================================================================
# Repository picker
# =============================================================================


@dataclass(slots=True)
class RepoSelectState:
    """Owner prompt, fetched repositories and the filtered pick list."""

    phase: RepoSelectPhase = RepoSelectPhase.TYPING
    input: str = ""
    repos: list[str] = field(default_factory=list)
    filtered_repos: list[str] = field(default_factory=list)
    selected: int = 0
    error: str | None = None
    filter_query: str = ""

    def update_filtered(self) -> None:
        """Recompute the filtered view and clamp the cursor into it."""
        self.filtered_repos = filter_names(self.repos, self.filter_query)
        if self.selected >= len(self.filtered_repos):
            self.selected = max(len(self.filtered_repos) - 1, 0)

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected < len(self.filtered_repos) - 1:
            self.selected += 1

    @property
    def selected_repo(self) -> str | None:
        if 0 <= self.selected < len(self.filtered_repos):
            return self.filtered_repos[self.selected]
        return None


# =============================================================================
# Board
# =============================================================================


def _empty_sections() -> list[list[Card]]:
    return [[] for _ in range(SECTION_COUNT)]


@dataclass(slots=True)
class Board:
    """Four parallel card lists with one selection cursor per list.

    Cursors are always a valid index into their section's visible list, or 0
    when that list is empty. Cross-section relations live in ``relations``,
    rebuilt whenever a section is replaced.
    """

    sections: list[list[Card]] = field(default_factory=_empty_sections)
    active_section: int = Section.ISSUES
    selected_card: list[int] = field(default_factory=lambda: [0] * SECTION_COUNT)
    relations: dict[str, set[str]] = field(default_factory=dict)

    def cards(self, section: int) -> list[Card]:
        return self.sections[section]

    def visible_cards(self, section: int, query: str | None = None) -> list[Card]:
        """Cards shown for ``section``; ``query`` filters the active section only."""
        cards = self.sections[section]
        if query is None or section != self.active_section:
            return cards
        return filter_cards(cards, query)

    def replace(self, section: int, cards: list[Card], query: str | None = None) -> None:
        """Swap a section's list wholesale, then rebuild relations and re-clamp."""
        self.sections[section] = list(cards)
        self._rebuild_relations()
        self.clamp(section, query)

    def clear(self) -> None:
        self.sections = _empty_sections()
        self.selected_card = [0] * SECTION_COUNT
        self.relations = {}

    def clamp(self, section: int, query: str | None = None) -> None:
        count = len(self.visible_cards(section, query))
        if count == 0:
            self.selected_card[section] = 0
        elif self.selected_card[section] >= count:
            self.selected_card[section] = count - 1

    def next_section(self) -> None:
        self.active_section = (self.active_section + 1) % SECTION_COUNT

    def previous_section(self) -> None:
        self.active_section = (self.active_section - 1) % SECTION_COUNT

    def move_up(self) -> None:
        section = self.active_section
        if self.selected_card[section] > 0:
            self.selected_card[section] -= 1

    def move_down(self, query: str | None = None) -> None:
        section = self.active_section
        count = len(self.visible_cards(section, query))
        if self.selected_card[section] < count - 1:
            self.selected_card[section] += 1

    def selected(self, section: int | None = None, query: str | None = None) -> Card | None:
        if section is None:
            section = self.active_section
        cards = self.visible_cards(section, query)
        index = self.selected_card[section]
        return cards[index] if 0 <= index < len(cards) else None

    def related_ids(self, query: str | None = None) -> set[str]:
        """Ids related to the selected card of the active section."""
        card = self.selected(query=query)
        if card is None:
            return set()
        return set(self.relations.get(card.id, ()))

    def _rebuild_relations(self) -> None:
        relations: dict[str, set[str]] = {}
        for cards in self.sections:
            for card in cards:
                for other in card.related:
                    relations.setdefault(card.id, set()).add(other)
                    relations.setdefault(other, set()).add(card.id)
        self.relations = relations


# =============================================================================
# Application
# =============================================================================


@dataclass(slots=True)
class AppState:
    """The single state aggregate driven by the event loop."""

    screen: Screen = Screen.REPO_SELECT
    repo: str = ""
    repo_select: RepoSelectState = field(default_factory=RepoSelectState)
    board: Board = field(default_factory=Board)
    mode: Mode = field(default_factory=NormalMode)
    issue_modal: IssueModal | None = None
    confirm_modal: ConfirmModal | None = None
    status_message: str | None = None

    @property
    def filter_query(self) -> str | None:
        """Live query while filtering, otherwise None."""
        if isinstance(self.mode, FilteringMode):
            return self.mode.query
        return None

    def enter_normal_mode(self) -> None:
        """Leave any mode, dropping whatever modal it owned."""
        self.mode = NormalMode()
        self.issue_modal = None
        self.confirm_modal = None


__all__ = [
    "BODY_FIELD",
    "TITLE_FIELD",
    "AppState",
    "Board",
    "CloseIssue",
    "CloseLocalIssue",
    "ConfirmAction",
    "ConfirmModal",
    "ConfirmingMode",
    "CreatingIssueMode",
    "FilteringMode",
    "IssueModal",
    "Mode",
    "NormalMode",
    "RemoveWorktree",
    "RepoSelectPhase",
    "RepoSelectState",
    "Screen",
]
