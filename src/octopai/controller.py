"""Keyboard-driven state machine behind the dashboard.

``Dashboard`` owns the single ``AppState`` and the collaborators. Every key
event is fully processed, including any external command it triggers, before
the next one is read. The Textual layer only forwards keys here and redraws
from the resulting state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from octopai.adapters.base import CommandError
from octopai.adapters.local_issues import LocalIssueError
from octopai.config import OctopaiConfig
from octopai.constants import PRIMARY_BRANCHES, SECTION_LABELS, Section
from octopai.debug_log import log
from octopai.models import IssueKind, IssueRef, repo_owner
from octopai.state import (
    TITLE_FIELD,
    AppState,
    CloseIssue,
    CloseLocalIssue,
    ConfirmingMode,
    ConfirmModal,
    CreatingIssueMode,
    FilteringMode,
    IssueModal,
    NormalMode,
    RemoveWorktree,
    RepoSelectPhase,
    RepoSelectState,
    Screen,
)
from octopai.workflows import EnvironmentPlan, EnvironmentWorkflows, WorkflowError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from textual import events

    from octopai.adapters.git import GitClient
    from octopai.adapters.github import GitHubClient
    from octopai.adapters.local_issues import LocalIssueStore
    from octopai.adapters.tmux import TmuxClient
    from octopai.models import Card
    from octopai.preflight import PreflightResult
    from octopai.state import ConfirmAction

UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})


@dataclass(frozen=True, slots=True)
class KeyInput:
    """A key press, named the way Textual names keys (``"enter"``, ``"ctrl+s"``)."""

    key: str
    character: str | None = None

    @classmethod
    def from_event(cls, event: events.Key) -> KeyInput:
        return cls(event.key, event.character)

    @property
    def text(self) -> str | None:
        """Printable character carried by the key, if any."""
        if self.key.startswith("ctrl+") or not self.character:
            return None
        return self.character if self.character.isprintable() else None


class KeyResult(Enum):
    HANDLED = auto()
    IGNORED = auto()
    QUIT = auto()


class Dashboard:
    """Applies key presses to ``AppState`` and runs the resulting side effects."""

    def __init__(
        self,
        *,
        github: GitHubClient,
        git: GitClient,
        tmux: TmuxClient,
        local_issues: LocalIssueStore,
        config_path: Path | None = None,
        on_loading: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.state = AppState()
        self.config = OctopaiConfig()
        self._github = github
        self._git = git
        self._tmux = tmux
        self._local_issues = local_issues
        self._workflows = EnvironmentWorkflows(git, tmux)
        self._config_path = config_path
        self._on_loading = on_loading

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self, preflight: PreflightResult | None = None) -> None:
        """Open the saved repository, or the picker when none was ever chosen.

        Tools the pre-flight check found missing are reported on whichever
        screen opens: in the board status line, or as the picker's error.
        """
        self.config = OctopaiConfig.load(self._config_path)
        if self.config.repo:
            await self.open_repo(self.config.repo)
        else:
            self.enter_repo_select()

        summary = preflight.summary() if preflight is not None else None
        if summary is None:
            return
        if self.state.screen is Screen.BOARD:
            self.state.status_message = "; ".join(
                part for part in (summary, self.state.status_message) if part
            )
        else:
            self.state.repo_select.error = summary

    def enter_repo_select(self, seed: str = "") -> None:
        self.state.screen = Screen.REPO_SELECT
        self.state.repo_select = RepoSelectState(input=seed)

    async def open_repo(self, repo: str) -> None:
        state = self.state
        log.info("Opening repository", repo=repo)
        state.repo = repo
        state.screen = Screen.BOARD
        state.enter_normal_mode()
        state.board.clear()
        state.board.active_section = Section.ISSUES
        await self.load_board()

    async def load_board(self) -> None:
        """Fetch all four sections; failures become one status message."""
        errors: list[str] = []
        for section in Section:
            try:
                await self.refresh_section(section)
            except CommandError as exc:
                log.warning("Section load failed", section=section.name, error=str(exc))
                errors.append(f"Could not load {SECTION_LABELS[section].lower()}: {exc}")
        if errors:
            self.state.status_message = "; ".join(errors)

    async def refresh_section(self, section: Section) -> None:
        cards = await self._fetch_section(section)
        self.state.board.replace(section, cards, self.state.filter_query)

    async def _fetch_section(self, section: Section) -> list[Card]:
        repo = self.state.repo
        match section:
            case Section.ISSUES:
                remote = await self._github.list_issues(repo)
                return remote + self._local_issues.list_issues(repo)
            case Section.WORKTREES:
                return await self._git.list_worktrees()
            case Section.PULL_REQUESTS:
                return await self._github.list_pull_requests(repo)
            case Section.SESSIONS:
                return await self._tmux.list_sessions()

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def handle_key(self, key: KeyInput) -> KeyResult:
        if self.state.screen is Screen.REPO_SELECT:
            match self.state.repo_select.phase:
                case RepoSelectPhase.TYPING:
                    return await self._handle_typing(key)
                case RepoSelectPhase.PICKING:
                    return await self._handle_picking(key)
                case RepoSelectPhase.LOADING:
                    return KeyResult.IGNORED

        match self.state.mode:
            case NormalMode():
                self.state.status_message = None
                return await self._handle_normal(key)
            case FilteringMode():
                return self._handle_filtering(key)
            case CreatingIssueMode():
                return await self._handle_creating_issue(key)
            case ConfirmingMode():
                return await self._handle_confirming(key)
        return KeyResult.IGNORED

    # -------------------------------------------------------------------------
    # Repository picker
    # -------------------------------------------------------------------------

    async def _handle_typing(self, key: KeyInput) -> KeyResult:
        picker = self.state.repo_select
        match key.key:
            case "escape":
                if not self.state.repo:
                    return KeyResult.QUIT
                self.state.screen = Screen.BOARD
            case "enter":
                await self._fetch_repos(picker.input.strip())
            case "backspace":
                picker.input = picker.input[:-1]
            case _:
                if key.text is None:
                    return KeyResult.IGNORED
                picker.input += key.text
        return KeyResult.HANDLED

    async def _fetch_repos(self, owner: str) -> None:
        picker = self.state.repo_select
        if not owner:
            picker.error = "Please enter an org or user name"
            return

        picker.error = None
        picker.phase = RepoSelectPhase.LOADING
        if self._on_loading is not None:
            await self._on_loading()

        try:
            repos = await self._github.list_repos(owner)
        except CommandError as exc:
            log.warning("Repository listing failed", owner=owner, error=str(exc))
            picker.error = str(exc)
            picker.phase = RepoSelectPhase.TYPING
            return

        picker.repos = repos
        picker.filter_query = ""
        picker.selected = 0
        picker.update_filtered()
        picker.phase = RepoSelectPhase.PICKING

    async def _handle_picking(self, key: KeyInput) -> KeyResult:
        picker = self.state.repo_select
        if key.key in UP_KEYS:
            picker.move_up()
            return KeyResult.HANDLED
        if key.key in DOWN_KEYS:
            picker.move_down()
            return KeyResult.HANDLED

        match key.key:
            case "escape":
                picker.phase = RepoSelectPhase.TYPING
                picker.filter_query = ""
                picker.update_filtered()
            case "enter":
                repo = picker.selected_repo
                if repo is None:
                    return KeyResult.IGNORED
                self._remember_repo(repo)
                await self.open_repo(repo)
            case "slash":
                picker.filter_query = ""
                picker.update_filtered()
            case "backspace":
                picker.filter_query = picker.filter_query[:-1]
                picker.update_filtered()
            case _:
                if key.text is None:
                    return KeyResult.IGNORED
                picker.filter_query += key.text
                picker.update_filtered()
        return KeyResult.HANDLED

    def _remember_repo(self, repo: str) -> None:
        self.config = self.config.model_copy(update={"repo": repo})
        try:
            self.config.save(self._config_path)
        except OSError as exc:
            log.error("Failed to save config", repo=repo, error=str(exc))

    # -------------------------------------------------------------------------
    # Board
    # -------------------------------------------------------------------------

    async def _handle_normal(self, key: KeyInput) -> KeyResult:
        state = self.state
        board = state.board
        section = board.active_section

        if key.key in UP_KEYS:
            board.move_up()
            return KeyResult.HANDLED
        if key.key in DOWN_KEYS:
            board.move_down()
            return KeyResult.HANDLED

        match key.key:
            case "q" | "escape":
                return KeyResult.QUIT
            case "enter":
                self.enter_repo_select(repo_owner(state.repo))
            case "tab":
                board.next_section()
            case "shift+tab":
                board.previous_section()
            case "slash":
                state.mode = FilteringMode()
            case "r":
                await self.load_board()
            case "n" if section == Section.ISSUES:
                state.mode = CreatingIssueMode()
                state.issue_modal = IssueModal()
            case "w" if section == Section.ISSUES:
                await self._provision_selected()
            case "d" if section == Section.ISSUES:
                self._confirm_close_issue()
            case "d" if section == Section.WORKTREES:
                self._confirm_remove_worktree()
            case _:
                return KeyResult.IGNORED
        return KeyResult.HANDLED

    def _handle_filtering(self, key: KeyInput) -> KeyResult:
        state = self.state
        board = state.board
        mode = state.mode
        assert isinstance(mode, FilteringMode)

        match key.key:
            case "escape":
                state.enter_normal_mode()
                board.clamp(board.active_section)
            case "backspace":
                mode.query = mode.query[:-1]
                board.clamp(board.active_section, mode.query)
            case "up":
                board.move_up()
            case "down":
                board.move_down(mode.query)
            case _:
                if key.text is None:
                    return KeyResult.IGNORED
                mode.query += key.text
                board.clamp(board.active_section, mode.query)
        return KeyResult.HANDLED

    async def _provision_selected(self) -> None:
        card = self.state.board.selected(Section.ISSUES)
        if card is None:
            return
        ref = IssueRef.parse(card.id)
        if ref is None:
            return

        plan = EnvironmentPlan(
            repo=self.state.repo,
            issue=ref,
            title=card.title,
            body=card.full_description or "",
        )
        try:
            await self._workflows.provision(plan)
        except WorkflowError as exc:
            self.state.status_message = f"Error: {exc}"
            if exc.left_behind:
                await self._refresh_quietly(Section.WORKTREES, Section.SESSIONS)
            return

        self.state.status_message = f"Created worktree and session for issue {ref.label}"
        await self._refresh_quietly(Section.WORKTREES, Section.SESSIONS)

    def _confirm_close_issue(self) -> None:
        card = self.state.board.selected(Section.ISSUES)
        if card is None:
            return
        ref = IssueRef.parse(card.id)
        if ref is None:
            return

        action: ConfirmAction
        if ref.kind is IssueKind.LOCAL:
            action = CloseLocalIssue(ref.number)
        else:
            action = CloseIssue(ref.number)
        self._ask(f"Close issue {ref.label}?\n\n{card.title}", action)

    def _confirm_remove_worktree(self) -> None:
        card = self.state.board.selected(Section.WORKTREES)
        if card is None:
            return
        branch = card.title
        if branch in PRIMARY_BRANCHES:
            self.state.status_message = "Cannot remove main/master worktree"
            return

        path = card.path or card.description
        self._ask(
            f"Remove worktree '{branch}'?\n\n"
            f"Path: {path}\n"
            "This will also delete the branch and kill any tmux session.",
            RemoveWorktree(path, branch),
        )

    def _ask(self, message: str, action: ConfirmAction) -> None:
        self.state.mode = ConfirmingMode()
        self.state.confirm_modal = ConfirmModal(message, action)

    # -------------------------------------------------------------------------
    # Issue form
    # -------------------------------------------------------------------------

    async def _handle_creating_issue(self, key: KeyInput) -> KeyResult:
        modal = self.state.issue_modal
        if modal is None:
            self.state.enter_normal_mode()
            return KeyResult.HANDLED

        match key.key:
            case "escape":
                self.state.enter_normal_mode()
            case "tab":
                modal.toggle_field()
            case "enter":
                if modal.active_field == TITLE_FIELD:
                    modal.toggle_field()
                else:
                    modal.insert("\n")
            case "ctrl+s":
                await self._submit_issue(modal, local=False)
            case "ctrl+l":
                await self._submit_issue(modal, local=True)
            case "backspace":
                modal.backspace()
            case _:
                if key.text is None:
                    return KeyResult.IGNORED
                modal.insert(key.text)
        return KeyResult.HANDLED

    async def _submit_issue(self, modal: IssueModal, *, local: bool) -> None:
        title = modal.title.strip()
        if not title:
            modal.error = "Title cannot be empty"
            return

        repo = self.state.repo
        try:
            if local:
                issue_id = self._local_issues.create(repo, title, modal.body)
                log.info("Created local issue", repo=repo, id=issue_id)
            else:
                await self._github.create_issue(repo, title, modal.body)
                log.info("Created issue", repo=repo, title=title)
        except (CommandError, LocalIssueError) as exc:
            modal.error = str(exc)
            return

        self.state.enter_normal_mode()
        await self._refresh_quietly(Section.ISSUES)

    # -------------------------------------------------------------------------
    # Confirmation
    # -------------------------------------------------------------------------

    async def _handle_confirming(self, key: KeyInput) -> KeyResult:
        match key.key:
            case "y" | "Y":
                modal = self.state.confirm_modal
                self.state.enter_normal_mode()
                if modal is not None:
                    await self._execute(modal.action)
            case "n" | "N" | "escape":
                self.state.enter_normal_mode()
            case _:
                return KeyResult.IGNORED
        return KeyResult.HANDLED

    async def _execute(self, action: ConfirmAction) -> None:
        repo = self.state.repo
        try:
            match action:
                case CloseIssue(number=number):
                    await self._github.close_issue(repo, number)
                    message = f"Closed issue #{number}"
                    affected = (Section.ISSUES,)
                case CloseLocalIssue(issue_id=issue_id):
                    self._local_issues.close(repo, issue_id)
                    message = f"Closed issue L-{issue_id}"
                    affected = (Section.ISSUES,)
                case RemoveWorktree(path=path, branch=branch):
                    await self._workflows.teardown(path, branch)
                    message = f"Removed worktree '{branch}'"
                    affected = (Section.WORKTREES, Section.SESSIONS)
        except (CommandError, LocalIssueError, WorkflowError) as exc:
            log.warning("Confirmed action failed", action=repr(action), error=str(exc))
            self.state.status_message = f"Error: {exc}"
            return

        log.info(message)
        self.state.status_message = message
        await self._refresh_quietly(*affected)

    async def _refresh_quietly(self, *sections: Section) -> None:
        """Re-read sections after a mutation; a failed re-read keeps the old list."""
        for section in sections:
            try:
                await self.refresh_section(section)
            except CommandError as exc:
                log.warning("Refresh failed", section=section.name, error=str(exc))


__all__ = ["DOWN_KEYS", "UP_KEYS", "Dashboard", "KeyInput", "KeyResult"]
