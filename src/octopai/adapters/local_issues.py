"""Per-repository local issue store kept in a JSON file."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Literal, TypeAlias

from filelock import FileLock
from pydantic import BaseModel, Field, ValidationError

from octopai.atomic import atomic_write_json
from octopai.debug_log import log
from octopai.models import Card, summarize_body
from octopai.paths import get_local_issues_dir

if TYPE_CHECKING:
    from pathlib import Path

LocalIssueState: TypeAlias = Literal["open", "closed"]


class LocalIssueError(RuntimeError):
    """Raised when a local issue cannot be found or written."""


class LocalIssue(BaseModel):
    id: int
    title: str
    body: str = ""
    state: LocalIssueState = "open"

    def to_card(self) -> Card:
        description, full_description = summarize_body(self.body)
        return Card(
            id=f"local-{self.id}",
            title=f"L-{self.id} {self.title}",
            description=description,
            full_description=full_description,
            tag="local",
            tag_color="cyan",
            is_local=True,
        )


class LocalIssueFile(BaseModel):
    next_id: int = 0
    issues: list[LocalIssue] = Field(default_factory=list)


def repo_slug(repo: str) -> str:
    return repo.replace("/", "-")


class LocalIssueStore:
    """CRUD over ``<config_dir>/local_issues/<owner>-<name>.json``."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir

    def path_for(self, repo: str) -> Path:
        base = self._base_dir if self._base_dir is not None else get_local_issues_dir()
        return base / f"{repo_slug(repo)}.json"

    def _lock(self, repo: str) -> FileLock:
        path = self.path_for(repo)
        path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(str(path.with_suffix(".json.lock")))

    def _load(self, repo: str) -> LocalIssueFile:
        path = self.path_for(repo)
        if not path.exists():
            return LocalIssueFile()
        try:
            return LocalIssueFile.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, ValidationError) as exc:
            log.warning("Ignoring unreadable local issue store", path=str(path), error=str(exc))
            return LocalIssueFile()

    def _save(self, repo: str, store: LocalIssueFile) -> None:
        try:
            atomic_write_json(self.path_for(repo), store.model_dump())
        except OSError as exc:
            raise LocalIssueError(f"Failed to write: {exc}") from exc

    def list_issues(self, repo: str, state: LocalIssueState = "open") -> list[Card]:
        return [issue.to_card() for issue in self._load(repo).issues if issue.state == state]

    def get(self, repo: str, issue_id: int) -> LocalIssue:
        return self._find(self._load(repo), issue_id)

    def create(self, repo: str, title: str, body: str) -> int:
        with self._lock(repo):
            store = self._load(repo)
            store.next_id += 1
            store.issues.append(LocalIssue(id=store.next_id, title=title, body=body))
            self._save(repo, store)
            return store.next_id

    def edit(self, repo: str, issue_id: int, title: str, body: str) -> None:
        with self._lock(repo):
            store = self._load(repo)
            issue = self._find(store, issue_id)
            issue.title = title
            issue.body = body
            self._save(repo, store)

    def close(self, repo: str, issue_id: int) -> None:
        with self._lock(repo):
            store = self._load(repo)
            self._find(store, issue_id).state = "closed"
            self._save(repo, store)

    @staticmethod
    def _find(store: LocalIssueFile, issue_id: int) -> LocalIssue:
        for issue in store.issues:
            if issue.id == issue_id:
                return issue
        raise LocalIssueError(f"Local issue L-{issue_id} not found")


__all__ = ["LocalIssue", "LocalIssueError", "LocalIssueStore", "repo_slug"]
