"""GitHub collaborator backed by the gh CLI."""

from __future__ import annotations

import json

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from octopai.adapters.base import CliAdapterBase, CommandError
from octopai.constants import ISSUE_LIST_LIMIT, PR_LIST_LIMIT, REPO_LIST_LIMIT
from octopai.models import Card, IssueRef, label_color, summarize_body


class GhLabel(BaseModel):
    name: str = ""


class GhIssue(BaseModel):
    """Issue payload from ``gh issue list --json number,title,body,labels``."""

    number: int = 0
    title: str = ""
    body: str | None = ""
    labels: list[GhLabel] = Field(default_factory=list)

    def to_card(self) -> Card:
        description, full_description = summarize_body(self.body or "")
        if self.labels:
            tag = self.labels[0].name
            tag_color = label_color(tag)
        else:
            tag, tag_color = "open", "green"
        return Card(
            id=f"issue-{self.number}",
            title=f"#{self.number} {self.title}",
            description=description,
            full_description=full_description,
            tag=tag,
            tag_color=tag_color,
        )


class GhPullRequest(BaseModel):
    """Pull request payload from ``gh pr list``."""

    number: int = 0
    title: str = ""
    body: str | None = ""
    is_draft: bool = Field(default=False, alias="isDraft")
    state: str = "OPEN"
    head_ref_name: str = Field(default="", alias="headRefName")
    url: str = ""

    def to_card(self) -> Card:
        description, full_description = summarize_body(self.body or "")
        is_merged = self.state.upper() == "MERGED"
        if is_merged:
            tag, tag_color = "merged", "magenta"
        elif self.is_draft:
            tag, tag_color = "draft", "grey50"
        else:
            tag, tag_color = "open", "green"

        related: set[str] = set()
        if self.head_ref_name:
            related.add(f"wt-{self.head_ref_name}")
            if (ref := IssueRef.parse(self.head_ref_name)) is not None:
                related.add(ref.card_id)

        return Card(
            id=f"pr-{self.number}",
            title=f"#{self.number} {self.title}",
            description=description,
            full_description=full_description,
            tag=tag,
            tag_color=tag_color,
            related=frozenset(related),
            url=self.url or None,
            pr_number=self.number,
            is_draft=self.is_draft,
            is_merged=is_merged,
            head_branch=self.head_ref_name or None,
        )


_ISSUES = TypeAdapter(list[GhIssue])
_PULL_REQUESTS = TypeAdapter(list[GhPullRequest])


class GitHubClient(CliAdapterBase):
    """Issue-tracker collaborator: repositories, issues and pull requests."""

    executable = "gh"

    async def list_repos(self, owner: str) -> list[str]:
        """Return ``owner/name`` identifiers for up to 50 repositories of ``owner``."""
        result = await self._run_checked(
            "gh error",
            "repo",
            "list",
            owner,
            "--json",
            "nameWithOwner",
            "--limit",
            str(REPO_LIST_LIMIT),
            "-q",
            ".[].nameWithOwner",
        )
        repos = [line for line in result.stdout_text().splitlines() if line]
        if not repos:
            raise CommandError(f"No repos found for '{owner}'")
        return repos

    async def list_issues(self, repo: str) -> list[Card]:
        result = await self._run_checked(
            "gh error",
            "issue",
            "list",
            "--repo",
            repo,
            "--json",
            "number,title,body,labels",
            "--limit",
            str(ISSUE_LIST_LIMIT),
        )
        try:
            issues = _ISSUES.validate_python(json.loads(result.stdout_text()))
        except (ValueError, ValidationError) as exc:
            raise CommandError(f"gh error: unexpected issue list output ({exc})") from exc
        return [issue.to_card() for issue in issues]

    async def create_issue(self, repo: str, title: str, body: str) -> None:
        await self._run_checked(
            "gh error", "issue", "create", "--repo", repo, "--title", title, "--body", body
        )

    async def close_issue(self, repo: str, number: int) -> None:
        await self._run_checked("gh error", "issue", "close", "--repo", repo, str(number))

    async def list_pull_requests(self, repo: str) -> list[Card]:
        result = await self._run_checked(
            "gh error",
            "pr",
            "list",
            "--repo",
            repo,
            "--json",
            "number,title,body,isDraft,state,headRefName,url",
            "--limit",
            str(PR_LIST_LIMIT),
        )
        try:
            pulls = _PULL_REQUESTS.validate_python(json.loads(result.stdout_text()))
        except (ValueError, ValidationError) as exc:
            raise CommandError(f"gh error: unexpected pull request output ({exc})") from exc
        return [pull.to_card() for pull in pulls]


__all__ = ["GhIssue", "GhPullRequest", "GitHubClient"]
