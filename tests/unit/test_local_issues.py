"""Tests for the per-repository local issue store."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from octopai.adapters import LocalIssueError, LocalIssueStore
from octopai.adapters.local_issues import repo_slug

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit

REPO = "acme/widgets"


def test_slug_and_path(local_store: LocalIssueStore, tmp_path: Path) -> None:
    assert repo_slug(REPO) == "acme-widgets"
    assert local_store.path_for(REPO) == tmp_path / "local_issues" / "acme-widgets.json"


def test_create_assigns_sequential_ids(local_store: LocalIssueStore) -> None:
    assert local_store.create(REPO, "First", "") == 1
    assert local_store.create(REPO, "Second", "Body") == 2

    data = json.loads(local_store.path_for(REPO).read_text())
    assert data["next_id"] == 2
    assert [issue["title"] for issue in data["issues"]] == ["First", "Second"]
    assert data["issues"][0]["state"] == "open"


def test_cards(local_store: LocalIssueStore) -> None:
    local_store.create(REPO, "Tidy up", "x" * 100)

    (card,) = local_store.list_issues(REPO)

    assert card.id == "local-1"
    assert card.title == "L-1 Tidy up"
    assert card.tag == "local"
    assert card.is_local
    assert card.description.endswith("...")
    assert card.full_description == "x" * 100


def test_edit_and_close(local_store: LocalIssueStore) -> None:
    issue_id = local_store.create(REPO, "Draft", "")

    local_store.edit(REPO, issue_id, "Final", "Body")
    assert local_store.get(REPO, issue_id).title == "Final"

    local_store.close(REPO, issue_id)
    assert local_store.list_issues(REPO) == []
    assert [card.id for card in local_store.list_issues(REPO, "closed")] == ["local-1"]


def test_ids_not_reused_after_close(local_store: LocalIssueStore) -> None:
    local_store.close(REPO, local_store.create(REPO, "One", ""))

    assert local_store.create(REPO, "Two", "") == 2


def test_missing_issue(local_store: LocalIssueStore) -> None:
    with pytest.raises(LocalIssueError, match="Local issue L-9 not found"):
        local_store.close(REPO, 9)


def test_stores_are_per_repository(local_store: LocalIssueStore) -> None:
    local_store.create(REPO, "Widget issue", "")

    assert local_store.list_issues("acme/gadgets") == []


def test_corrupt_store_reads_as_empty(local_store: LocalIssueStore) -> None:
    path = local_store.path_for(REPO)
    path.parent.mkdir(parents=True)
    path.write_text("{broken")

    assert local_store.list_issues(REPO) == []
