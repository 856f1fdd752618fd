"""Test helpers package."""

from tests.helpers.runner import FakeCommandRunner, gh_issue, gh_pull_request, porcelain

__all__ = ["FakeCommandRunner", "gh_issue", "gh_pull_request", "porcelain"]
