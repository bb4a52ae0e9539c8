"""Pytest configuration and fixtures."""

import pytest

from pr_view.store import RepoStore


@pytest.fixture
def repo_store(tmp_path):
    """A store writing to a throwaway config directory."""
    return RepoStore(tmp_path / "pr-view" / "repos.json")


def make_pr(number: int, title: str = "Fix the thing", owner: str = "owner", repo: str = "repo") -> dict:
    """A pull request payload shaped like the GitHub REST API returns."""
    return {
        "number": number,
        "title": title,
        "html_url": f"https://github.com/{owner}/{repo}/pull/{number}",
        "user": {"login": "octocat"},
        "created_at": "2025-01-10T09:30:00Z",
        "state": "open",
    }


@pytest.fixture
def pr_payload():
    return make_pr
