"""GitHub pull request fetching via REST API."""

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError as ModelValidationError

from pr_view import __version__
from pr_view.exceptions import GitHubAPIError
from pr_view.models import ChangeRequest, RepoRef

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
REQUEST_TIMEOUT = 15.0


def _author_login(user: Any) -> str:
    if user is None:
        return ""
    if not isinstance(user, dict):
        raise TypeError(f"expected user to be an object, got {type(user).__name__}")
    return user.get("login") or ""


def _to_change_request(item: Any) -> ChangeRequest:
    if not isinstance(item, dict):
        raise TypeError(f"expected an object, got {type(item).__name__}")
    return ChangeRequest(
        number=item["number"],
        title=item["title"],
        url=item["html_url"],
        author=_author_login(item.get("user")),
        created_at=item["created_at"],
    )


class GitHubFetcher:
    """Fetches open pull requests (or a single one) from the GitHub REST API."""

    def __init__(self, token: Optional[str] = None, base_url: str = GITHUB_API_BASE) -> None:
        self.token = token
        self.base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"pr-view/{__version__}",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=REQUEST_TIMEOUT,
            )
        return self._client

    async def _get_json(self, path: str, **kwargs) -> Any:  # type: ignore[no-untyped-def]
        """GET ``path`` and decode the body, mapping every failure to GitHubAPIError."""
        client = await self._client_instance()
        try:
            resp = await asyncio.wait_for(client.get(path, **kwargs), REQUEST_TIMEOUT)
        except asyncio.TimeoutError as e:
            raise GitHubAPIError(f"request timed out after {REQUEST_TIMEOUT:g}s") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise GitHubAPIError(f"request failed: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise GitHubAPIError(
                f"github API error: {resp.status_code} {resp.reason_phrase}: {resp.text.strip()}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise GitHubAPIError(f"invalid JSON from {path}: {e}") from e

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── Pull Requests ─────────────────────────────────────────────────────

    async def fetch(self, ref: str) -> list[ChangeRequest]:
        """Fetch the open PRs of ``owner/repo`` or the one PR of ``owner/repo#N``."""
        repo = RepoRef.parse(ref)
        if repo.number is not None:
            path = f"/repos/{repo.owner}/{repo.name}/pulls/{repo.number}"
            data = await self._get_json(path)
            items = [data]
        else:
            path = f"/repos/{repo.owner}/{repo.name}/pulls"
            data = await self._get_json(path, params={"state": "open"})
            if not isinstance(data, list):
                raise GitHubAPIError(f"unexpected response from {path}: expected a list")
            items = data

        try:
            prs = [_to_change_request(item) for item in items]
        except (KeyError, TypeError, ModelValidationError) as e:
            raise GitHubAPIError(f"cannot parse pull request from {path}: {e}") from e
        logger.debug("Fetched %d PR(s) for %s", len(prs), ref)
        return prs
