"""Concurrent fan-out of PR fetches across every tracked reference."""

import asyncio
import logging
from typing import Optional, Sequence

from pr_view.exceptions import PRViewError
from pr_view.fetcher import GitHubFetcher
from pr_view.models import FetchOutcome

logger = logging.getLogger(__name__)


async def _fetch_one(fetcher: GitHubFetcher, ref: str) -> FetchOutcome:
    try:
        prs = await fetcher.fetch(ref)
    except PRViewError as e:
        logger.debug("Fetching %s failed: %s", ref, e)
        return FetchOutcome(ref=ref, error=str(e))
    return FetchOutcome(ref=ref, pull_requests=prs)


async def _gather(fetcher: GitHubFetcher, refs: Sequence[str]) -> list[FetchOutcome]:
    outcomes: list[FetchOutcome] = []
    tasks = [asyncio.create_task(_fetch_one(fetcher, ref)) for ref in refs]
    for next_done in asyncio.as_completed(tasks):
        outcomes.append(await next_done)
    return outcomes


async def list_all(
    refs: Sequence[str],
    token: Optional[str] = None,
    fetcher: Optional[GitHubFetcher] = None,
) -> list[FetchOutcome]:
    """Fetch every ref concurrently; one outcome per ref, in completion order.

    A failing ref never stops the others.  When no ``fetcher`` is given one
    is created with ``token`` and closed before returning.
    """
    if fetcher is None:
        async with GitHubFetcher(token=token) as owned:
            return await _gather(owned, refs)
    return await _gather(fetcher, refs)


def run_list_all(refs: Sequence[str], token: Optional[str] = None) -> list[FetchOutcome]:
    """Blocking wrapper around :func:`list_all` for the CLI."""
    return asyncio.run(list_all(refs, token=token))
