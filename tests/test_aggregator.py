"""Tests for the concurrent fetch across tracked refs."""

import httpx
import pytest
import respx

from pr_view.aggregator import list_all, run_list_all
from pr_view.fetcher import GitHubFetcher


class TestListAll:
    @pytest.mark.asyncio
    @respx.mock
    async def test_success_and_404(self, pr_payload):
        respx.get("https://api.github.com/repos/a/one/pulls").mock(
            return_value=httpx.Response(
                200, json=[pr_payload(n, owner="a", repo="one") for n in (1, 2, 3)]
            )
        )
        respx.get("https://api.github.com/repos/b/two/pulls").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )

        outcomes = await list_all(["a/one", "b/two"], token="t")
        by_ref = {o.ref: o for o in outcomes}

        assert len(outcomes) == 2
        assert by_ref["a/one"].ok
        assert len(by_ref["a/one"].pull_requests) == 3
        assert not by_ref["b/two"].ok
        assert "404" in by_ref["b/two"].error

    @pytest.mark.asyncio
    @respx.mock
    async def test_every_ref_attempted(self, pr_payload):
        failing = respx.get("https://api.github.com/repos/a/one/pulls").mock(
            side_effect=httpx.ConnectTimeout("timed out")
        )
        single = respx.get("https://api.github.com/repos/b/two/pulls/9").mock(
            return_value=httpx.Response(200, json=pr_payload(9, owner="b", repo="two"))
        )

        outcomes = await list_all(["a/one", "b/two#9", "bogus"])

        assert failing.called
        assert single.called
        by_ref = {o.ref: o for o in outcomes}
        assert "request failed" in by_ref["a/one"].error
        assert by_ref["b/two#9"].pull_requests[0].number == 9
        assert "owner/repo format" in by_ref["bogus"].error

    @pytest.mark.asyncio
    @respx.mock
    async def test_undecodable_record_is_captured(self, pr_payload):
        item = pr_payload(1, owner="a", repo="one")
        item["user"] = "ghost"
        respx.get("https://api.github.com/repos/a/one/pulls").mock(
            return_value=httpx.Response(200, json=[item])
        )
        respx.get("https://api.github.com/repos/b/two/pulls").mock(
            return_value=httpx.Response(200, json=[pr_payload(2, owner="b", repo="two")])
        )

        outcomes = await list_all(["a/one", "b/two"])
        by_ref = {o.ref: o for o in outcomes}

        assert len(outcomes) == 2
        assert "cannot parse" in by_ref["a/one"].error
        assert by_ref["b/two"].pull_requests[0].number == 2

    @pytest.mark.asyncio
    async def test_no_refs(self):
        assert await list_all([]) == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_injected_fetcher_left_open(self):
        respx.get("https://api.github.com/repos/a/one/pulls").mock(
            return_value=httpx.Response(200, json=[])
        )
        fetcher = GitHubFetcher()
        outcomes = await list_all(["a/one"], fetcher=fetcher)
        assert outcomes[0].pull_requests == []
        assert fetcher._client is not None
        await fetcher.close()


@respx.mock
def test_run_list_all_blocking():
    respx.get("https://api.github.com/repos/a/one/pulls").mock(
        return_value=httpx.Response(200, json=[])
    )
    outcomes = run_list_all(["a/one"])
    assert [o.ref for o in outcomes] == ["a/one"]
