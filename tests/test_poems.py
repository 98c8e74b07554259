import asyncio
import json
from urllib.parse import unquote

import httpx
import pytest

from dailyreading.services.poems import PoetryDBFetcher
from dailyreading.settings import Settings

SETTINGS = Settings(poetry_base_url="https://poetry.test")


def _poem(author: str, title: str, lines: int) -> dict:
    return {
        "title": title,
        "author": author,
        "lines": [f"line {n}" for n in range(lines)],
        "linecount": str(lines),
    }


def _poet_from(request: httpx.Request) -> str:
    return unquote(str(request.url)).split("/author/")[1].split("/")[0]


def _fetcher(handler, roster, settings: Settings = SETTINGS) -> tuple[PoetryDBFetcher, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PoetryDBFetcher(client=client, settings=settings, roster=roster), client


@pytest.mark.asyncio
async def test_filters_line_counts_and_caps_per_poet() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        poet = _poet_from(request)
        payload = [_poem(poet, "too short", 3), _poem(poet, "too long", 51)]
        payload += [_poem(poet, f"keep {n}", 4 + n) for n in range(15)]
        return httpx.Response(200, json=payload)

    fetcher, client = _fetcher(handler, ["Emily Dickinson"])
    async with client:
        pool = await fetcher.fetch_poems()

    assert [poem.title for poem in pool] == [f"keep {n}" for n in range(10)]
    assert all(4 <= poem.line_count <= 50 for poem in pool)


@pytest.mark.asyncio
async def test_request_asks_for_selected_fields_with_escaped_author() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=[])

    fetcher, client = _fetcher(handler, ["Percy Bysshe Shelley"])
    async with client:
        await fetcher.fetch_poems()

    assert seen == ["https://poetry.test/author/Percy%20Bysshe%20Shelley/title,author,lines,linecount"]


@pytest.mark.asyncio
async def test_only_leading_poets_are_queried() -> None:
    roster = [f"Poet {n}" for n in range(15)]
    queried: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        queried.append(_poet_from(request))
        return httpx.Response(200, json=[])

    fetcher, client = _fetcher(handler, roster)
    async with client:
        await fetcher.fetch_poems()

    assert sorted(queried) == sorted(roster[:10])


@pytest.mark.asyncio
async def test_one_failing_poet_does_not_empty_the_pool() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        poet = _poet_from(request)
        if poet == "Robert Frost":
            raise httpx.ConnectError("unreachable", request=request)
        if poet == "Walt Whitman":
            return httpx.Response(500)
        if poet == "John Keats":
            return httpx.Response(200, content=b"<html>oops</html>")
        if poet == "Nobody":
            return httpx.Response(200, json={"status": 404, "reason": "Not found"})
        return httpx.Response(200, json=[_poem(poet, f"{poet} poem", 8)])

    roster = ["Emily Dickinson", "Robert Frost", "Walt Whitman", "John Keats", "Nobody", "William Blake"]
    fetcher, client = _fetcher(handler, roster)
    async with client:
        batches = await fetcher.fetch_batches()
        pool = await fetcher.fetch_poems()

    reasons = {batch.poet: batch.reason for batch in batches}
    assert reasons == {
        "Emily Dickinson": None,
        "Robert Frost": "http_error",
        "Walt Whitman": "http_status",
        "John Keats": "invalid_json",
        "Nobody": "unexpected_payload",
        "William Blake": None,
    }
    assert [poem.author for poem in pool] == ["Emily Dickinson", "William Blake"]


@pytest.mark.asyncio
async def test_total_failure_yields_empty_pool() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    fetcher, client = _fetcher(handler, ["Emily Dickinson", "Robert Frost"])
    async with client:
        assert await fetcher.fetch_poems() == []


@pytest.mark.asyncio
async def test_pool_order_follows_roster_even_when_responses_arrive_out_of_order() -> None:
    roster = ["Slow Poet", "Medium Poet", "Fast Poet"]
    delays = {"Slow Poet": 0.03, "Medium Poet": 0.01, "Fast Poet": 0.0}

    async def handler(request: httpx.Request) -> httpx.Response:
        poet = _poet_from(request)
        await asyncio.sleep(delays[poet])
        body = [_poem(poet, f"{poet} {n}", 5) for n in range(2)]
        return httpx.Response(200, content=json.dumps(body).encode())

    fetcher, client = _fetcher(handler, roster)
    async with client:
        pool = await fetcher.fetch_poems()

    assert [poem.title for poem in pool] == [
        "Slow Poet 0",
        "Slow Poet 1",
        "Medium Poet 0",
        "Medium Poet 1",
        "Fast Poet 0",
        "Fast Poet 1",
    ]
