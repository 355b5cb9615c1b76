# tests/test_hn_client.py

from __future__ import annotations

import httpx
import pytest

from hn_sync.core.errors import FetchError, ItemUnavailable
from hn_sync.core.models import Listing
from hn_sync.hn.client import HNClient, parse_item

BASE = "https://hn.test/v0"


def _client(routes: dict[str, object], *, status: int = 200, newest_limit: int = 30) -> HNClient:
    """HNClient whose transport serves JSON from `routes` (path -> payload)."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v0/")
        if path not in routes:
            return httpx.Response(404, json={"error": "not found"})
        payload = routes[path]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, httpx.Response):
            return payload
        if payload is None:
            return httpx.Response(status, content=b"null", headers={"content-type": "application/json"})
        return httpx.Response(status, json=payload)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HNClient(base_url=BASE, newest_limit=newest_limit, http=http)


def _story(item_id: int, **extra) -> dict:
    data = {
        "id": item_id,
        "type": "story",
        "title": f"Story {item_id}",
        "by": "pg",
        "score": 3,
        "url": f"https://example.com/{item_id}",
    }
    data.update(extra)
    return data


def test_parse_item_maps_firebase_fields() -> None:
    detail = parse_item(_story(8863, kids=[8952, 9224], descendants=71, score=111))

    assert detail.listing == Listing(
        id=8863,
        title="Story 8863",
        url="https://example.com/8863",
        score=111,
        user="pg",
    )
    assert detail.comment_ids == (8952, 9224)
    assert detail.comment_count == 71


def test_parse_item_text_post_links_to_discussion() -> None:
    data = _story(121003, title="Ask HN: The Arc Effect", url=None)
    del data["url"]

    detail = parse_item(data)
    assert detail.listing.url == "https://news.ycombinator.com/item?id=121003"


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"id": 1, "deleted": True},
        {"id": 2, "dead": True, "title": "spam"},
        {"id": 3, "by": "x"},
        {"id": "abc", "title": "t"},
        {"id": 4, "title": "   "},
    ],
)
def test_parse_item_rejects_unusable_payloads(payload) -> None:
    with pytest.raises(ItemUnavailable):
        parse_item(payload)


@pytest.mark.asyncio
async def test_newest_fetches_items_in_rank_order_and_skips_bad_ones() -> None:
    client = _client(
        {
            "newstories.json": [30, 20, 10, 5],
            "item/30.json": _story(30),
            "item/20.json": None,
            "item/10.json": _story(10, dead=True),
            "item/5.json": _story(5),
        }
    )
    try:
        listings = await client.newest()
    finally:
        await client.aclose()

    assert [x.id for x in listings] == [30, 5]


@pytest.mark.asyncio
async def test_newest_respects_limit() -> None:
    routes: dict[str, object] = {"newstories.json": [4, 3, 2, 1]}
    routes.update({f"item/{i}.json": _story(i) for i in (1, 2, 3, 4)})
    client = _client(routes, newest_limit=2)
    try:
        listings = await client.newest()
    finally:
        await client.aclose()

    assert [x.id for x in listings] == [4, 3]


@pytest.mark.asyncio
async def test_newest_server_error_is_fetch_error() -> None:
    client = _client({"newstories.json": [1]}, status=500)
    try:
        with pytest.raises(FetchError):
            await client.newest()
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_newest_connection_error_is_fetch_error() -> None:
    client = _client({"newstories.json": httpx.ConnectError("connection refused")})
    try:
        with pytest.raises(FetchError):
            await client.newest()
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_newest_malformed_payload_is_fetch_error() -> None:
    client = _client({"newstories.json": {"not": "a list"}})
    try:
        with pytest.raises(FetchError):
            await client.newest()
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_thread_returns_current_state() -> None:
    client = _client({"item/77.json": _story(77, score=42, kids=[78])})
    try:
        detail = await client.thread(77)
    finally:
        await client.aclose()

    assert detail.listing.score == 42
    assert detail.comment_ids == (78,)


@pytest.mark.asyncio
async def test_thread_missing_item_is_fetch_error() -> None:
    client = _client({"item/1.json": None})
    try:
        with pytest.raises(FetchError):
            await client.thread(1)
        with pytest.raises(FetchError):
            await client.thread(2)
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_newest_item_outage_is_fetch_error() -> None:
    down = httpx.ConnectError("network down")
    client = _client(
        {
            "newstories.json": [1, 2, 3],
            "item/1.json": down,
            "item/2.json": down,
            "item/3.json": down,
        }
    )
    try:
        with pytest.raises(FetchError) as exc:
            await client.newest()
    finally:
        await client.aclose()

    assert not isinstance(exc.value, ItemUnavailable)


@pytest.mark.asyncio
async def test_newest_single_item_server_error_fails_the_page() -> None:
    client = _client(
        {
            "newstories.json": [1, 2],
            "item/1.json": _story(1),
            "item/2.json": httpx.Response(503, text="Service Unavailable"),
        }
    )
    try:
        with pytest.raises(FetchError):
            await client.newest()
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_thread_rejects_payload_for_another_item() -> None:
    client = _client({"item/5.json": _story(6)})
    try:
        with pytest.raises(FetchError):
            await client.thread(5)
    finally:
        await client.aclose()
