# src/hn_sync/hn/client.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..core.errors import FetchError, ItemUnavailable
from ..core.models import Id, Listing, ThreadDetail

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://hacker-news.firebaseio.com/v0"
ITEM_PAGE_URL = "https://news.ycombinator.com/item?id={id}"


def parse_item(data: Any) -> ThreadDetail:
    """
    Convert a Firebase item payload into a ThreadDetail.

    Raises ItemUnavailable for null, deleted, or dead items and for payloads
    missing the required fields.
    """
    if not isinstance(data, dict):
        raise ItemUnavailable(f"item payload is not an object: {type(data).__name__}")
    if data.get("deleted") or data.get("dead"):
        raise ItemUnavailable(f"item {data.get('id')} is deleted or dead")

    try:
        item_id = int(data["id"])
        title = str(data["title"]).strip()
    except (KeyError, TypeError, ValueError) as e:
        raise ItemUnavailable(f"malformed item payload: {e!r}") from e
    if not title:
        raise ItemUnavailable(f"item {item_id} has an empty title")

    # Text posts (Ask HN etc.) have no url; point at the discussion page.
    url = data.get("url") or ITEM_PAGE_URL.format(id=item_id)

    score = data.get("score")
    descendants = data.get("descendants")
    kids = data.get("kids") or []

    try:
        listing = Listing(
            id=item_id,
            title=title,
            url=str(url),
            score=int(score) if score is not None else None,
            user=data.get("by"),
        )
        return ThreadDetail(
            listing=listing,
            comment_ids=tuple(int(k) for k in kids),
            comment_count=int(descendants) if descendants is not None else None,
        )
    except (TypeError, ValueError) as e:
        raise ItemUnavailable(f"malformed item {item_id}: {e!r}") from e


class HNClient:
    """
    Async client for the public Hacker News Firebase API.

    The underlying httpx.AsyncClient is created lazily and shared by every
    pipeline task; call aclose() on shutdown.
    """

    def __init__(
            self,
            *,
            base_url: str = DEFAULT_API_BASE_URL,
            newest_limit: int = 30,
            timeout_seconds: float = 15.0,
            http: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._newest_limit = max(1, int(newest_limit))
        self._timeout = httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds))
        self._http = http

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": "hn-sync/0.1"},
            )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _get_json(self, path: str) -> Any:
        url = f"{self._base_url}/{path}"
        try:
            resp = await self._get_http().get(url)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise FetchError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"GET {url} returned invalid JSON: {e}") from e

    async def _item(self, item_id: Id) -> Any:
        return await self._get_json(f"item/{item_id}.json")

    async def thread(self, item_id: Id) -> ThreadDetail:
        data = await self._item(item_id)
        if data is None:
            raise ItemUnavailable(f"item {item_id} not found")
        detail = parse_item(data)
        if detail.listing.id != int(item_id):
            raise FetchError(f"asked for item {item_id}, got item {detail.listing.id}")
        return detail

    async def newest(self) -> list[Listing]:
        """
        Current newest page, in rank order.

        Unavailable items (null, dead, deleted, malformed) are skipped. A
        transport or HTTP status failure on any request fails the whole call,
        so an outage never looks like an empty page.
        """
        ids = await self._get_json("newstories.json")
        if not isinstance(ids, list):
            raise FetchError(f"newstories payload is not a list: {type(ids).__name__}")

        try:
            wanted = [int(i) for i in ids[: self._newest_limit]]
        except (TypeError, ValueError) as e:
            raise FetchError(f"newstories payload has a non-integer id: {e!r}") from e

        results = await asyncio.gather(*(self.thread(i) for i in wanted), return_exceptions=True)

        listings: list[Listing] = []
        for item_id, res in zip(wanted, results):
            if isinstance(res, ItemUnavailable):
                logger.debug("Skipping newest item %s: %s", item_id, res)
                continue
            if isinstance(res, BaseException):
                raise res
            listings.append(res.listing)

        logger.debug("newest(): %d/%d items parsed", len(listings), len(wanted))
        return listings
