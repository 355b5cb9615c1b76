# src/hn_sync/pipeline/fetcher.py

from __future__ import annotations

"""
Newest-listing fetcher.

Every interval_seconds:
- ask the item source for the current newest listing,
- upsert every returned listing into the store.

A failed fetch or upsert skips the cycle; rows from earlier cycles stay as they are.
"""

import asyncio
import logging

from ..core.errors import FetchError, PersistenceError
from ..core.ports import ItemSource, ListingRepo

logger = logging.getLogger(__name__)


async def fetch_newest_once(source: ItemSource, store: ListingRepo) -> int | None:
    """Run one fetch cycle. Returns the number of listings upserted, or None if skipped."""
    try:
        listings = await source.newest()
    except FetchError as e:
        logger.warning("newest() failed, skipping cycle: %s", e)
        return None

    try:
        store.upsert(listings)
    except PersistenceError as e:
        logger.warning("upsert of newest listing failed, skipping cycle: %s", e)
        return None

    return len(listings)


async def run_fetcher(
        source: ItemSource,
        store: ListingRepo,
        *,
        interval_seconds: float = 1.0,
) -> None:
    """
    Poll the newest listing forever.

    To stop the fetcher, cancel the coroutine/task.
    """
    sleep_s = max(0.0, float(interval_seconds))
    cycle = 0

    logger.info("Fetcher started (interval=%.1fs)", sleep_s)
    while True:
        await asyncio.sleep(sleep_s)
        cycle += 1

        try:
            n = await fetch_newest_once(source, store)
        except Exception:
            logger.exception("fetcher cycle %d crashed", cycle)
            continue

        if n is not None:
            logger.debug("Fetcher cycle %d: upserted %d listings", cycle, n)
