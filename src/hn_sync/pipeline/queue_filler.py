# src/hn_sync/pipeline/queue_filler.py

from __future__ import annotations

import asyncio
import logging

from ..core.errors import PersistenceError
from ..core.ports import ListingRepo
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


async def fill_queue_once(store: ListingRepo, queue: WorkQueue) -> int | None:
    """
    Append every stored id to the queue tail, in store order.

    No deduplication: ids still waiting from an earlier cycle get queued again.
    Returns the number of ids pushed, or None if the store read failed.
    """
    try:
        ids = store.query_all_ids()
    except PersistenceError as e:
        logger.warning("query_all_ids failed, queue left unchanged: %s", e)
        return None

    return await queue.push_many(ids)


async def run_queue_filler(
        store: ListingRepo,
        queue: WorkQueue,
        *,
        interval_seconds: float = 5.0,
) -> None:
    """Refill the update queue from the store forever. Cancel the task to stop it."""
    sleep_s = max(0.0, float(interval_seconds))
    cycle = 0

    logger.info("Queue filler started (interval=%.1fs)", sleep_s)
    while True:
        await asyncio.sleep(sleep_s)
        cycle += 1

        try:
            n = await fill_queue_once(store, queue)
        except Exception:
            logger.exception("queue filler cycle %d crashed", cycle)
            continue

        if n is not None:
            logger.debug("Refreshed update queue %d: +%d ids (size=%d)", cycle, n, len(queue))
