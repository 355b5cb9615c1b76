# src/hn_sync/pipeline/update_worker.py

from __future__ import annotations

"""
Update worker.

Pops one id at a time from the work queue, fetches the item's current detail,
and replaces that single row in the store (refreshed score, title, ...).

A failed fetch drops the id for this round; it comes back only when the
queue filler re-enqueues it from the store.
"""

import asyncio
import logging
from enum import StrEnum

from ..core.errors import FetchError, PersistenceError
from ..core.ports import ItemSource, ListingRepo
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


class UpdateOutcome(StrEnum):
    IDLE = "idle"
    UPDATED = "updated"
    FAILED = "failed"


async def refresh_next_once(
        source: ItemSource,
        store: ListingRepo,
        queue: WorkQueue,
        *,
        timeout: float | None = 0.0,
) -> UpdateOutcome:
    """
    Refresh the item at the head of the queue.

    timeout=0 never waits; an empty queue is reported as IDLE.
    """
    item_id = await queue.pop(timeout=timeout)
    if item_id is None:
        logger.debug("Attempted to update id from queue, but queue was empty")
        return UpdateOutcome.IDLE

    try:
        detail = await source.thread(item_id)
    except FetchError as e:
        logger.warning("thread(%s) failed, dropping id: %s", item_id, e)
        return UpdateOutcome.FAILED

    try:
        store.upsert([detail.listing])
    except PersistenceError as e:
        logger.warning("upsert of item %s failed: %s", item_id, e)
        return UpdateOutcome.FAILED

    logger.debug("Item %s refreshed (score=%s)", item_id, detail.listing.score)
    return UpdateOutcome.UPDATED


async def run_update_worker(
        source: ItemSource,
        store: ListingRepo,
        queue: WorkQueue,
        *,
        initial_delay_seconds: float = 5.0,
        idle_timeout_seconds: float = 1.0,
) -> None:
    """
    Drain the work queue forever.

    The worker blocks on the queue instead of spinning; idle_timeout_seconds
    only controls how often an empty queue is reported in the debug log.
    """
    delay_s = max(0.0, float(initial_delay_seconds))
    idle_s = max(0.01, float(idle_timeout_seconds))
    counts = {o: 0 for o in UpdateOutcome}

    logger.info("Update worker started (initial_delay=%.1fs)", delay_s)
    await asyncio.sleep(delay_s)

    while True:
        try:
            outcome = await refresh_next_once(source, store, queue, timeout=idle_s)
        except Exception:
            logger.exception("update worker iteration crashed")
            continue

        counts[outcome] += 1
        if outcome is not UpdateOutcome.IDLE and counts[outcome] % 100 == 0:
            logger.info(
                "Update worker: updated=%d failed=%d (queue=%d)",
                counts[UpdateOutcome.UPDATED],
                counts[UpdateOutcome.FAILED],
                len(queue),
            )
