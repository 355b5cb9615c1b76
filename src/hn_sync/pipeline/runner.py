# src/hn_sync/pipeline/runner.py

from __future__ import annotations

"""
Pipeline runner.

Wires the three loops together:
- fetcher:       item source -> store
- queue filler:  store -> work queue
- update worker: work queue -> item source -> store

Each loop gets its own ListingStore (own sqlite connection). The work queue
is the only state they share.
"""

import asyncio
import logging

from ..core.ports import ItemSource
from ..storage.listing_store import ListingStore
from .fetcher import run_fetcher
from .queue_filler import run_queue_filler
from .update_worker import run_update_worker
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


async def run_pipeline(settings, source: ItemSource, *, queue: WorkQueue | None = None) -> None:
    """
    Run fetcher, queue filler and update worker until cancelled.

    Opening the per-task stores may raise StartupError; nothing is started
    in that case. The store must already be provisioned (ListingStore.open_or_create).
    """
    if queue is None:
        queue = WorkQueue(maxsize=settings.queue_maxsize)

    stores: list[ListingStore] = []
    try:
        fetcher_store = ListingStore.open(settings.db_path)
        stores.append(fetcher_store)
        filler_store = ListingStore.open(settings.db_path)
        stores.append(filler_store)
        worker_store = ListingStore.open(settings.db_path)
        stores.append(worker_store)
    except BaseException:
        for s in stores:
            s.close()
        raise

    tasks = [
        asyncio.create_task(
            run_fetcher(
                source,
                fetcher_store,
                interval_seconds=settings.fetch_interval_seconds,
            ),
            name="hn_sync.fetcher",
        ),
        asyncio.create_task(
            run_queue_filler(
                filler_store,
                queue,
                interval_seconds=settings.fill_interval_seconds,
            ),
            name="hn_sync.queue_filler",
        ),
        asyncio.create_task(
            run_update_worker(
                source,
                worker_store,
                queue,
                initial_delay_seconds=settings.worker_initial_delay_seconds,
                idle_timeout_seconds=settings.worker_idle_timeout_seconds,
            ),
            name="hn_sync.update_worker",
        ),
    ]
    logger.info("Pipeline started: %s", ", ".join(t.get_name() for t in tasks))

    try:
        await asyncio.gather(*tasks)
    finally:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        for s in stores:
            s.close()
        logger.info("Pipeline stopped (queue=%d pending ids)", len(queue))
