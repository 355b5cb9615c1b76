# src/hn_sync/pipeline/work_queue.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from ..core.models import Id

logger = logging.getLogger(__name__)


class WorkQueue:
    """
    FIFO channel of item ids between the queue filler and the update worker.

    Backed by asyncio.Queue, so push/pop are the only guarded sections and
    nothing else (e.g. a network fetch) ever runs while holding them.
    maxsize > 0 makes push_many wait for room (backpressure on the filler).
    Duplicates are allowed.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._q: asyncio.Queue[Id] = asyncio.Queue(maxsize=max(0, int(maxsize)))

    def __len__(self) -> int:
        return self._q.qsize()

    @property
    def maxsize(self) -> int:
        return self._q.maxsize

    async def push(self, item_id: Id) -> None:
        await self._q.put(int(item_id))

    async def push_many(self, item_ids: Iterable[Id]) -> int:
        """Append ids to the tail in the given order. Returns how many were pushed."""
        n = 0
        for item_id in item_ids:
            await self._q.put(int(item_id))
            n += 1
        return n

    def try_pop(self) -> Id | None:
        """Pop the head without waiting. An empty queue returns None and is left as is."""
        try:
            return self._q.get_nowait()
        except asyncio.QueueEmpty:
            return None

    async def pop(self, timeout: float | None = None) -> Id | None:
        """
        Wait for the head of the queue.

        timeout=None waits forever, timeout<=0 behaves like try_pop, otherwise
        None is returned once the timeout elapses with the queue still empty.
        """
        if timeout is not None and timeout <= 0:
            return self.try_pop()
        if timeout is None:
            return await self._q.get()
        try:
            return await asyncio.wait_for(self._q.get(), timeout=timeout)
        except TimeoutError:
            return None
