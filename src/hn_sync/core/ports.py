# src/hn_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the pipeline loops.

The loops depend on Protocols instead of concrete implementations, so the
HTTP client and the SQLite store can be swapped for fakes in tests.
"""

from collections.abc import Sequence
from typing import Protocol

from .models import Id, Listing, ThreadDetail


class ItemSource(Protocol):
    """
    External content source.

    Both calls raise FetchError on any transport, status, or parse failure.
    """

    async def newest(self) -> list[Listing]: ...

    async def thread(self, item_id: Id) -> ThreadDetail: ...


class ListingRepo(Protocol):
    """Persistence API used by the pipeline. Failures raise PersistenceError."""

    def upsert(self, listings: Sequence[Listing]) -> None: ...

    def query_all_ids(self) -> list[Id]: ...
