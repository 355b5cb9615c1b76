# src/hn_sync/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field

Id = int


@dataclass(slots=True, frozen=True)
class Listing:
    """
    Snapshot of an item as seen by the external source at fetch time.

    `user` is the author handle; it is the column name in the Listings table.
    """

    id: Id
    title: str
    url: str
    score: int | None = None
    user: str | None = None


@dataclass(slots=True, frozen=True)
class ThreadDetail:
    listing: Listing
    comment_ids: tuple[Id, ...] = field(default_factory=tuple)
    comment_count: int | None = None
