# src/hn_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- provisions the store once before any task starts (fatal on failure),
- builds the concrete Hacker News client from settings.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..hn.client import HNClient
from ..storage.listing_store import ListingStore

logger = logging.getLogger(__name__)


def prepare_store(*, settings=None) -> None:
    """
    Open or create the database file and provision the schema.

    Raises StartupError. The connection is closed again; every pipeline
    task opens its own.
    """
    if settings is None:
        settings = get_settings()

    store = ListingStore.open_or_create(settings.db_path)
    store.close()


def create_item_source(*, settings=None) -> HNClient:
    """
    Build the HN client from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    logger.debug(
        "HNClient base_url=%s newest_limit=%d timeout=%.1fs",
        settings.api_base_url,
        settings.newest_limit,
        settings.http_timeout_seconds,
    )
    return HNClient(
        base_url=settings.api_base_url,
        newest_limit=settings.newest_limit,
        timeout_seconds=settings.http_timeout_seconds,
    )
