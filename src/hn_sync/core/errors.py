# src/hn_sync/core/errors.py

"""
Error taxonomy.

Transient errors (FetchError, PersistenceError) are logged by the pipeline
loops and the cycle is skipped. StartupError is fatal and ends the process.
"""

from __future__ import annotations


class HNSyncError(Exception):
    """Base class for all hn_sync errors."""


class FetchError(HNSyncError):
    """External source unreachable, bad status, or malformed payload."""


class PersistenceError(HNSyncError):
    """Query or transaction failure against an open store."""


class StartupError(HNSyncError):
    """The store file cannot be opened, created, or provisioned."""


class ItemUnavailable(FetchError):
    """The source answered, but the item is null, deleted, dead, or malformed."""
