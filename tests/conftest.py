# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from hn_sync.storage.listing_store import ListingStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the pipeline runner.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the caller's environment.
    """
    return SimpleNamespace(
        app_name="hn_sync-test",
        log_level="DEBUG",
        data_dir=tmp_path / "logs",
        db_path=tmp_path / "hn.db",
        fetch_interval_seconds=0.01,
        fill_interval_seconds=0.02,
        worker_initial_delay_seconds=0.0,
        worker_idle_timeout_seconds=0.01,
        queue_maxsize=0,
        api_base_url="https://hn.invalid/v0",
        newest_limit=30,
        http_timeout_seconds=1.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace):
    """Real SQLite store in a tmp dir; its correctness is part of what we test."""
    s = ListingStore.open_or_create(settings.db_path)
    try:
        yield s
    finally:
        s.close()
