# src/hn_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole process.
- HOME locates the database file unless HN_SYNC_DB_PATH overrides it.
- Malformed numeric values fall back to defaults instead of failing startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "HN_SYNC"

DB_FILENAME = "hn.db"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# A local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _home_dir() -> Path:
    raw = os.getenv("HOME")
    if raw is None or raw.strip() == "":
        return Path.home()
    return Path(raw)


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Storage ----
    db_path: Path

    # ---- Pipeline timing ----
    fetch_interval_seconds: float
    fill_interval_seconds: float
    worker_initial_delay_seconds: float
    worker_idle_timeout_seconds: float
    queue_maxsize: int

    # ---- Hacker News API ----
    api_base_url: str
    newest_limit: int
    http_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        home = _home_dir()

        app_name = _env(_k("APP_NAME"), "hn_sync") or "hn_sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), home / ".local" / "hn_sync")

        db_path = _env_path(_k("DB_PATH"), home / DB_FILENAME)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            fetch_interval_seconds=_env_float(_k("FETCH_INTERVAL_SECONDS"), 1.0),
            fill_interval_seconds=_env_float(_k("FILL_INTERVAL_SECONDS"), 5.0),
            worker_initial_delay_seconds=_env_float(_k("WORKER_INITIAL_DELAY_SECONDS"), 5.0),
            worker_idle_timeout_seconds=_env_float(_k("WORKER_IDLE_TIMEOUT_SECONDS"), 1.0),
            queue_maxsize=max(0, _env_int(_k("QUEUE_MAXSIZE"), 0)),
            api_base_url=_env(_k("API_BASE_URL"), "https://hacker-news.firebaseio.com/v0"),
            newest_limit=max(1, _env_int(_k("NEWEST_LIMIT"), 30)),
            http_timeout_seconds=_env_float(_k("HTTP_TIMEOUT_SECONDS"), 15.0),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
