# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # Storage
    "HOME": "Home directory; the database lives at $HOME/hn.db unless overridden.",
    "HN_SYNC_DB_PATH": "Explicit SQLite database path (default: $HOME/hn.db).",
    # App / logging
    "HN_SYNC_APP_NAME": "Name shown in the startup log line (default: hn_sync).",
    "HN_SYNC_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "HN_SYNC_DATA_DIR": "Log directory (default: $HOME/.local/hn_sync).",
    # Pipeline timing
    "HN_SYNC_FETCH_INTERVAL_SECONDS": "Sleep between newest-listing fetches (default: 1.0).",
    "HN_SYNC_FILL_INTERVAL_SECONDS": "Sleep between queue refills from the store (default: 5.0).",
    "HN_SYNC_WORKER_INITIAL_DELAY_SECONDS": "Update worker start delay (default: 5.0).",
    "HN_SYNC_WORKER_IDLE_TIMEOUT_SECONDS": "How long the worker waits on an empty queue before logging (default: 1.0).",
    "HN_SYNC_QUEUE_MAXSIZE": "Bound on pending ids; 0 means unbounded (default: 0).",
    # Hacker News API
    "HN_SYNC_API_BASE_URL": "Firebase API base (default: https://hacker-news.firebaseio.com/v0).",
    "HN_SYNC_NEWEST_LIMIT": "Items taken from newstories per fetch (default: 30).",
    "HN_SYNC_HTTP_TIMEOUT_SECONDS": "Per-request HTTP timeout (default: 15.0).",
}
