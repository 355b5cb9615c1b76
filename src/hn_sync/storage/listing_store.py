# src/hn_sync/storage/listing_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import PersistenceError, StartupError
from ..core.models import Id, Listing

logger = logging.getLogger(__name__)

_CREATE_LISTINGS = """
CREATE TABLE IF NOT EXISTS Listings (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    score INTEGER,
    user TEXT,
    url TEXT NOT NULL
)
"""

_UPSERT_LISTING = """
INSERT OR REPLACE INTO Listings (id, title, score, user, url)
VALUES (?, ?, ?, ?, ?)
"""


class ListingStore:
    """
    SQLite listing store.

    One instance wraps one sqlite3 connection. Every pipeline task opens its
    own instance, so a connection is never shared across tasks.

    Startup failures (open/create/provision) raise StartupError.
    Steady-state failures (upsert/query) raise PersistenceError.
    """

    def __init__(self, conn: sqlite3.Connection, db_path: Path) -> None:
        self._conn = conn
        self._db_path = db_path

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- constructors ----

    @classmethod
    def open_or_create(cls, db_path: str | Path) -> ListingStore:
        """
        Open the database file, creating it and the Listings table on first run.

        An existing file is probed before use so a corrupt file fails here
        rather than on the first steady-state query.
        """
        path = Path(db_path)
        existed = path.exists()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StartupError(f"cannot create directory for {path}: {e}") from e

        conn = cls._connect(path)
        try:
            if existed:
                cls._probe(conn, path)
            conn.execute(_CREATE_LISTINGS)
            conn.commit()
        except StartupError:
            conn.close()
            raise
        except sqlite3.Error as e:
            conn.close()
            raise StartupError(f"cannot provision schema in {path}: {e}") from e

        store = cls(conn, path)
        logger.info(
            "ListingStore %s db=%s total=%s",
            "opened" if existed else "created",
            path,
            store._count_or_unknown(),
        )
        return store

    @classmethod
    def open(cls, db_path: str | Path) -> ListingStore:
        """Open an already provisioned store (one per pipeline task)."""
        path = Path(db_path)
        if not path.exists():
            raise StartupError(f"database file does not exist: {path}")

        conn = cls._connect(path, create=False)
        try:
            cls._probe(conn, path)
        except StartupError:
            conn.close()
            raise
        logger.debug("ListingStore connection opened db=%s", path)
        return cls(conn, path)

    def close(self) -> None:
        with contextlib.suppress(sqlite3.Error):
            self._conn.close()

    # ---- low-level helpers ----

    @staticmethod
    def _connect(path: Path, *, create: bool = True) -> sqlite3.Connection:
        mode = "rwc" if create else "rw"
        try:
            uri = f"{path.resolve().as_uri()}?mode={mode}"
            conn = sqlite3.connect(uri, uri=True, timeout=30.0)
        except sqlite3.Error as e:
            raise StartupError(f"cannot open database {path}: {e}") from e
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @staticmethod
    def _probe(conn: sqlite3.Connection, path: Path) -> None:
        # Reading the schema forces SQLite to parse the file header.
        try:
            conn.execute("SELECT name FROM sqlite_master LIMIT 1").fetchall()
        except sqlite3.Error as e:
            raise StartupError(f"database file is unreadable or corrupt: {path}: {e}") from e

    def _count_or_unknown(self) -> int:
        try:
            return self.count_listings()
        except PersistenceError:
            return -1

    @staticmethod
    def _row_to_listing(row: tuple) -> Listing:
        id_, title, score, user, url = row
        return Listing(
            id=int(id_),
            title=str(title),
            score=int(score) if score is not None else None,
            user=user,
            url=str(url),
        )

    # ---- public API ----

    def upsert(self, listings: Sequence[Listing]) -> None:
        """Insert or replace every listing by id, as one all-or-nothing transaction."""
        if not listings:
            return

        params = [(x.id, x.title, x.score, x.user, x.url) for x in listings]
        try:
            with self._conn:
                self._conn.executemany(_UPSERT_LISTING, params)
        except sqlite3.Error as e:
            raise PersistenceError(f"upsert of {len(params)} listings failed: {e}") from e

        logger.debug("Upserted %d listings", len(params))

    def query_all_ids(self) -> list[Id]:
        """Every stored id, ascending."""
        try:
            rows = self._conn.execute("SELECT id FROM Listings ORDER BY id ASC").fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"query_all_ids failed: {e}") from e
        return [int(r[0]) for r in rows]

    def get_listing(self, item_id: Id) -> Listing | None:
        try:
            row = self._conn.execute(
                "SELECT id, title, score, user, url FROM Listings WHERE id = ?",
                (int(item_id),),
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"get_listing({item_id}) failed: {e}") from e
        return self._row_to_listing(row) if row else None

    def count_listings(self) -> int:
        try:
            (n,) = self._conn.execute("SELECT COUNT(*) FROM Listings").fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"count_listings failed: {e}") from e
        return int(n)
