"""
SQLite database integration.

The ``Database`` class is an explicitly constructed handle around a
SQLite file.  It is created once by ``create_app`` and handed to the
stores, so tests can point the whole application at a temporary file
or replace the stores entirely.  Every query opens a short‑lived
connection, which keeps the handle safe to share between requests.

``init_schema`` creates the tenant, event and info tables if they do
not exist yet.  All instants are stored as ISO‑8601 text in UTC.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import StoreError


logger = logging.getLogger(__name__)

_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%SZ', 'now')"

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS tenants (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    domain TEXT NOT NULL UNIQUE,
    settings TEXT,
    created_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    updated_at TEXT NOT NULL DEFAULT ({_NOW_SQL})
);

CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tenant_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    start_date TEXT NOT NULL,
    end_date TEXT,
    location TEXT,
    image_url TEXT,
    is_featured_banner INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    updated_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    FOREIGN KEY(tenant_id) REFERENCES tenants(id)
);

CREATE TABLE IF NOT EXISTS info (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tenant_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    type TEXT NOT NULL DEFAULT 'general'
        CHECK (type IN ('news', 'announcement', 'general')),
    image_url TEXT,
    is_featured_banner INTEGER NOT NULL DEFAULT 0,
    published_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    created_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    updated_at TEXT NOT NULL DEFAULT ({_NOW_SQL}),
    FOREIGN KEY(tenant_id) REFERENCES tenants(id)
);

CREATE INDEX IF NOT EXISTS idx_events_tenant_featured ON events(tenant_id, is_featured_banner);
CREATE INDEX IF NOT EXISTS idx_info_tenant_featured ON info(tenant_id, is_featured_banner);
"""


def resolve_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the ``church_site_api`` package directory.
    """
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent
    return str((base_dir / db_url).resolve())


def format_instant(value: datetime) -> str:
    """Serialise an instant for storage (UTC, ISO‑8601)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


SQLITE_INTEGER_MIN = -(2 ** 63)
SQLITE_INTEGER_MAX = 2 ** 63 - 1


def is_storable_id(value: int) -> bool:
    """True when ``value`` fits a SQLite INTEGER and so can name a row."""
    return SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX


def _sql_preview(sql: str) -> str:
    text = " ".join(sql.split())
    return text[:100] + ("..." if len(text) > 100 else "")


class Database:
    """Handle to the SQLite database file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, committing on success and closing on exit.

        Any ``sqlite3.Error`` raised inside the block, or an
        ``OverflowError`` from binding an integer SQLite cannot hold, is
        re‑raised as ``StoreError``.
        """
        try:
            conn = self.connect()
        except sqlite3.Error as exc:
            logger.error("Could not open database %s: %s", self.path, exc)
            raise StoreError(str(exc)) from exc
        try:
            yield conn.cursor()
            conn.commit()
        except (sqlite3.Error, OverflowError) as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self._logged(sql):
            with self.cursor() as cursor:
                rows = cursor.execute(sql, tuple(params)).fetchall()
        return [dict(row) for row in rows]

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Tuple[Optional[int], int]:
        """Run a write statement and return ``(lastrowid, rowcount)``."""
        with self._logged(sql):
            with self.cursor() as cursor:
                cursor.execute(sql, tuple(params))
                return cursor.lastrowid, cursor.rowcount

    @contextmanager
    def _logged(self, sql: str) -> Iterator[None]:
        try:
            yield
        except StoreError as exc:
            logger.error("Database query error: %s (%s)", _sql_preview(sql), exc)
            raise
        logger.debug("Query executed: %s", _sql_preview(sql))

    def init_schema(self) -> None:
        """Create tables and indexes that do not exist yet."""
        with self.cursor() as cursor:
            cursor.executescript(SCHEMA)
        logger.info("Database schema ready at %s", self.path)

    def ensure_tenant(self, tenant_id: int, name: str, domain: str, settings_json: str) -> None:
        """Insert the tenant row unless it already exists."""
        self.execute(
            "INSERT OR IGNORE INTO tenants (id, name, domain, settings) VALUES (?, ?, ?, ?)",
            (tenant_id, name, domain, settings_json),
        )

    def health_check(self) -> bool:
        try:
            row = self.fetch_one("SELECT 1 AS healthy")
        except StoreError:
            return False
        return bool(row and row["healthy"] == 1)
