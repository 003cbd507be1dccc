"""
Application database.

SQLite store for the floor map, desks, directory configuration, the directory
user snapshot, admin sessions and meta keys.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from deskmap.persistence.database.desks_sql import DeskOperations
from deskmap.persistence.database.directory_config_sql import DirectoryConfigOperations
from deskmap.persistence.database.directory_users_sql import DirectoryUserOperations
from deskmap.persistence.database.map_config_sql import MapConfigOperations
from deskmap.persistence.database.meta_sql import MetaOperations
from deskmap.persistence.database.sessions_sql import SessionOperations
from deskmap.persistence.database.shared_sql import SqlConnection

logger = logging.getLogger(__name__)

__all__ = ["SCHEMA", "SCHEMA_VERSION", "Database"]

SCHEMA_VERSION = 1

# ----------------------------------------------------------------------
#  Database Schema
# ----------------------------------------------------------------------

SCHEMA = [
    # Metadata key-value store (admin password hash, schema version)
    """
    CREATE TABLE IF NOT EXISTS meta (
        key TEXT PRIMARY KEY,
        value TEXT
    );
    """,
    # Admin web sessions
    """
    CREATE TABLE IF NOT EXISTS sessions (
        session_token TEXT PRIMARY KEY,
        expiry_timestamp REAL NOT NULL,
        created_at REAL NOT NULL
    );
    """,
    # Floor map - canvas size, background and desk style
    """
    CREATE TABLE IF NOT EXISTS map_config (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        width INTEGER NOT NULL,
        height INTEGER NOT NULL,
        background_url TEXT,
        desk_color TEXT NOT NULL,
        desk_shape TEXT NOT NULL,
        desk_icon TEXT NOT NULL,
        label_position TEXT NOT NULL,
        show_name INTEGER NOT NULL,
        show_number INTEGER NOT NULL,
        desk_text_size INTEGER NOT NULL,
        desk_visible_when_searching INTEGER NOT NULL,
        created_at INTEGER NOT NULL,
        updated_at TEXT NOT NULL
    );
    """,
    # Desks - numbers are unique within a map
    """
    CREATE TABLE IF NOT EXISTS desks (
        id TEXT PRIMARY KEY,
        map_id TEXT NOT NULL,
        number INTEGER NOT NULL,
        x REAL NOT NULL,
        y REAL NOT NULL,
        width REAL NOT NULL,
        height REAL NOT NULL,
        label TEXT,
        occupant_first_name TEXT,
        occupant_last_name TEXT,
        UNIQUE (map_id, number),
        FOREIGN KEY (map_id) REFERENCES map_config(id) ON DELETE CASCADE
    );
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_desks_map_id ON desks(map_id);
    """,
    # Directory (Entra) configuration - single row
    """
    CREATE TABLE IF NOT EXISTS directory_config (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        tenant_id TEXT,
        client_id TEXT,
        client_secret TEXT,
        scopes TEXT,
        sync_interval_minutes INTEGER NOT NULL DEFAULT 15,
        mapping_prefix TEXT,
        mapping_regex TEXT,
        admin_group_id TEXT,
        auth_mode TEXT NOT NULL DEFAULT 'public',
        last_test_at TEXT,
        last_sync_at TEXT,
        last_sync_status TEXT
    );
    """,
    # Snapshot of directory users from the last successful sync
    """
    CREATE TABLE IF NOT EXISTS directory_users (
        id TEXT PRIMARY KEY,
        given_name TEXT,
        surname TEXT,
        display_name TEXT,
        office_location TEXT,
        user_principal_name TEXT,
        last_sync TEXT NOT NULL
    );
    """,
]


# ----------------------------------------------------------------------
#  Database
# ----------------------------------------------------------------------
class Database:
    """
    Application database.

    Single source of truth for persistence across services and workflows.
    Access table operations through the attributes (db.desks, db.map_config, ...)
    and group multi-step writes with db.transaction().
    """

    def __init__(self, path: str):
        self.path = path
        if path != ":memory:":
            # Ensure parent directory exists so sqlite can create the DB file.
            db_dir = os.path.dirname(path) or "."
            try:
                os.makedirs(db_dir, exist_ok=True)
            except OSError as exc:
                raise RuntimeError(f"Unable to create database directory '{db_dir}': {exc}") from exc

        try:
            conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        except sqlite3.OperationalError as exc:
            raise RuntimeError(
                f"Failed to open SQLite DB at '{path}'. Ensure the directory exists and is writable: {exc}"
            ) from exc

        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        for ddl in SCHEMA:
            conn.execute(ddl)

        self.sql = SqlConnection(conn)
        self.conn = conn

        # Initialize operation classes - one per table (exact table names)
        self.meta = MetaOperations(self.sql)
        self.sessions = SessionOperations(self.sql)
        self.map_config = MapConfigOperations(self.sql)
        self.desks = DeskOperations(self.sql)
        self.directory_config = DirectoryConfigOperations(self.sql)
        self.directory_users = DirectoryUserOperations(self.sql)

        if not self.meta.get("schema_version"):
            self.meta.set("schema_version", str(SCHEMA_VERSION))

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """All statements inside become visible together, or not at all."""
        with self.sql.transaction():
            yield

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()
        logger.debug("[DB] Closed %s", self.path)
