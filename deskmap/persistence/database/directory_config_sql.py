"""Directory configuration operations (single-row directory_config table)."""

from __future__ import annotations

from typing import Any

from deskmap.helpers.dto.directory_dto import DirectoryConfig
from deskmap.persistence.database.shared_sql import SqlConnection

_COLUMNS = (
    "tenant_id, client_id, client_secret, scopes, sync_interval_minutes, mapping_prefix, "
    "mapping_regex, admin_group_id, auth_mode, last_test_at, last_sync_at, last_sync_status"
)


def _row_to_config(row: tuple[Any, ...]) -> DirectoryConfig:
    return DirectoryConfig(
        tenant_id=row[0],
        client_id=row[1],
        client_secret=row[2],
        scopes=row[3],
        sync_interval_minutes=row[4],
        mapping_prefix=row[5],
        mapping_regex=row[6],
        admin_group_id=row[7],
        auth_mode=row[8],
        last_test_at=row[9],
        last_sync_at=row[10],
        last_sync_status=row[11],
    )


class DirectoryConfigOperations:
    """Operations for the directory_config table (at most one row, id=1)."""

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def get(self) -> DirectoryConfig | None:
        """Get the stored config, or None if it was never saved."""
        row = self.sql.fetchone(f"SELECT {_COLUMNS} FROM directory_config WHERE id=1")
        return _row_to_config(row) if row else None

    def save(self, config: DirectoryConfig) -> DirectoryConfig:
        """
        Insert or overwrite the config row.

        Args:
            config: Complete record to store

        Returns:
            The stored record
        """
        self.sql.execute(
            f"""
            INSERT OR REPLACE INTO directory_config (id, {_COLUMNS})
            VALUES (1, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                config.tenant_id,
                config.client_id,
                config.client_secret,
                config.scopes,
                config.sync_interval_minutes,
                config.mapping_prefix,
                config.mapping_regex,
                config.admin_group_id,
                config.auth_mode,
                config.last_test_at,
                config.last_sync_at,
                config.last_sync_status,
            ),
        )
        return config

    def record_sync(self, at: str, status: str) -> None:
        """Record the outcome of a sync attempt (no-op when no config row exists)."""
        self.sql.execute(
            "UPDATE directory_config SET last_sync_at=?, last_sync_status=? WHERE id=1",
            (at, status),
        )

    def record_test(self, at: str, status: str | None = None) -> None:
        """Record a connectivity test; status is only overwritten when given."""
        self.sql.execute(
            "UPDATE directory_config SET last_test_at=?, last_sync_status=COALESCE(?, last_sync_status) WHERE id=1",
            (at, status),
        )
