"""Meta key-value store operations."""

from __future__ import annotations

from deskmap.persistence.database.shared_sql import SqlConnection


class MetaOperations:
    """Operations for the meta key-value store table."""

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def get(self, key: str) -> str | None:
        """Get a metadata value by key."""
        row = self.sql.fetchone("SELECT value FROM meta WHERE key=?", (key,))
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Set a metadata key-value pair."""
        self.sql.execute("INSERT OR REPLACE INTO meta(key, value) VALUES(?,?)", (key, value))

    def delete(self, key: str) -> None:
        """Delete a metadata key-value pair."""
        self.sql.execute("DELETE FROM meta WHERE key=?", (key,))
