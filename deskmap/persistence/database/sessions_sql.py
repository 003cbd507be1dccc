"""Session persistence operations for admin web sessions."""

from __future__ import annotations

from deskmap.helpers.time_helper import now_s
from deskmap.persistence.database.shared_sql import SqlConnection


class SessionOperations:
    """Operations for the sessions table."""

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def create(self, session_token: str, expiry: float) -> None:
        """
        Insert a new session.

        Args:
            session_token: Unique session token
            expiry: Expiry timestamp (Unix time, seconds)
        """
        self.sql.execute(
            "INSERT INTO sessions (session_token, expiry_timestamp, created_at) VALUES (?, ?, ?)",
            (session_token, expiry, now_s()),
        )

    def get(self, session_token: str) -> float | None:
        """Get session expiry timestamp, or None when unknown."""
        row = self.sql.fetchone("SELECT expiry_timestamp FROM sessions WHERE session_token=?", (session_token,))
        return row[0] if row else None

    def delete(self, session_token: str) -> None:
        self.sql.execute("DELETE FROM sessions WHERE session_token=?", (session_token,))

    def delete_all(self) -> None:
        self.sql.execute("DELETE FROM sessions")

    def load_all(self) -> dict[str, float]:
        """
        Load all non-expired sessions.

        Returns:
            Dict mapping session_token to expiry_timestamp
        """
        rows = self.sql.fetchall(
            "SELECT session_token, expiry_timestamp FROM sessions WHERE expiry_timestamp > ?", (now_s(),)
        )
        return {row[0]: row[1] for row in rows}

    def cleanup_expired(self) -> int:
        """
        Delete all expired sessions.

        Returns:
            Number of sessions deleted
        """
        cur = self.sql.execute("DELETE FROM sessions WHERE expiry_timestamp <= ?", (now_s(),))
        return cur.rowcount
