"""Directory user snapshot operations."""

from __future__ import annotations

from deskmap.helpers.dto.directory_dto import DirectoryUser
from deskmap.persistence.database.shared_sql import SqlConnection


class DirectoryUserOperations:
    """Operations for the directory_users table (snapshot of the last sync)."""

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def replace_all(self, users: list[DirectoryUser], synced_at: str) -> None:
        """
        Replace the whole snapshot.

        Duplicate ids keep the last occurrence.
        """
        with self.sql.transaction():
            self.sql.execute("DELETE FROM directory_users")
            if users:
                self.sql.executemany(
                    """
                    INSERT OR REPLACE INTO directory_users
                        (id, given_name, surname, display_name, office_location, user_principal_name, last_sync)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            u.id,
                            u.given_name,
                            u.surname,
                            u.display_name,
                            u.office_location,
                            u.user_principal_name,
                            synced_at,
                        )
                        for u in users
                    ],
                )

    def list_all(self) -> list[DirectoryUser]:
        rows = self.sql.fetchall(
            """
            SELECT id, given_name, surname, display_name, office_location, user_principal_name
            FROM directory_users ORDER BY rowid ASC
            """
        )
        return [
            DirectoryUser(
                id=r[0],
                given_name=r[1],
                surname=r[2],
                display_name=r[3],
                office_location=r[4],
                user_principal_name=r[5],
            )
            for r in rows
        ]

    def count(self) -> int:
        row = self.sql.fetchone("SELECT COUNT(*) FROM directory_users")
        return int(row[0]) if row else 0
