"""Desk operations for the desks table."""

from __future__ import annotations

from typing import Any

from deskmap.helpers.dto.desk_dto import Desk
from deskmap.helpers.dto.sync_dto import Assignment
from deskmap.persistence.database.shared_sql import SqlConnection

_COLUMNS = "id, number, x, y, width, height, label, occupant_first_name, occupant_last_name"


def _row_to_desk(row: tuple[Any, ...]) -> Desk:
    return Desk(
        id=row[0],
        number=row[1],
        x=row[2],
        y=row[3],
        width=row[4],
        height=row[5],
        label=row[6],
        occupant_first_name=row[7],
        occupant_last_name=row[8],
    )


class DeskOperations:
    """Operations for the desks table.

    replace_desks() and assign_occupants() are atomic on their own and join
    an enclosing transaction when called inside one.
    """

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def list_desks(self, map_id: str) -> list[Desk]:
        """List all desks of a map ordered by desk number."""
        rows = self.sql.fetchall(f"SELECT {_COLUMNS} FROM desks WHERE map_id=? ORDER BY number ASC", (map_id,))
        return [_row_to_desk(row) for row in rows]

    def count_desks(self, map_id: str) -> int:
        row = self.sql.fetchone("SELECT COUNT(*) FROM desks WHERE map_id=?", (map_id,))
        return int(row[0]) if row else 0

    def get_desk(self, desk_id: str) -> Desk | None:
        row = self.sql.fetchone(f"SELECT {_COLUMNS} FROM desks WHERE id=?", (desk_id,))
        return _row_to_desk(row) if row else None

    def replace_desks(self, map_id: str, desks: list[Desk]) -> None:
        """
        Replace the full desk set of a map.

        Args:
            map_id: Owning map
            desks: New desk set (numbers and ids must be unique)

        Raises:
            sqlite3.IntegrityError: On duplicate id or number (nothing is persisted)
        """
        with self.sql.transaction():
            self.sql.execute("DELETE FROM desks WHERE map_id=?", (map_id,))
            if desks:
                self.sql.executemany(
                    f"""
                    INSERT INTO desks ({_COLUMNS}, map_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            d.id,
                            d.number,
                            d.x,
                            d.y,
                            d.width,
                            d.height,
                            d.label,
                            d.occupant_first_name,
                            d.occupant_last_name,
                            map_id,
                        )
                        for d in desks
                    ],
                )

    def clear_occupants(self, map_id: str) -> None:
        """Vacate every desk of a map."""
        self.sql.execute(
            "UPDATE desks SET occupant_first_name=NULL, occupant_last_name=NULL WHERE map_id=?",
            (map_id,),
        )

    def update_desk_occupant(self, desk_id: str, first_name: str | None, last_name: str | None) -> None:
        self.sql.execute(
            "UPDATE desks SET occupant_first_name=?, occupant_last_name=? WHERE id=?",
            (first_name, last_name, desk_id),
        )

    def assign_occupants(self, map_id: str, assignments: list[Assignment]) -> None:
        """
        Clear every occupant of the map, then apply the assignments.

        Desks without an assignment end up vacant.
        """
        with self.sql.transaction():
            self.clear_occupants(map_id)
            for assignment in assignments:
                self.update_desk_occupant(assignment.desk_id, assignment.first_name, assignment.last_name)
