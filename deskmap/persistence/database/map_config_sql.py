"""Floor map operations for the map_config table."""

from __future__ import annotations

import uuid
from typing import Any

from deskmap.helpers.dto.desk_dto import MapConfig, MapStyleUpdate
from deskmap.helpers.time_helper import now_iso, now_ms
from deskmap.persistence.database.shared_sql import SqlConnection

_COLUMNS = (
    "id, name, width, height, background_url, desk_color, desk_shape, desk_icon, "
    "label_position, show_name, show_number, desk_text_size, desk_visible_when_searching, updated_at"
)

# Style columns a layout save may touch
_STYLE_COLUMNS = frozenset(
    {
        "desk_color",
        "desk_shape",
        "desk_icon",
        "label_position",
        "show_name",
        "show_number",
        "desk_text_size",
        "desk_visible_when_searching",
        "width",
        "height",
    }
)


def _row_to_map(row: tuple[Any, ...]) -> MapConfig:
    return MapConfig(
        id=row[0],
        name=row[1],
        width=row[2],
        height=row[3],
        background_url=row[4],
        desk_color=row[5],
        desk_shape=row[6],
        desk_icon=row[7],
        label_position=row[8],
        show_name=bool(row[9]),
        show_number=bool(row[10]),
        desk_text_size=row[11],
        desk_visible_when_searching=bool(row[12]),
        updated_at=row[13],
    )


class MapConfigOperations:
    """Operations for the map_config table (one floor map per deployment)."""

    def __init__(self, sql: SqlConnection) -> None:
        self.sql = sql

    def get_first(self) -> MapConfig | None:
        """Get the oldest map, or None if the map has not been created yet."""
        row = self.sql.fetchone(f"SELECT {_COLUMNS} FROM map_config ORDER BY created_at ASC, id ASC LIMIT 1")
        return _row_to_map(row) if row else None

    def get(self, map_id: str) -> MapConfig | None:
        row = self.sql.fetchone(f"SELECT {_COLUMNS} FROM map_config WHERE id=?", (map_id,))
        return _row_to_map(row) if row else None

    def create(self, name: str = "HQ Floor 1", width: int = 1200, height: int = 700) -> MapConfig:
        """
        Create a map with default style.

        Args:
            name: Display name
            width: Canvas width in pixels
            height: Canvas height in pixels

        Returns:
            The created MapConfig
        """
        map_id = uuid.uuid4().hex
        defaults = MapConfig(id=map_id, name=name, width=width, height=height, updated_at=now_iso())
        self.sql.execute(
            f"""
            INSERT INTO map_config ({_COLUMNS}, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                defaults.id,
                defaults.name,
                defaults.width,
                defaults.height,
                defaults.background_url,
                defaults.desk_color,
                defaults.desk_shape,
                defaults.desk_icon,
                defaults.label_position,
                int(defaults.show_name),
                int(defaults.show_number),
                defaults.desk_text_size,
                int(defaults.desk_visible_when_searching),
                defaults.updated_at,
                now_ms(),
            ),
        )
        return defaults

    def update_style(self, map_id: str, style: MapStyleUpdate) -> None:
        """
        Apply a partial style update and bump updated_at.

        Args:
            map_id: Map to update
            style: Fields to change (None fields are ignored)
        """
        changes = {k: v for k, v in style.changes().items() if k in _STYLE_COLUMNS}
        changes["updated_at"] = now_iso()
        assignments = ", ".join(f"{column}=?" for column in changes)
        values = [int(v) if isinstance(v, bool) else v for v in changes.values()]
        self.sql.execute(f"UPDATE map_config SET {assignments} WHERE id=?", (*values, map_id))

    def touch(self, map_id: str) -> None:
        """Bump updated_at without changing style."""
        self.sql.execute("UPDATE map_config SET updated_at=? WHERE id=?", (now_iso(), map_id))
