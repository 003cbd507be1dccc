"""
DTOs for desk layout operations.

Cross-layer data contracts for the floor map and its desks (used by
persistence, workflows, services and interfaces).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class Desk:
    """A positioned, uniquely numbered seat on the floor map.

    occupant_first_name/occupant_last_name are both None when the desk is vacant.
    """

    id: str
    number: int
    x: float
    y: float
    width: float
    height: float
    label: str | None = None
    occupant_first_name: str | None = None
    occupant_last_name: str | None = None

    @property
    def is_vacant(self) -> bool:
        return self.occupant_first_name is None and self.occupant_last_name is None


@dataclass(frozen=True)
class MapConfig:
    """Floor map record: canvas size, background and desk rendering style."""

    id: str
    name: str
    width: int
    height: int
    updated_at: str
    background_url: str | None = None
    desk_color: str = "#8764B8"
    desk_shape: str = "rounded"
    desk_icon: str = "none"
    label_position: str = "top-center"
    show_name: bool = True
    show_number: bool = True
    desk_text_size: int = 14
    desk_visible_when_searching: bool = False


@dataclass(frozen=True)
class MapStyleUpdate:
    """Partial style update applied alongside a desk save.

    Fields left as None are not touched.
    """

    desk_color: str | None = None
    desk_shape: str | None = None
    desk_icon: str | None = None
    label_position: str | None = None
    show_name: bool | None = None
    show_number: bool | None = None
    desk_text_size: int | None = None
    desk_visible_when_searching: bool | None = None
    width: int | None = None
    height: int | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that carry a value."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class LayoutSnapshot:
    """Map plus its desks ordered by number, as returned to the UI."""

    map: MapConfig
    desks: list[Desk] = field(default_factory=list)
