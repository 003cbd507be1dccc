"""Layout API types - Pydantic models for the floor map and desk endpoints.

External API contracts use camelCase field names; DTOs use snake_case.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from deskmap.helpers.dto.desk_dto import Desk, LayoutSnapshot, MapConfig, MapStyleUpdate

# mapStyle wire name -> (MapStyleUpdate field, accepted types)
_STYLE_FIELDS: dict[str, tuple[str, tuple[type, ...]]] = {
    "deskColor": ("desk_color", (str,)),
    "deskShape": ("desk_shape", (str,)),
    "deskIcon": ("desk_icon", (str,)),
    "labelPosition": ("label_position", (str,)),
    "showName": ("show_name", (bool,)),
    "showNumber": ("show_number", (bool,)),
    "deskTextSize": ("desk_text_size", (int,)),
    "deskVisibleWhenSearching": ("desk_visible_when_searching", (bool,)),
    "width": ("width", (int,)),
    "height": ("height", (int,)),
}


def _style_value(value: Any, types: tuple[type, ...]) -> Any:
    # bool is an int subclass; never accept it for numeric fields
    if isinstance(value, bool) and bool not in types:
        return None
    if isinstance(value, float) and int in types and value.is_integer():
        return int(value)
    return value if isinstance(value, types) else None


def parse_map_style(raw: dict[str, Any] | None) -> MapStyleUpdate | None:
    """Keep only known style fields whose values have the expected type."""
    if not raw:
        return None
    values = {}
    for wire_name, (field_name, types) in _STYLE_FIELDS.items():
        value = _style_value(raw.get(wire_name), types)
        if value is not None:
            values[field_name] = value
    return MapStyleUpdate(**values)


class DeskModel(BaseModel):
    """A desk on the floor map."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Stable desk id")
    number: int = Field(..., description="Desk number, the directory sync key")
    x: float
    y: float
    width: float
    height: float
    label: str | None = None
    occupant_first_name: str | None = Field(None, alias="occupantFirstName")
    occupant_last_name: str | None = Field(None, alias="occupantLastName")

    @classmethod
    def from_dto(cls, dto: Desk) -> DeskModel:
        return cls(
            id=dto.id,
            number=dto.number,
            x=dto.x,
            y=dto.y,
            width=dto.width,
            height=dto.height,
            label=dto.label,
            occupant_first_name=dto.occupant_first_name,
            occupant_last_name=dto.occupant_last_name,
        )

    def to_dto(self) -> Desk:
        return Desk(
            id=self.id,
            number=self.number,
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            label=self.label,
            occupant_first_name=self.occupant_first_name,
            occupant_last_name=self.occupant_last_name,
        )


class MapModel(BaseModel):
    """Floor map canvas and desk style."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    width: int
    height: int
    background_url: str | None = Field(None, alias="backgroundUrl")
    desk_color: str = Field(..., alias="deskColor")
    desk_shape: str = Field(..., alias="deskShape")
    desk_icon: str = Field(..., alias="deskIcon")
    label_position: str = Field(..., alias="labelPosition")
    show_name: bool = Field(..., alias="showName")
    show_number: bool = Field(..., alias="showNumber")
    desk_text_size: int = Field(..., alias="deskTextSize")
    desk_visible_when_searching: bool = Field(..., alias="deskVisibleWhenSearching")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_dto(cls, dto: MapConfig) -> MapModel:
        return cls(
            id=dto.id,
            name=dto.name,
            width=dto.width,
            height=dto.height,
            background_url=dto.background_url,
            desk_color=dto.desk_color,
            desk_shape=dto.desk_shape,
            desk_icon=dto.desk_icon,
            label_position=dto.label_position,
            show_name=dto.show_name,
            show_number=dto.show_number,
            desk_text_size=dto.desk_text_size,
            desk_visible_when_searching=dto.desk_visible_when_searching,
            updated_at=dto.updated_at,
        )


class LayoutResponse(BaseModel):
    """Response for GET/PUT /api/desks."""

    map: MapModel
    desks: list[DeskModel]

    @classmethod
    def from_dto(cls, dto: LayoutSnapshot) -> LayoutResponse:
        return cls(
            map=MapModel.from_dto(dto.map),
            desks=[DeskModel.from_dto(desk) for desk in dto.desks],
        )


class SaveLayoutRequest(BaseModel):
    """Request for PUT /api/desks - the complete new desk set."""

    model_config = ConfigDict(populate_by_name=True)

    desks: list[DeskModel] = Field(default_factory=list)
    map_style: dict[str, Any] | None = Field(None, alias="mapStyle")
