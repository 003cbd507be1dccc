"""Save layout workflow - validate and atomically replace the desk set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from deskmap.helpers.dto.desk_dto import Desk, LayoutSnapshot, MapStyleUpdate
from deskmap.helpers.exceptions import DuplicateDeskNumberError, LayoutValidationError
from deskmap.helpers.time_helper import now_iso
from deskmap.workflows.layout.ensure_layout_seed_wf import ensure_layout_seed_workflow

if TYPE_CHECKING:
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)

LAYOUT_EVENT = "layout"


def validate_desks(desks: list[Desk]) -> None:
    """
    Reject a desk batch before anything is persisted.

    Raises:
        DuplicateDeskNumberError: If two desks share a number
        LayoutValidationError: On duplicate ids, non-positive numbers or sizes
    """
    numbers: set[int] = set()
    ids: set[str] = set()
    for desk in desks:
        if desk.number in numbers:
            raise DuplicateDeskNumberError(desk.number)
        numbers.add(desk.number)

        if desk.id in ids:
            raise LayoutValidationError(f"Duplicate desk id: {desk.id}")
        ids.add(desk.id)

        if desk.number <= 0:
            raise LayoutValidationError(f"Desk number must be positive: {desk.number}")
        if desk.width <= 0 or desk.height <= 0:
            raise LayoutValidationError(f"Desk {desk.number} must have a positive width and height")


def save_layout_workflow(
    db: Database,
    broadcaster: ChangeBroadcaster,
    desks: list[Desk],
    map_style: MapStyleUpdate | None = None,
) -> LayoutSnapshot:
    """
    Replace the full desk set (and optionally the map style) of the floor map.

    Business rules:
    - Duplicate desk numbers are rejected before any write
    - Style update and desk replacement commit together
    - A "layout" event is published only after the commit

    Args:
        db: Database instance
        broadcaster: Change broadcaster for viewer notification
        desks: Complete new desk set
        map_style: Optional partial style update

    Returns:
        Refreshed map and desks

    Raises:
        DuplicateDeskNumberError: If two desks share a number
        LayoutValidationError: If a desk is otherwise invalid
    """
    validate_desks(desks)
    map_config = ensure_layout_seed_workflow(db)

    with db.transaction():
        if map_style is not None:
            db.map_config.update_style(map_config.id, map_style)
        else:
            db.map_config.touch(map_config.id)
        db.desks.replace_desks(map_config.id, desks)

    logger.info(f"[save_layout_wf] Saved {len(desks)} desks")
    broadcaster.publish(LAYOUT_EVENT, {"updatedAt": now_iso()})

    updated_map = db.map_config.get(map_config.id) or map_config
    return LayoutSnapshot(map=updated_map, desks=db.desks.list_desks(map_config.id))
