"""
Layout service - floor map and desk set access for the API.

Thin orchestration over the layout workflows; the first read seeds the
default map and demo desks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from deskmap.helpers.dto.desk_dto import Desk, LayoutSnapshot, MapStyleUpdate
from deskmap.workflows.layout.ensure_layout_seed_wf import ensure_layout_seed_workflow
from deskmap.workflows.layout.save_layout_wf import save_layout_workflow

if TYPE_CHECKING:
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)


class LayoutService:
    """
    Service for reading and replacing the floor layout.

    Use the instance from Application.services["layout"].
    """

    def __init__(self, db: Database, broadcaster: ChangeBroadcaster) -> None:
        self._db = db
        self._broadcaster = broadcaster

    def get_layout(self) -> LayoutSnapshot:
        """Return the map and its desks, creating the default map on first access."""
        map_config = ensure_layout_seed_workflow(self._db)
        return LayoutSnapshot(map=map_config, desks=self._db.desks.list_desks(map_config.id))

    def save_layout(self, desks: list[Desk], map_style: MapStyleUpdate | None = None) -> LayoutSnapshot:
        """
        Replace the whole desk set and notify viewers.

        Raises:
            DuplicateDeskNumberError: If two desks share a number
            LayoutValidationError: If a desk is otherwise invalid
        """
        return save_layout_workflow(self._db, self._broadcaster, desks, map_style=map_style)
