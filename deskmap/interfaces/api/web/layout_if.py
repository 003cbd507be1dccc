"""Floor map and desk endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from deskmap.helpers.exceptions import LayoutValidationError
from deskmap.interfaces.api.auth import verify_session
from deskmap.interfaces.api.types.layout_types import LayoutResponse, SaveLayoutRequest, parse_map_style
from deskmap.interfaces.api.web.dependencies import get_layout_service
from deskmap.services.domain.layout_svc import LayoutService

router = APIRouter(prefix="/desks", tags=["Desks"])


# ──────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────


@router.get("")
def get_desks(layout_service: LayoutService = Depends(get_layout_service)) -> LayoutResponse:
    """Current floor map and desks. Seeds a demo map on first access."""
    return LayoutResponse.from_dto(layout_service.get_layout())


@router.put("", response_model=LayoutResponse)
def save_desks(
    request: SaveLayoutRequest,
    _session: str = Depends(verify_session),
    layout_service: LayoutService = Depends(get_layout_service),
):
    """
    Replace the complete desk set, optionally updating the map style.

    Duplicate desk numbers are rejected with 400 and nothing is saved.
    Open viewers receive a "layout" event after the save.
    """
    desks = [desk.to_dto() for desk in request.desks]
    try:
        snapshot = layout_service.save_layout(desks, map_style=parse_map_style(request.map_style))
    except LayoutValidationError as e:
        logging.info(f"[Web API] Rejected layout save: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    return LayoutResponse.from_dto(snapshot)
