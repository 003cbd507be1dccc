"""Server-Sent Events (SSE) endpoint for live floor-map updates."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from deskmap.interfaces.api.web.dependencies import get_events_service
from deskmap.services.infrastructure.events_svc import EventsService

router = APIRouter(prefix="/events", tags=["SSE"])


# ──────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────


@router.get("")
async def stream_layout_events(events_service: EventsService = Depends(get_events_service)) -> StreamingResponse:
    """
    Server-Sent Events stream for floor-map viewers.

    Sends "connected" on open, "layout" whenever the desks change and "ping"
    while idle. Viewers re-fetch /api/desks on every "layout" event.
    """
    return StreamingResponse(
        events_service.stream_events(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )
