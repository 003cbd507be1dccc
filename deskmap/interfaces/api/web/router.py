"""
Combined router for all web endpoints.

Aggregates the auth, desks, entra and events routers into a single router
mounted under /api by the main FastAPI app.
"""

from fastapi import APIRouter

from deskmap.interfaces.api.web import auth_if, directory_if, layout_if, sse_if

router = APIRouter(prefix="/api")

router.include_router(auth_if.router)
router.include_router(layout_if.router)
router.include_router(directory_if.router)
router.include_router(sse_if.router)
