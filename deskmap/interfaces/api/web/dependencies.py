"""
FastAPI dependency injection helpers for web endpoints.

ARCHITECTURE:
- Endpoints should ONLY inject services, never Database or raw infrastructure
- Services encapsulate all business logic and data access
- Endpoints are thin presentation layers that call services and format responses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException

if TYPE_CHECKING:
    from deskmap.services.domain.directory_svc import DirectoryService
    from deskmap.services.domain.layout_svc import LayoutService
    from deskmap.services.infrastructure.events_svc import EventsService
    from deskmap.services.infrastructure.keys_svc import KeyManagementService


def _get_service(name: str, label: str):
    from deskmap.app import application

    service = application.services.get(name)
    if service is None:
        raise HTTPException(status_code=503, detail=f"{label} service not available")
    return service


def get_layout_service() -> LayoutService:
    """Get LayoutService instance."""
    return _get_service("layout", "Layout")  # type: ignore[no-any-return]


def get_directory_service() -> DirectoryService:
    """Get DirectoryService instance."""
    return _get_service("directory", "Directory")  # type: ignore[no-any-return]


def get_events_service() -> EventsService:
    """Get EventsService instance."""
    return _get_service("events", "Events")  # type: ignore[no-any-return]


def get_keys_service() -> KeyManagementService:
    """Get KeyManagementService instance."""
    return _get_service("keys", "Auth")  # type: ignore[no-any-return]
