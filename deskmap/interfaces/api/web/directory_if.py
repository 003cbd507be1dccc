"""Entra directory endpoints - config, connection test and sync."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from deskmap.helpers.exceptions import (
    DirectoryConfigError,
    DirectoryRequestError,
    MapNotInitializedError,
    SyncInProgressError,
)
from deskmap.helpers.logging_helper import sanitize_exception_message
from deskmap.interfaces.api.auth import verify_session
from deskmap.interfaces.api.types.directory_types import (
    DirectoryConfigModel,
    DirectoryConfigRequest,
    DirectoryConfigResponse,
    OkResponse,
    SyncResponse,
)
from deskmap.interfaces.api.web.dependencies import get_directory_service
from deskmap.services.domain.directory_svc import DirectoryService

router = APIRouter(prefix="/entra", tags=["Entra"], dependencies=[Depends(verify_session)])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


# ──────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────


@router.get("/config")
def get_directory_config(
    directory_service: DirectoryService = Depends(get_directory_service),
) -> DirectoryConfigResponse:
    """Stored directory config without the client secret, or null."""
    config = directory_service.get_config()
    if config is None:
        return DirectoryConfigResponse(config=None)
    return DirectoryConfigResponse(
        config=DirectoryConfigModel.from_dto(config, has_client_secret=directory_service.has_client_secret())
    )


@router.put("/config", response_model=DirectoryConfigResponse)
def update_directory_config(
    request: DirectoryConfigRequest,
    directory_service: DirectoryService = Depends(get_directory_service),
):
    """Save the directory config. An empty clientSecret keeps the stored secret."""
    try:
        config = directory_service.update_config(request.to_dto())
    except DirectoryConfigError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        return JSONResponse(status_code=500, content={"error": sanitize_exception_message(e, "Failed to save config")})
    return DirectoryConfigResponse(
        config=DirectoryConfigModel.from_dto(config, has_client_secret=directory_service.has_client_secret())
    )


@router.post("/sync", response_model=SyncResponse)
def sync_directory(directory_service: DirectoryService = Depends(get_directory_service)):
    """Pull users from Entra and reassign desk occupants."""
    try:
        result = directory_service.sync()
    except (DirectoryConfigError, MapNotInitializedError) as e:
        return _failure(400, str(e))
    except SyncInProgressError as e:
        return _failure(409, str(e))
    except DirectoryRequestError as e:
        logging.warning(f"[Web API] Directory sync failed: {e}")
        return _failure(500, str(e))
    except Exception as e:
        return _failure(500, sanitize_exception_message(e, "Sync failed"))
    return SyncResponse.from_dto(result)


@router.post("/test", response_model=OkResponse)
def test_directory_connection(directory_service: DirectoryService = Depends(get_directory_service)):
    """Verify the stored credentials by fetching a single user."""
    try:
        directory_service.test_connection()
    except DirectoryConfigError as e:
        return _failure(400, str(e))
    except DirectoryRequestError as e:
        logging.warning(f"[Web API] Directory connection test failed: {e}")
        return _failure(500, str(e))
    except Exception as e:
        return _failure(500, sanitize_exception_message(e, "Connection test failed"))
    return OkResponse()
