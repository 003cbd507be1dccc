"""Authentication endpoints for the layout editor."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from deskmap.interfaces.api.auth import verify_session
from deskmap.interfaces.api.types.auth_types import LoginRequest, LoginResponse, LogoutResponse
from deskmap.interfaces.api.web.dependencies import get_keys_service
from deskmap.services.infrastructure.keys_svc import KeyManagementService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, key_service: KeyManagementService = Depends(get_keys_service)):
    """
    Authenticate with the admin password and receive a session token.
    Send it as "Authorization: Bearer <token>" on editor requests.
    """
    if not key_service.get_admin_password_hash():
        logging.error("[Web API] Admin password not initialized")
        raise HTTPException(status_code=500, detail="Admin authentication not configured")

    if not key_service.check_admin_password(request.password):
        logging.warning("[Web API] Failed login attempt")
        raise HTTPException(status_code=403, detail="Invalid password")

    session_token = key_service.create_session()
    return LoginResponse(session_token=session_token, expires_in=key_service.session_timeout)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    token: str = Depends(verify_session),
    key_service: KeyManagementService = Depends(get_keys_service),
):
    """Invalidate the current session token."""
    key_service.invalidate_session(token)
    return LogoutResponse(status="logged_out")
