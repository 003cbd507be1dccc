"""
Authentication logic for the FastAPI application.
Thin wrapper around KeyManagementService for FastAPI dependency injection.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from deskmap.services.infrastructure.keys_svc import KeyManagementService

auth_scheme = HTTPBearer(auto_error=False)


def get_key_service() -> KeyManagementService:
    """Get the KeyManagementService singleton instance."""
    from deskmap.app import application

    if "keys" not in application.services:
        raise RuntimeError("KeyManagementService not initialized")
    service = application.services["keys"]
    if not isinstance(service, KeyManagementService):
        raise RuntimeError("Invalid KeyManagementService instance")
    return service


async def verify_session(creds: HTTPAuthorizationCredentials | None = Depends(auth_scheme)) -> str:
    """Verify the bearer session token and return it."""
    if creds is None:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    token = creds.credentials.strip()

    if not get_key_service().validate_session(token):
        raise HTTPException(status_code=403, detail="Invalid or expired session")
    return token
