"""Auth API types - admin login and logout."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    password: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_token: str = Field(..., alias="sessionToken")
    expires_in: int = Field(..., alias="expiresIn", description="Session lifetime in seconds")


class LogoutResponse(BaseModel):
    status: str
