"""Pydantic schemas for the admin API."""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for POST /admin/login."""

    username: Optional[str] = Field(default=None, examples=["admin"])
    password: Optional[str] = Field(default=None)


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    success: bool
    token: str = Field(..., description="Opaque bearer token, valid until logout or restart")


class LogoutResponse(BaseModel):
    """Response schema for POST /admin/logout (always success)."""

    success: bool = True
