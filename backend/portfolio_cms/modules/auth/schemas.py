"""Pydantic schemas for authentication module."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPair(BaseModel):
    """Access and refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiration in seconds")


class TokenRefresh(BaseModel):
    """Request schema for refreshing tokens.

    The refresh token may also come from the session cookie.
    """

    refresh_token: str | None = None


# ============================================================================
# Login Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthUser(BaseModel):
    """Public view of the signed-in user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str | None = None
    role: str
    last_login_at: datetime | None = None


class LoginResponse(BaseModel):
    """Login response with tokens and user info."""

    tokens: TokenPair
    user: AuthUser


class SessionResponse(BaseModel):
    """Current session; ``user`` is null when not signed in."""

    user: AuthUser | None = None
