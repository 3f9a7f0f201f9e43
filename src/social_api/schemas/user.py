"""User and authentication Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from social_api.core.policy import Role


class RegisterRequest(BaseModel):
    """Schema for registering a new account."""

    username: str = Field(..., min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    bio: str | None = Field(None, max_length=500)
    profile_picture: str | None = None


class LoginRequest(BaseModel):
    """Schema for logging in with email and password."""

    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    """Schema for exchanging a valid token for a fresh one."""

    token: str
    expires_in_minutes: int | None = Field(None, gt=0, le=60 * 24 * 30)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class UserUpdate(BaseModel):
    """Partial profile update; unset fields are left untouched."""

    username: str | None = Field(None, min_length=3, max_length=64)
    bio: str | None = Field(None, max_length=500)
    profile_picture: str | None = None


class UserResponse(BaseModel):
    """Public view of an account. Never exposes the password hash."""

    id: str
    username: str
    email: str
    bio: str | None
    profile_picture: str | None
    role: Role
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthPayload(BaseModel):
    """Token plus the account it was issued for."""

    token: str
    user: UserResponse
