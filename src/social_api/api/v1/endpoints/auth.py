# src/social_api/api/v1/endpoints/auth.py
"""Authentication endpoints for the social API."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, status

from social_api.api.v1.dependencies import CodecDep, SessionDep
from social_api.schemas.user import (
    AuthPayload,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from social_api.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_payload(result: user_service.AuthResult) -> AuthPayload:
    return AuthPayload(token=result.token, user=UserResponse.model_validate(result.user))


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthPayload,
)
async def register(payload: RegisterRequest, db: SessionDep, codec: CodecDep) -> AuthPayload:
    """Create an account and return a token for it."""
    return _auth_payload(user_service.register_user(db, codec, payload))


@router.post("/login", summary="Authenticate with email and password", response_model=AuthPayload)
async def login(payload: LoginRequest, db: SessionDep, codec: CodecDep) -> AuthPayload:
    """Exchange credentials for a bearer token."""
    return _auth_payload(user_service.login_user(db, codec, payload.email, payload.password))


@router.post("/refresh", summary="Refresh a bearer token", response_model=TokenResponse)
async def refresh(payload: RefreshRequest, codec: CodecDep) -> TokenResponse:
    """Reissue a still-valid token with a new expiry."""
    expires_in = (
        timedelta(minutes=payload.expires_in_minutes)
        if payload.expires_in_minutes is not None
        else None
    )
    return TokenResponse(token=user_service.refresh_token(codec, payload.token, expires_in))
