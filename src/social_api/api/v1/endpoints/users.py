# src/social_api/api/v1/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from social_api.api.v1.dependencies import CallerDep, SessionDep
from social_api.schemas.post import PostResponse
from social_api.schemas.user import UserResponse, UserUpdate
from social_api.services import post_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_me(caller: CallerDep, db: SessionDep) -> UserResponse:
    """Return the authenticated caller's profile."""
    return UserResponse.model_validate(user_service.get_current_user(db, caller))


@router.patch("/me", response_model=UserResponse)
async def update_me(payload: UserUpdate, caller: CallerDep, db: SessionDep) -> UserResponse:
    """Update the caller's own profile."""
    return UserResponse.model_validate(user_service.update_user(db, caller, payload))


@router.delete("/me")
async def delete_me(caller: CallerDep, db: SessionDep) -> bool:
    """Delete the caller's account and everything it owns."""
    return user_service.delete_user(db, caller)


@router.get("/", response_model=list[UserResponse])
async def list_users(
    caller: CallerDep,
    db: SessionDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
) -> list[UserResponse]:
    """List all accounts (admin only)."""
    users = user_service.list_users(db, caller, skip=skip, limit=limit)
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str, db: SessionDep) -> UserResponse:
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.get("/{user_id}/posts", response_model=list[PostResponse])
async def read_user_posts(user_id: str, db: SessionDep) -> list[PostResponse]:
    """Return a user's posts, newest first."""
    user = user_service.get_user(db, user_id)
    return [
        post_service.to_post_response(db, post)
        for post in post_service.list_user_posts(db, user.id)
    ]
