# src/social_api/api/v1/endpoints/likes.py
"""Like endpoints for the social API."""

from __future__ import annotations

from fastapi import APIRouter

from social_api.api.v1.dependencies import CallerDep, SessionDep
from social_api.schemas.like import LikeCreate, LikeResponse
from social_api.services import like_service

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("/", response_model=LikeResponse)
async def like_post(payload: LikeCreate, caller: CallerDep, db: SessionDep) -> LikeResponse:
    """Like a post. Liking the same post again returns the existing like."""
    return LikeResponse.model_validate(like_service.like_post(db, payload.post_id, caller))


@router.delete("/{post_id}")
async def unlike_post(post_id: str, caller: CallerDep, db: SessionDep) -> bool:
    return like_service.unlike_post(db, post_id, caller)
