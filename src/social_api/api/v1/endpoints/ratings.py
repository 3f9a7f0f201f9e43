# src/social_api/api/v1/endpoints/ratings.py
"""Rating endpoints for the social API."""

from __future__ import annotations

from fastapi import APIRouter

from social_api.api.v1.dependencies import CallerDep, SessionDep
from social_api.schemas.rating import RatePostRequest, RatingResponse
from social_api.services import rating_service

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("/", response_model=RatingResponse)
async def rate_post(payload: RatePostRequest, caller: CallerDep, db: SessionDep) -> RatingResponse:
    """Rate a post from 1 to 5. Rating it again overwrites the previous value."""
    rating = rating_service.rate_post(db, payload.post_id, payload.value, caller)
    return RatingResponse.model_validate(rating)
