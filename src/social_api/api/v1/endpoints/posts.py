# src/social_api/api/v1/endpoints/posts.py
"""Post-related endpoints for the social API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from social_api.api.v1.dependencies import CallerDep, SessionDep
from social_api.schemas.comment import PostCommentsResponse
from social_api.schemas.like import LikeResponse
from social_api.schemas.post import PostCreate, PostResponse, PostUpdate
from social_api.schemas.rating import RatingResponse
from social_api.services import comment_service, post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    offset: int = Query(0, ge=0),
) -> list[PostResponse]:
    """List posts, newest first."""
    return [
        post_service.to_post_response(db, post)
        for post in post_service.list_posts(db, limit=limit, offset=offset)
    ]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: SessionDep) -> PostResponse:
    """Get a specific post by ID, with its like count and average rating."""
    return post_service.to_post_response(db, post_service.get_post(db, post_id))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=PostResponse)
async def create_post(payload: PostCreate, caller: CallerDep, db: SessionDep) -> PostResponse:
    post = post_service.create_post(db, caller, payload)
    return post_service.to_post_response(db, post)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    payload: PostUpdate,
    caller: CallerDep,
    db: SessionDep,
) -> PostResponse:
    """Edit a post; only its author or an admin may do so."""
    post = post_service.update_post(db, post_id, payload, caller)
    return post_service.to_post_response(db, post)


@router.delete("/{post_id}")
async def delete_post(post_id: str, caller: CallerDep, db: SessionDep) -> bool:
    """Delete a post together with its comments, likes and ratings."""
    return post_service.delete_post(db, post_id, caller)


@router.get("/{post_id}/comments", response_model=PostCommentsResponse)
async def get_post_comments(post_id: str, db: SessionDep) -> PostCommentsResponse:
    """Return the top-level comments of a post plus its total comment count."""
    post = post_service.get_post(db, post_id)
    comments = comment_service.list_post_comments(db, post.id)
    return PostCommentsResponse(
        comments=[comment_service.to_comment_response(db, comment) for comment in comments],
        total_count=comment_service.count_post_comments(db, post.id),
    )


@router.get("/{post_id}/likes", response_model=list[LikeResponse])
async def get_post_likes(post_id: str, db: SessionDep) -> list[LikeResponse]:
    return [LikeResponse.model_validate(like) for like in post_service.list_post_likes(db, post_id)]


@router.get("/{post_id}/ratings", response_model=list[RatingResponse])
async def get_post_ratings(post_id: str, db: SessionDep) -> list[RatingResponse]:
    return [
        RatingResponse.model_validate(rating)
        for rating in post_service.list_post_ratings(db, post_id)
    ]
