# src/social_api/api/v1/endpoints/comments.py
"""Comment endpoints for the social API."""

from __future__ import annotations

from fastapi import APIRouter, status

from social_api.api.v1.dependencies import CallerDep, SessionDep
from social_api.core.errors import NotFoundError
from social_api.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from social_api.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: str, db: SessionDep) -> CommentResponse:
    comment = comment_service.get_comment(db, comment_id)
    if comment is None:
        raise NotFoundError("Comment")
    return comment_service.to_comment_response(db, comment)


@router.get("/{comment_id}/replies", response_model=list[CommentResponse])
async def get_replies(comment_id: str, db: SessionDep) -> list[CommentResponse]:
    """Return direct replies to a comment, oldest first."""
    return [
        comment_service.to_comment_response(db, reply)
        for reply in comment_service.list_replies(db, comment_id)
    ]


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CommentResponse)
async def create_comment(
    payload: CommentCreate,
    caller: CallerDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post or reply to a comment on the same post."""
    comment = comment_service.create_comment(db, payload, caller)
    return comment_service.to_comment_response(db, comment)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    caller: CallerDep,
    db: SessionDep,
) -> CommentResponse:
    comment = comment_service.update_comment(db, comment_id, payload, caller)
    return comment_service.to_comment_response(db, comment)


@router.delete("/{comment_id}")
async def delete_comment(comment_id: str, caller: CallerDep, db: SessionDep) -> bool:
    """Delete a comment; its replies are kept as top-level comments."""
    return comment_service.delete_comment(db, comment_id, caller)
