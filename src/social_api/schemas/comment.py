"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for commenting on a post or replying to a comment."""

    post_id: str
    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: str | None = Field(None, description="Parent comment ID for replies")


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    id: str
    user_id: str
    post_id: str
    content: str
    parent_id: str | None
    created_at: datetime
    updated_at: datetime
    reply_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class PostCommentsResponse(BaseModel):
    comments: list[CommentResponse]
    total_count: int
