"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    media_file: str = Field(..., min_length=1, description="URL or path of the media file")
    caption: str | None = Field(None, max_length=2200)


class PostUpdate(BaseModel):
    """Schema for editing a post; unset fields are left untouched."""

    media_file: str | None = Field(None, min_length=1)
    caption: str | None = Field(None, max_length=2200)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    user_id: str
    media_file: str
    caption: str | None
    created_at: datetime
    updated_at: datetime
    likes_count: int = 0
    avg_rating: float | None = None

    model_config = ConfigDict(from_attributes=True)
