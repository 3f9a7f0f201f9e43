"""Like-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LikeCreate(BaseModel):
    post_id: str


class LikeResponse(BaseModel):
    id: str
    user_id: str
    post_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
