"""Rating-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RatePostRequest(BaseModel):
    """Schema for rating a post.

    The 1-5 range is enforced by the rating service so that out-of-range
    values surface as BAD_USER_INPUT rather than a schema failure.
    """

    post_id: str
    value: int = Field(..., description="Rating between 1 and 5")


class RatingResponse(BaseModel):
    id: str
    user_id: str
    post_id: str
    value: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
