"""Business logic services for the social API."""

from . import (
    comment_service,
    context,
    like_service,
    post_service,
    rating_service,
    user_service,
)

__all__ = [
    "comment_service",
    "context",
    "like_service",
    "post_service",
    "rating_service",
    "user_service",
]
