# src/social_api/models/__init__.py
"""SQLAlchemy models for the social API."""

from .comment import Comment
from .like import Like
from .post import Post
from .rating import Rating
from .user import User

__all__ = [
    "Comment",
    "Like",
    "Post",
    "Rating",
    "User",
]
