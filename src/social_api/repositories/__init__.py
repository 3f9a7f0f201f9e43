"""Repositories wrapping persistence for each entity."""

from .base import Repository
from .comment_repo import CommentRepository
from .like_repo import LikeRepository
from .post_repo import PostRepository
from .rating_repo import RatingRepository
from .user_repo import UserRepository

__all__ = [
    "Repository",
    "CommentRepository",
    "LikeRepository",
    "PostRepository",
    "RatingRepository",
    "UserRepository",
]
