# src/social_api/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .likes import router as likes_router
from .posts import router as posts_router
from .ratings import router as ratings_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "comments_router",
    "likes_router",
    "posts_router",
    "ratings_router",
    "users_router",
]
