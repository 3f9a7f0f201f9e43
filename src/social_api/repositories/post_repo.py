"""Data access helpers for working with posts."""
from __future__ import annotations

from social_api.models.post import Post

from .base import Repository

__all__ = ["PostRepository"]


class PostRepository(Repository[Post]):
    model = Post

    def list_recent(self, limit: int | None = None, offset: int = 0) -> list[Post]:
        """Return posts sorted newest first."""
        return self.list(order_by=[Post.created_at.desc(), Post.id], limit=limit, offset=offset)

    def list_by_author(self, user_id: str) -> list[Post]:
        """Return one user's posts, newest first."""
        return self.list(Post.user_id == user_id, order_by=[Post.created_at.desc(), Post.id])
