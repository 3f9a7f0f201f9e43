"""Data access helpers for likes."""
from __future__ import annotations

from social_api.models.like import Like

from .base import Repository

__all__ = ["LikeRepository"]


class LikeRepository(Repository[Like]):
    model = Like

    def find(self, user_id: str, post_id: str) -> Like | None:
        """Return the like a user left on a post, if any."""
        return self.first(Like.user_id == user_id, Like.post_id == post_id)

    def list_for_post(self, post_id: str) -> list[Like]:
        return self.list(Like.post_id == post_id, order_by=[Like.created_at.asc(), Like.id])

    def count_for_post(self, post_id: str) -> int:
        return self.count(Like.post_id == post_id)
