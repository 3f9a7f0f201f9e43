"""Data access helpers for ratings."""
from __future__ import annotations

from sqlalchemy import func, select

from social_api.models.rating import Rating

from .base import Repository

__all__ = ["RatingRepository"]


class RatingRepository(Repository[Rating]):
    model = Rating

    def find(self, user_id: str, post_id: str) -> Rating | None:
        """Return the rating a user gave a post, if any."""
        return self.first(Rating.user_id == user_id, Rating.post_id == post_id)

    def list_for_post(self, post_id: str) -> list[Rating]:
        return self.list(Rating.post_id == post_id, order_by=[Rating.created_at.asc(), Rating.id])

    def average(self, post_id: str) -> float | None:
        """Return the mean rating value for a post, or None when it has no ratings."""
        value = self.session.scalar(
            select(func.avg(Rating.value)).where(Rating.post_id == post_id)
        )
        return float(value) if value is not None else None
