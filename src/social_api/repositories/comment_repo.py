"""Data access helpers for threaded comments."""
from __future__ import annotations

from sqlalchemy import update

from social_api.models.comment import Comment

from .base import Repository

__all__ = ["CommentRepository"]


class CommentRepository(Repository[Comment]):
    model = Comment

    def list_top_level(self, post_id: str) -> list[Comment]:
        """Return comments with no parent on a post, newest first."""
        return self.list(
            Comment.post_id == post_id,
            Comment.parent_id.is_(None),
            order_by=[Comment.created_at.desc(), Comment.id],
        )

    def list_replies(self, comment_id: str) -> list[Comment]:
        """Return direct replies to a comment, oldest first."""
        return self.list(
            Comment.parent_id == comment_id,
            order_by=[Comment.created_at.asc(), Comment.id],
        )

    def count_replies(self, comment_id: str) -> int:
        return self.count(Comment.parent_id == comment_id)

    def detach_replies(self, comment_id: str) -> int:
        """Clear the parent reference of every direct reply.

        Returns:
            The number of replies promoted to top level.
        """
        result = self.session.execute(
            update(Comment)
            .where(Comment.parent_id == comment_id)
            .values(parent_id=None)
            .execution_options(synchronize_session="fetch")
        )
        self.session.flush()
        return int(result.rowcount or 0)
