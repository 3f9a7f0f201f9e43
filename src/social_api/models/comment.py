# src/social_api/models/comment.py
"""SQLAlchemy model for threaded comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from social_api.db.session import Base
from social_api.db.time import new_id, utcnow

if TYPE_CHECKING:
    from .post import Post


class Comment(Base):
    """Comment on a post, optionally replying to another comment.

    Comments form a forest per post: ``parent_id`` points at an earlier comment
    on the same post, or is NULL for top-level comments. The same-post rule is
    enforced by the comment service, not by the schema.
    """

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_post_id", "post_id"),
        Index("ix_comments_parent_id", "parent_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Replies outlive their parent; the reference is cleared instead.
    parent_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("comments.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
