# src/social_api/models/rating.py
"""Model capturing 1-5 star ratings on posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from social_api.db.session import Base
from social_api.db.time import new_id, utcnow

if TYPE_CHECKING:
    from .post import Post

RATING_MIN: Final[int] = 1
RATING_MAX: Final[int] = 5


class Rating(Base):
    """Per-user rating on a post; resubmitting overwrites the value."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_ratings_user_post"),
        CheckConstraint(
            f"value BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_ratings_value"
        ),
        Index("ix_ratings_post_id", "post_id"),
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
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    post: Mapped[Post] = relationship("Post", back_populates="ratings")
