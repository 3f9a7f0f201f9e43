"""Ratings: one per user and post; resubmitting overwrites the value."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.core.errors import BadUserInputError, NotFoundError, is_unique_violation
from social_api.core.policy import Caller, authenticate
from social_api.models.rating import RATING_MAX, RATING_MIN, Rating
from social_api.repositories import PostRepository, RatingRepository

logger = logging.getLogger(__name__)

__all__ = ["rate_post", "average_rating"]


def rate_post(db: Session, post_id: str, value: int, caller: Caller | None) -> Rating:
    """Create or overwrite the caller's rating of a post.

    Args:
        db: Database session.
        post_id: Post being rated.
        value: Rating between 1 and 5 inclusive.
        caller: Identity of the requester.

    Returns:
        The created or updated rating.

    Raises:
        AuthenticationError: If the caller is anonymous.
        BadUserInputError: If the value is out of range.
        NotFoundError: If the post does not exist.
    """
    user = authenticate(caller)
    if not RATING_MIN <= value <= RATING_MAX:
        raise BadUserInputError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")
    if PostRepository(db).get_by_id(post_id) is None:
        raise NotFoundError("Post")

    ratings = RatingRepository(db)
    existing = ratings.find(user.id, post_id)
    if existing is None:
        try:
            with db.begin_nested():
                rating = ratings.create(user_id=user.id, post_id=post_id, value=value)
        except IntegrityError as err:
            # Lost a race against an identical request; fall through to the update.
            if not is_unique_violation(err):
                raise
            existing = ratings.find(user.id, post_id)
            if existing is None:
                raise
        else:
            db.commit()
            logger.info("Post rated: %s by user: %s, value: %d", post_id, user.id, value)
            return rating

    rating = ratings.update(existing.id, value=value)
    db.commit()
    logger.info("Rating updated for post: %s by user: %s, value: %d", post_id, user.id, value)
    return rating


def average_rating(db: Session, post_id: str) -> float | None:
    """Return the arithmetic mean of all ratings on a post, or None if there are none."""
    return RatingRepository(db).average(post_id)
