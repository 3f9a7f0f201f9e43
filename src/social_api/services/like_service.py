"""Likes: at most one per user and post, and liking twice is a no-op."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from social_api.core.errors import NotFoundError, is_unique_violation
from social_api.core.policy import Caller, authenticate
from social_api.models.like import Like
from social_api.repositories import LikeRepository, PostRepository

logger = logging.getLogger(__name__)

__all__ = ["like_post", "unlike_post"]


def like_post(db: Session, post_id: str, caller: Caller | None) -> Like:
    """Like a post, returning the existing like if there already is one.

    Raises:
        AuthenticationError: If the caller is anonymous.
        NotFoundError: If the post does not exist.
    """
    user = authenticate(caller)
    if PostRepository(db).get_by_id(post_id) is None:
        raise NotFoundError("Post")

    likes = LikeRepository(db)
    existing = likes.find(user.id, post_id)
    if existing is not None:
        return existing

    try:
        with db.begin_nested():
            like = likes.create(user_id=user.id, post_id=post_id)
    except IntegrityError as err:
        # A concurrent request inserted the same pair first.
        if not is_unique_violation(err):
            raise
        winner = likes.find(user.id, post_id)
        if winner is None:
            raise
        logger.info(
            "Concurrent like on post %s by user %s resolved to %s", post_id, user.id, winner.id
        )
        return winner

    db.commit()
    logger.info("Post liked: %s by user: %s", post_id, user.id)
    return like


def unlike_post(db: Session, post_id: str, caller: Caller | None) -> bool:
    """Remove the caller's like from a post.

    Raises:
        NotFoundError: If the caller has not liked the post.
    """
    user = authenticate(caller)
    likes = LikeRepository(db)
    like = likes.find(user.id, post_id)
    if like is None:
        raise NotFoundError("Like")

    likes.delete(like.id)
    db.commit()
    logger.info("Post unliked: %s by user: %s", post_id, user.id)
    return True
