"""Post CRUD and per-post aggregates."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from social_api.core.errors import BadUserInputError, NotFoundError
from social_api.core.policy import Caller, authenticate, authorize
from social_api.models.like import Like
from social_api.models.post import Post
from social_api.models.rating import Rating
from social_api.repositories import LikeRepository, PostRepository, RatingRepository
from social_api.schemas.post import PostCreate, PostResponse, PostUpdate
from social_api.services import rating_service

logger = logging.getLogger(__name__)

__all__ = [
    "get_post",
    "list_posts",
    "list_user_posts",
    "create_post",
    "update_post",
    "delete_post",
    "likes_count",
    "list_post_likes",
    "list_post_ratings",
    "to_post_response",
]


def get_post(db: Session, post_id: str) -> Post:
    """Return a post by id.

    Raises:
        NotFoundError: If the post does not exist.
    """
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post")
    return post


def list_posts(db: Session, limit: int | None = None, offset: int = 0) -> list[Post]:
    return PostRepository(db).list_recent(limit=limit, offset=offset)


def list_user_posts(db: Session, user_id: str) -> list[Post]:
    return PostRepository(db).list_by_author(user_id)


def create_post(db: Session, caller: Caller | None, data: PostCreate) -> Post:
    user = authenticate(caller)
    post = PostRepository(db).create(
        user_id=user.id,
        media_file=data.media_file,
        caption=data.caption,
    )
    db.commit()
    logger.info("Post created: %s by user: %s", post.id, user.id)
    return post


def update_post(db: Session, post_id: str, data: PostUpdate, caller: Caller | None) -> Post:
    """Edit a post owned by the caller (or any post, for admins)."""
    user = authenticate(caller)
    post = get_post(db, post_id)
    authorize(user.id, post.user_id, user.role)

    changes = data.model_dump(exclude_unset=True)
    if "media_file" in changes and changes["media_file"] is None:
        raise BadUserInputError("media_file cannot be null")

    updated = PostRepository(db).update(post.id, **changes)
    db.commit()
    logger.info("Post updated: %s by user: %s", post_id, user.id)
    return updated


def delete_post(db: Session, post_id: str, caller: Caller | None) -> bool:
    """Delete a post; its comments, likes and ratings go with it."""
    user = authenticate(caller)
    post = get_post(db, post_id)
    authorize(user.id, post.user_id, user.role)

    PostRepository(db).delete(post.id)
    db.commit()
    logger.info("Post deleted: %s by user: %s", post_id, user.id)
    return True


def likes_count(db: Session, post_id: str) -> int:
    return LikeRepository(db).count_for_post(post_id)


def list_post_likes(db: Session, post_id: str) -> list[Like]:
    return LikeRepository(db).list_for_post(get_post(db, post_id).id)


def list_post_ratings(db: Session, post_id: str) -> list[Rating]:
    return RatingRepository(db).list_for_post(get_post(db, post_id).id)


def to_post_response(db: Session, post: Post) -> PostResponse:
    """Convert a Post ORM instance to an API schema with its aggregates."""
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        media_file=post.media_file,
        caption=post.caption,
        created_at=post.created_at,
        updated_at=post.updated_at,
        likes_count=likes_count(db, post.id),
        avg_rating=rating_service.average_rating(db, post.id),
    )
