"""Comment threads and the rules that keep them well-formed.

Comments on a post form a forest. A reply must point at a comment on the same
post, and since a parent has to exist before anything can reference it and
comments are never re-parented, no cycles can appear. Deleting a comment never
cascades into its replies: they are promoted to top level instead.
"""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from social_api.core.errors import BadUserInputError, NotFoundError
from social_api.core.policy import Caller, authenticate, authorize
from social_api.models.comment import Comment
from social_api.repositories import CommentRepository, PostRepository
from social_api.schemas.comment import CommentCreate, CommentResponse, CommentUpdate

logger = logging.getLogger(__name__)

__all__ = [
    "get_comment",
    "list_post_comments",
    "count_post_comments",
    "list_replies",
    "count_replies",
    "create_comment",
    "update_comment",
    "delete_comment",
    "to_comment_response",
]


def get_comment(db: Session, comment_id: str) -> Comment | None:
    return CommentRepository(db).get_by_id(comment_id)


def _get_comment_or_404(db: Session, comment_id: str, resource: str = "Comment") -> Comment:
    comment = get_comment(db, comment_id)
    if comment is None:
        raise NotFoundError(resource)
    return comment


def list_post_comments(db: Session, post_id: str) -> list[Comment]:
    """Return the top-level comments of a post, newest first."""
    return CommentRepository(db).list_top_level(post_id)


def count_post_comments(db: Session, post_id: str) -> int:
    """Return how many comments a post has at any depth."""
    return CommentRepository(db).count(Comment.post_id == post_id)


def list_replies(db: Session, comment_id: str) -> list[Comment]:
    """Return the direct replies to a comment, oldest first."""
    return CommentRepository(db).list_replies(comment_id)


def count_replies(db: Session, comment_id: str) -> int:
    return CommentRepository(db).count_replies(comment_id)


def create_comment(db: Session, data: CommentCreate, caller: Caller | None) -> Comment:
    """Comment on a post, optionally as a reply.

    Args:
        db: Database session.
        data: Target post, content and optional parent comment.
        caller: Identity of the requester.

    Returns:
        The newly created comment.

    Raises:
        AuthenticationError: If the caller is anonymous.
        NotFoundError: If the post or the parent comment does not exist.
        BadUserInputError: If the parent comment belongs to another post.
    """
    user = authenticate(caller)
    if PostRepository(db).get_by_id(data.post_id) is None:
        raise NotFoundError("Post")

    if data.parent_id is not None:
        parent = _get_comment_or_404(db, data.parent_id, resource="Parent comment")
        if parent.post_id != data.post_id:
            raise BadUserInputError("Parent comment does not belong to this post")

    comment = CommentRepository(db).create(
        user_id=user.id,
        post_id=data.post_id,
        content=data.content,
        parent_id=data.parent_id,
    )
    db.commit()
    logger.info("Comment created: %s by user: %s", comment.id, user.id)
    return comment


def update_comment(
    db: Session,
    comment_id: str,
    data: CommentUpdate,
    caller: Caller | None,
) -> Comment:
    """Edit the content of a comment owned by the caller (or any, for admins)."""
    user = authenticate(caller)
    comment = _get_comment_or_404(db, comment_id)
    authorize(user.id, comment.user_id, user.role)

    updated = CommentRepository(db).update(comment.id, content=data.content)
    db.commit()
    logger.info("Comment updated: %s by user: %s", comment_id, user.id)
    return updated


def delete_comment(db: Session, comment_id: str, caller: Caller | None) -> bool:
    """Delete a comment; its replies stay and become top-level."""
    user = authenticate(caller)
    comment = _get_comment_or_404(db, comment_id)
    authorize(user.id, comment.user_id, user.role)

    comments = CommentRepository(db)
    detached = comments.detach_replies(comment.id)
    comments.delete(comment.id)
    db.commit()
    logger.info(
        "Comment deleted: %s by user: %s (%d replies detached)", comment_id, user.id, detached
    )
    return True


def to_comment_response(db: Session, comment: Comment) -> CommentResponse:
    response = CommentResponse.model_validate(comment)
    return response.model_copy(update={"reply_count": count_replies(db, comment.id)})
