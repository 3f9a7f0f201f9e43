"""Account registration, login and profile management."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Sequence

import bcrypt
from sqlalchemy.orm import Session

from social_api.core.credentials import CredentialClaims, CredentialCodec
from social_api.core.errors import (
    AuthenticationError,
    BadUserInputError,
    ConflictError,
    NotFoundError,
)
from social_api.core.policy import Caller, authenticate, require_admin
from social_api.core.settings import settings
from social_api.models.user import User
from social_api.repositories import UserRepository
from social_api.schemas.user import RegisterRequest, UserUpdate

logger = logging.getLogger(__name__)

__all__ = [
    "AuthResult",
    "register_user",
    "login_user",
    "refresh_token",
    "get_current_user",
    "get_user",
    "list_users",
    "update_user",
    "delete_user",
]


@dataclass(frozen=True)
class AuthResult:
    """A freshly issued credential and the account it belongs to."""

    token: str
    user: User


# bcrypt only reads the first 72 bytes of a secret.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of the password."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


def _issue_token(codec: CredentialCodec, user: User) -> str:
    return codec.issue(CredentialClaims(subject=user.id, username=user.username, role=user.role))


def register_user(db: Session, codec: CredentialCodec, data: RegisterRequest) -> AuthResult:
    """Create an account and log it in.

    Raises:
        BadUserInputError: If the username or email is already taken.
    """
    users = UserRepository(db)
    if users.find_by_username_or_email(data.username, data.email) is not None:
        raise BadUserInputError("User already exists with that username or email")

    user = users.create(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
        bio=data.bio,
        profile_picture=data.profile_picture,
    )
    db.commit()
    logger.info("User registered: %s", user.id)
    return AuthResult(token=_issue_token(codec, user), user=user)


def login_user(db: Session, codec: CredentialCodec, email: str, password: str) -> AuthResult:
    """Check the password and issue a credential.

    The same message is used for an unknown email and a wrong password.
    """
    user = UserRepository(db).get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    logger.info("User logged in: %s", user.id)
    return AuthResult(token=_issue_token(codec, user), user=user)


def refresh_token(codec: CredentialCodec, token: str, expires_in: timedelta | None = None) -> str:
    """Exchange a still-valid credential for a fresh one."""
    return codec.reissue(token, expires_in)


def get_current_user(db: Session, caller: Caller | None) -> User:
    user = authenticate(caller)
    return get_user(db, user.id)


def get_user(db: Session, user_id: str) -> User:
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User")
    return user


def list_users(
    db: Session,
    caller: Caller | None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[User]:
    """Return all accounts; admin only."""
    require_admin(caller)
    return UserRepository(db).list(order_by=[User.created_at, User.id], offset=skip, limit=limit)


def update_user(db: Session, caller: Caller | None, data: UserUpdate) -> User:
    """Apply partial updates to the caller's own account."""
    current = authenticate(caller)
    users = UserRepository(db)
    changes = data.model_dump(exclude_unset=True)

    if "username" in changes and changes["username"] is None:
        raise BadUserInputError("username cannot be null")
    username = changes.get("username")
    if username is not None:
        holder = users.first(User.username == username)
        if holder is not None and holder.id != current.id:
            raise ConflictError("Username already taken")

    user = users.update(current.id, **changes)
    db.commit()
    logger.info("User updated: %s", current.id)
    return user


def delete_user(db: Session, caller: Caller | None) -> bool:
    """Delete the caller's account together with everything it owns."""
    current = authenticate(caller)
    UserRepository(db).delete(current.id)
    db.commit()
    logger.info("User deleted: %s", current.id)
    return True
