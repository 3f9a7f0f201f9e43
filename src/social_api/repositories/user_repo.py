"""Data access helpers for user accounts."""
from __future__ import annotations

from sqlalchemy import or_

from social_api.models.user import User

from .base import Repository

__all__ = ["UserRepository"]


class UserRepository(Repository[User]):
    model = User

    def get_by_email(self, email: str) -> User | None:
        return self.first(User.email == email)

    def find_by_username_or_email(self, username: str, email: str) -> User | None:
        """Return any account already holding the username or the email."""
        return self.first(or_(User.username == username, User.email == email))
