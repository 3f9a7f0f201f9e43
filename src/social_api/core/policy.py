"""Authorization policy: who may act on which resource."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from social_api.core.errors import AuthenticationError, AuthorizationError


class Role(str, enum.Enum):
    """Closed set of caller roles."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Caller:
    """Identity resolved for the current request.

    Lives for a single request and is never persisted.
    """

    id: str
    role: Role = Role.USER
    username: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def authenticate(caller: Caller | None) -> Caller:
    """Return the caller, or raise if the request is anonymous."""
    if caller is None:
        raise AuthenticationError("Not authenticated")
    return caller


def authorize(caller_id: str, resource_owner_id: str, caller_role: Role | str) -> None:
    """Allow the resource owner or an admin; reject everyone else.

    Must run after the resource is loaded and before it is mutated.
    """
    if caller_id != resource_owner_id and caller_role != Role.ADMIN:
        raise AuthorizationError("Not authorized")


def require_admin(caller: Caller | None) -> Caller:
    """Return the caller if it is an authenticated admin."""
    user = authenticate(caller)
    if user.role != Role.ADMIN:
        raise AuthorizationError("Not authorized")
    return user
