"""Resolve the caller of an inbound request from its bearer credential."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from social_api.core.credentials import CredentialCodec, CredentialError
from social_api.core.policy import Caller
from social_api.repositories import UserRepository

logger = logging.getLogger(__name__)

__all__ = ["resolve_caller"]


def resolve_caller(token: str | None, codec: CredentialCodec, db: Session) -> Caller | None:
    """Return the caller identified by ``token``, or None for an anonymous request.

    A rejected credential and a credential for a deleted account both resolve
    to an anonymous caller. The role comes from the stored account, so a
    demoted admin loses access without waiting for the token to expire.
    """
    if not token:
        return None

    try:
        claims = codec.verify(token)
    except CredentialError as err:
        logger.warning("Invalid authentication token: %s", err.message)
        return None

    user = UserRepository(db).get_by_id(claims.subject)
    if user is None:
        logger.warning("User not found for valid token: %s", claims.subject)
        return None
    return Caller(id=user.id, role=user.role, username=user.username)
