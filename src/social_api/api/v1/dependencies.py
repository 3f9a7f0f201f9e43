"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from social_api.core.credentials import CredentialCodec, get_credential_codec
from social_api.core.policy import Caller
from social_api.db.session import get_db
from social_api.services.context import resolve_caller

# Missing or malformed headers resolve to an anonymous caller instead of a 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_codec() -> CredentialCodec:
    """Return the shared credential codec."""
    return get_credential_codec()


CodecDep = Annotated[CredentialCodec, Depends(get_codec)]


def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
    codec: CodecDep,
) -> Caller | None:
    """Resolve the caller for this request, or None when anonymous.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session
        codec: Credential codec

    Returns:
        The resolved caller, or None
    """
    token = credentials.credentials if credentials is not None else None
    return resolve_caller(token, codec, db)


# Type alias for the (possibly anonymous) caller dependency
CallerDep = Annotated[Caller | None, Depends(get_caller)]
