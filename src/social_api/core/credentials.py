"""Bearer credential issuance and verification.

Credentials are stateless HS256 JWTs. Validity depends only on the signature,
the expiry, the issuer and the audience; there is no server-side revocation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Any, Final

from jose import ExpiredSignatureError, JWTError, jwt

from social_api.core.errors import AuthenticationError, ValidationError
from social_api.core.policy import Role
from social_api.core.settings import Settings, settings

logger = logging.getLogger(__name__)

# jose silently skips absent registered claims unless they are required.
_REQUIRED_CLAIMS: Final[dict[str, bool]] = {
    "require_sub": True,
    "require_exp": True,
    "require_iat": True,
    "require_iss": True,
    "require_aud": True,
}


class ConfigurationError(RuntimeError):
    """Raised when the codec is used without a signing secret."""


class CredentialError(AuthenticationError):
    """Base class for rejected credentials."""


class ExpiredCredential(CredentialError):
    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class InvalidCredential(CredentialError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CredentialConfig:
    """Immutable signing configuration, loaded once at process start."""

    secret: str | None
    issuer: str = "social-media-api"
    audience: str = "social-media-app"
    algorithm: str = "HS256"
    default_ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, source: Settings) -> CredentialConfig:
        return cls(
            secret=source.secret_key,
            issuer=source.jwt_issuer,
            audience=source.jwt_audience,
            algorithm=source.jwt_algorithm,
            default_ttl=timedelta(minutes=source.access_token_expire_minutes),
        )


@dataclass(frozen=True)
class CredentialClaims:
    """Identity claims carried by a credential."""

    subject: str
    username: str | None = None
    role: Role | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    def identity(self) -> CredentialClaims:
        """Return the claims without the timestamps added at issuance."""
        return replace(self, issued_at=None, expires_at=None)


def _timestamp(value: Any) -> datetime | None:
    """Convert a NumericDate claim, or return None if it is absent or unrepresentable."""
    if not isinstance(value, int | float):
        return None
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def _claims_from_payload(payload: dict[str, Any]) -> CredentialClaims | None:
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    role = payload.get("role")
    return CredentialClaims(
        subject=subject,
        username=payload.get("username"),
        role=Role(role) if role is not None else None,
        issued_at=_timestamp(payload.get("iat")),
        expires_at=_timestamp(payload.get("exp")),
    )


class CredentialCodec:
    """Encode, verify and refresh bearer credentials."""

    def __init__(self, config: CredentialConfig) -> None:
        self._config = config

    def _secret(self) -> str:
        if not self._config.secret:
            raise ConfigurationError("SECRET_KEY is not configured")
        return self._config.secret

    def issue(
        self,
        claims: CredentialClaims,
        *,
        expires_in: timedelta | None = None,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> str:
        """Sign a new credential for the given claims.

        Args:
            claims: Identity claims; ``subject`` is required.
            expires_in: Lifetime override; defaults to the configured TTL.
            issuer: Issuer override.
            audience: Audience override.

        Returns:
            The encoded credential.

        Raises:
            ConfigurationError: If no signing secret is configured.
            ValidationError: If the claims carry no subject.
        """
        secret = self._secret()
        if not claims.subject:
            raise ValidationError("Credential claims must include a subject")

        now = datetime.now(UTC)
        ttl = expires_in if expires_in is not None else self._config.default_ttl
        payload: dict[str, Any] = {
            "sub": claims.subject,
            "iat": now,
            "exp": now + ttl,
            "iss": issuer or self._config.issuer,
            "aud": audience or self._config.audience,
        }
        if claims.username is not None:
            payload["username"] = claims.username
        if claims.role is not None:
            payload["role"] = Role(claims.role).value

        token: str = jwt.encode(payload, secret, algorithm=self._config.algorithm)
        return token

    def verify(self, credential: str) -> CredentialClaims:
        """Verify signature, expiry, issuer and audience together.

        Raises:
            ConfigurationError: If no signing secret is configured.
            ExpiredCredential: If the credential is past its expiry.
            InvalidCredential: If any other check fails.
        """
        secret = self._secret()
        try:
            unverified = jwt.get_unverified_claims(credential)
        except JWTError as err:
            logger.warning("Token verification failed: %s", err)
            raise InvalidCredential() from err

        # Expiry wins over every other failure, including a bad signature.
        raw_expiry = unverified.get("exp")
        expires_at = _timestamp(raw_expiry)
        if raw_expiry is not None and expires_at is None:
            logger.warning("Token verification failed: unusable exp claim %r", raw_expiry)
            raise InvalidCredential()
        if expires_at is not None and expires_at <= datetime.now(UTC):
            logger.warning("Token verification failed: expired at %s", expires_at.isoformat())
            raise ExpiredCredential()

        try:
            payload = jwt.decode(
                credential,
                secret,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                options=_REQUIRED_CLAIMS,
            )
        except ExpiredSignatureError as err:
            raise ExpiredCredential() from err
        except JWTError as err:
            logger.warning("Token verification failed: %s", err)
            raise InvalidCredential() from err

        try:
            claims = _claims_from_payload(payload)
        except ValueError as err:
            raise InvalidCredential("Token carries an unknown role") from err
        if claims is None:
            raise InvalidCredential("Token payload missing required fields")
        return claims

    def decode(self, credential: str) -> CredentialClaims | None:
        """Read claims without verifying them. Never treat the result as authenticated."""
        try:
            return _claims_from_payload(jwt.get_unverified_claims(credential))
        except (JWTError, ValueError) as err:
            logger.error("Error decoding token: %s", err)
            return None

    def reissue(self, credential: str, expires_in: timedelta | None = None) -> str:
        """Issue a fresh credential for the same identity.

        The input must pass :meth:`verify`; a stale credential cannot be refreshed.
        """
        claims = self.verify(credential)
        return self.issue(claims.identity(), expires_in=expires_in)


_codec: CredentialCodec | None = None


def get_credential_codec() -> CredentialCodec:
    """Return the process-wide codec built from application settings."""
    global _codec
    if _codec is None:
        _codec = CredentialCodec(CredentialConfig.from_settings(settings))
    return _codec
