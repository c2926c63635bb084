"""JWT issuance and verification.

Access and refresh tokens are signed with different secrets so that one
kind can never be accepted in place of the other. Each token also records
its kind in the ``type`` claim.

Access token claims: ``id``, ``email``, ``role``, ``type="access"``.
Refresh token claims: ``id``, ``role``, ``type="refresh"``, plus a random
``jti`` so that two tokens issued in the same second still differ.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ValidationError

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.core.config import Settings

logger = get_logger(__name__)


class TokenType(StrEnum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenSubject(Protocol):
    """Anything carrying the identity fields that go into a token."""

    id: int
    email: str
    role: str


class TokenClaims(BaseModel):
    """Decoded token payload."""

    id: int
    role: str
    type: TokenType
    iat: datetime
    exp: datetime
    email: str | None = None  # access tokens only
    jti: str | None = None  # refresh tokens only


class TokenError(Exception):
    """Base exception for token-related errors."""


class InvalidTokenError(TokenError):
    """Signature, structure or token type is wrong."""


class TokenExpiredError(InvalidTokenError):
    """The token's ``exp`` is in the past."""


class TokenService:
    """Signs and verifies access and refresh tokens.

    Holds no state beyond its configuration; results depend only on the
    payload, the secrets and the current time.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=10),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        if not access_secret or not refresh_secret:
            msg = "Both ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set"
            raise ValueError(msg)
        if access_secret == refresh_secret:
            msg = "Access and refresh token secrets must differ"
            raise ValueError(msg)
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            algorithm=settings.auth.jwt.algorithm,
            access_ttl=timedelta(minutes=settings.auth.jwt.access_token_expire_minutes),
            refresh_ttl=timedelta(days=settings.auth.jwt.refresh_token_expire_days),
        )

    def issue_access_token(self, user: TokenSubject) -> str:
        """Create a short-lived access token for ``user``."""
        now = datetime.now(UTC)
        payload = {
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "type": TokenType.ACCESS.value,
            "iat": now,
            "exp": now + self.access_ttl,
        }
        return jwt.encode(payload, self._access_secret, algorithm=self._algorithm)

    def issue_refresh_token(self, user: TokenSubject) -> str:
        """Create a long-lived refresh token for ``user``."""
        now = datetime.now(UTC)
        payload = {
            "id": user.id,
            "role": user.role,
            "type": TokenType.REFRESH.value,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self.refresh_ttl,
        }
        return jwt.encode(payload, self._refresh_secret, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> TokenClaims:
        """Check signature, expiry and type of an access token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: For any other verification failure.
        """
        return self._decode(token, self._access_secret, TokenType.ACCESS)

    def verify_refresh_token(self, token: str) -> TokenClaims:
        """Check signature, expiry and type of a refresh token.

        This does not consult the credential store; whether the token still
        belongs to an active session is decided by the caller.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: For any other verification failure.
        """
        return self._decode(token, self._refresh_secret, TokenType.REFRESH)

    def _decode(self, token: str, secret: str, expected: TokenType) -> TokenClaims:
        try:
            payload = jwt.decode(token, secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            logger.debug("Token expired", token_type=expected.value)
            msg = "Token has expired"
            raise TokenExpiredError(msg) from e
        except JWTError as e:
            logger.debug("Token rejected", token_type=expected.value, error=str(e))
            msg = "Invalid token"
            raise InvalidTokenError(msg) from e

        if payload.get("type") != expected.value:
            msg = f"Expected {expected.value} token"
            raise InvalidTokenError(msg)

        try:
            return TokenClaims(**payload)
        except ValidationError as e:
            msg = "Malformed token claims"
            raise InvalidTokenError(msg) from e
