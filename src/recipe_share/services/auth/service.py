"""Authentication session management.

Each user has at most one active session, represented by the refresh token
stored on the user row:

    LoggedOut (refresh_token NULL) --login--> LoggedIn (refresh_token = T)
    LoggedIn (T) --login--> LoggedIn (T')     T is no longer accepted
    LoggedIn (T) --logout(T)--> LoggedOut

The stored value, not the token signature, decides whether a refresh token
is still usable. A correctly signed token that is no longer stored is
rejected with 401; a stored token whose signature or expiry check fails is
rejected with 403.

Failed logins are logged but never counted; there is no lockout.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_share.auth.passwords import DEFAULT_ROUNDS, hash_password, verify_password
from recipe_share.auth.permissions import Role
from recipe_share.auth.tokens import InvalidTokenError
from recipe_share.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.auth.tokens import TokenService
    from recipe_share.database.repositories.users import UserRecord, UserRepository

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    refresh_token: str
    user: UserRecord


class AuthService:
    """Register, login, logout and access-token refresh."""

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, name: str, email: str, password: str) -> UserRecord:
        """Create a user with the ``user`` role.

        Raises:
            InvalidInputError: Missing fields, malformed email or short password.
            ConflictError: The email is already registered.
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            msg = "Name, email, and password are required"
            raise InvalidInputError(msg)
        if not EMAIL_PATTERN.match(email):
            msg = "Invalid email format"
            raise InvalidInputError(msg)
        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            raise InvalidInputError(msg)

        try:
            password_hash = await asyncio.to_thread(
                hash_password, password, self._bcrypt_rounds
            )
        except ValueError as e:
            raise InvalidInputError(str(e)) from e

        user = await self._users.create(name, email, password_hash, Role.USER.value)
        if user is None:
            msg = "User already exists"
            raise ConflictError(msg)

        logger.info("User registered", user_id=user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        """Verify credentials and start a new session.

        The new refresh token replaces whatever was stored, so any session
        opened by an earlier login ends here.

        Raises:
            InvalidInputError: Blank email or password.
            NotFoundError: No user with that email.
            UnauthorizedError: Wrong password.
        """
        email = (email or "").strip()
        if not email or not password or not password.strip():
            msg = "Email and password are required"
            raise InvalidInputError(msg)

        user = await self._users.get_by_email(email)
        if user is None:
            msg = "User not found"
            raise NotFoundError(msg)

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("Login rejected", user_id=user.id, reason="password_mismatch")
            msg = "Invalid password"
            raise UnauthorizedError(msg)

        access_token = self._tokens.issue_access_token(user)
        refresh_token = self._tokens.issue_refresh_token(user)

        updated = await self._users.set_refresh_token(user.id, refresh_token)
        if updated is None:
            # Deleted between lookup and update
            msg = "User not found"
            raise NotFoundError(msg)

        logger.info("User logged in", user_id=user.id)
        return LoginResult(
            access_token=access_token,
            refresh_token=refresh_token,
            user=updated,
        )

    async def logout(self, refresh_token: str | None) -> None:
        """End the session identified by ``refresh_token``.

        Raises:
            UnauthorizedError: No token, or no user currently holds it.
        """
        if not refresh_token:
            msg = "Refresh token required"
            raise UnauthorizedError(msg)

        user_id = await self._users.clear_refresh_token(refresh_token)
        if user_id is None:
            msg = "No active session for this refresh token"
            raise UnauthorizedError(msg)

        logger.info("User logged out", user_id=user_id)

    async def refresh(self, refresh_token: str | None) -> str:
        """Mint a new access token for the session's user.

        The refresh token itself is not rotated.

        Raises:
            UnauthorizedError: No token, or it is not the stored session token.
            ForbiddenError: The stored token fails signature or expiry checks.
        """
        if not refresh_token:
            msg = "Refresh token required"
            raise UnauthorizedError(msg)

        user = await self._users.get_by_refresh_token(refresh_token)
        if user is None:
            msg = "No active session for this refresh token"
            raise UnauthorizedError(msg)

        try:
            claims = self._tokens.verify_refresh_token(refresh_token)
        except InvalidTokenError as e:
            logger.info("Refresh rejected", user_id=user.id, reason=str(e))
            msg = "Refresh token is invalid or expired"
            raise ForbiddenError(msg) from e

        if claims.id != user.id:
            logger.warning(
                "Refresh token subject mismatch",
                user_id=user.id,
                token_subject=claims.id,
            )
            msg = "Refresh token is invalid or expired"
            raise ForbiddenError(msg)

        return self._tokens.issue_access_token(user)
