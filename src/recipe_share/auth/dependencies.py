"""FastAPI security dependencies.

Routes that need an authenticated caller depend on ``get_current_user``,
which validates the bearer access token and yields a ``CurrentUser``.
Downstream services trust this value and never re-read the token.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel

from recipe_share.auth.permissions import Role
from recipe_share.auth.tokens import InvalidTokenError, TokenExpiredError, TokenService
from recipe_share.core.exceptions import ServiceUnavailableError, UnauthorizedError


# Extracts the bearer token only; validation happens in get_current_user
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    scheme_name="JWT",
    description="JWT bearer access token",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated caller, as described by the access token."""

    id: int
    email: str
    role: str

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def get_token_service(request: Request) -> TokenService:
    """Get the token service from app state.

    Raises:
        ServiceUnavailableError: If the service is not initialized.
    """
    service: TokenService | None = getattr(request.app.state, "token_service", None)
    if service is None:
        msg = "Token service not available"
        raise ServiceUnavailableError(msg)
    return service


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Resolve the caller from the ``Authorization: Bearer`` access token.

    Raises:
        UnauthorizedError: If the token is missing, expired or invalid.
    """
    if not token:
        msg = "Access token required"
        raise UnauthorizedError(msg)

    try:
        claims = tokens.verify_access_token(token)
    except TokenExpiredError:
        msg = "Access token has expired"
        raise UnauthorizedError(msg) from None
    except InvalidTokenError:
        msg = "Invalid access token"
        raise UnauthorizedError(msg) from None

    if claims.email is None:
        msg = "Invalid access token"
        raise UnauthorizedError(msg)

    return CurrentUser(id=claims.id, email=claims.email, role=claims.role)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
