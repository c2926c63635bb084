"""Authentication: password hashing, JWT issuance and request dependencies."""

from recipe_share.auth.dependencies import CurrentUser, CurrentUserDep, get_current_user
from recipe_share.auth.passwords import hash_password, verify_password
from recipe_share.auth.permissions import Role
from recipe_share.auth.tokens import (
    InvalidTokenError,
    TokenClaims,
    TokenError,
    TokenExpiredError,
    TokenService,
    TokenType,
)


__all__ = [
    "CurrentUser",
    "CurrentUserDep",
    "InvalidTokenError",
    "Role",
    "TokenClaims",
    "TokenError",
    "TokenExpiredError",
    "TokenService",
    "TokenType",
    "get_current_user",
    "hash_password",
    "verify_password",
]
