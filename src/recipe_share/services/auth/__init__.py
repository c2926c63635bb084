"""Authentication session management."""

from recipe_share.services.auth.service import AuthService, LoginResult


__all__ = ["AuthService", "LoginResult"]
