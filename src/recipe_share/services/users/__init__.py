"""User profile service."""

from recipe_share.services.users.service import UserService


__all__ = ["UserService"]
