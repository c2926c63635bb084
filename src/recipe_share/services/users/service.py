"""User profile service."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_share.auth.permissions import Role
from recipe_share.core.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.auth.dependencies import CurrentUser
    from recipe_share.database.repositories.users import UserRecord, UserRepository

logger = get_logger(__name__)


class UserService:
    """Self-service profile edits."""

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    async def edit_profile(self, actor: CurrentUser, name: str) -> UserRecord:
        """Rename the calling user.

        Only accounts with the ``user`` role may edit their profile; admin
        accounts are managed out of band.

        Raises:
            ForbiddenError: ``actor`` is not a plain user.
            InvalidInputError: ``name`` is blank.
            NotFoundError: The account no longer exists.
        """
        if actor.role != Role.USER:
            msg = "Only regular users can edit their profile"
            raise ForbiddenError(msg)

        name = (name or "").strip()
        if not name:
            msg = "Name must not be empty"
            raise InvalidInputError(msg)

        user = await self._users.update_name(actor.id, name)
        if user is None:
            msg = "User not found"
            raise NotFoundError(msg)

        logger.info("Profile updated", user_id=actor.id)
        return user
