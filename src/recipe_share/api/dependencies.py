"""FastAPI dependencies for service access.

Services are built during application startup and stored on ``app.state``.
A missing service means startup did not complete, which is reported as 503.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Path, Request

from recipe_share.core.exceptions import ServiceUnavailableError
from recipe_share.database.repositories.base import MAX_ROW_ID


if TYPE_CHECKING:
    from recipe_share.core.config import Settings
    from recipe_share.services.auth import AuthService
    from recipe_share.services.bookmarks import BookmarkService
    from recipe_share.services.comments import CommentService
    from recipe_share.services.ratings import RatingService
    from recipe_share.services.recipes import RecipeService
    from recipe_share.services.users import UserService


# Ids outside the INTEGER range can never match a row
PathId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def _from_state(request: Request, name: str, label: str) -> Any:
    service = getattr(request.app.state, name, None)
    if service is None:
        msg = f"{label} not available"
        raise ServiceUnavailableError(msg)
    return service


async def get_auth_service(request: Request) -> AuthService:
    return _from_state(request, "auth_service", "Auth service")


async def get_recipe_service(request: Request) -> RecipeService:
    return _from_state(request, "recipe_service", "Recipe service")


async def get_comment_service(request: Request) -> CommentService:
    return _from_state(request, "comment_service", "Comment service")


async def get_rating_service(request: Request) -> RatingService:
    return _from_state(request, "rating_service", "Rating service")


async def get_bookmark_service(request: Request) -> BookmarkService:
    return _from_state(request, "bookmark_service", "Bookmark service")


async def get_user_service(request: Request) -> UserService:
    return _from_state(request, "user_service", "User service")


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings
