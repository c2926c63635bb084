"""Bookmark service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_share.core.exceptions import ConflictError, NotFoundError
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from datetime import datetime

    from recipe_share.database.repositories.bookmarks import (
        BookmarkRecord,
        BookmarkRepository,
    )
    from recipe_share.database.repositories.recipes import (
        RecipeDetail,
        RecipeRepository,
    )

logger = get_logger(__name__)


@dataclass(frozen=True)
class BookmarkedRecipe:
    bookmark_id: int
    bookmarked_at: datetime
    recipe: RecipeDetail


class BookmarkService:
    """Per-user bookmarks of recipes."""

    def __init__(
        self,
        *,
        bookmarks: BookmarkRepository,
        recipes: RecipeRepository,
    ) -> None:
        self._bookmarks = bookmarks
        self._recipes = recipes

    async def add(self, user_id: int, recipe_id: int) -> BookmarkRecord:
        """Bookmark a recipe.

        Raises:
            NotFoundError: The recipe does not exist.
            ConflictError: The recipe is already bookmarked.
        """
        if not await self._recipes.exists(recipe_id):
            msg = "Recipe not found"
            raise NotFoundError(msg)

        bookmark = await self._bookmarks.add(user_id, recipe_id)
        if bookmark is None:
            msg = "Recipe already bookmarked"
            raise ConflictError(msg)

        logger.info("Bookmark added", user_id=user_id, recipe_id=recipe_id)
        return bookmark

    async def remove(self, user_id: int, recipe_id: int) -> None:
        if not await self._bookmarks.delete(user_id, recipe_id):
            msg = "Bookmark not found"
            raise NotFoundError(msg)
        logger.info("Bookmark removed", user_id=user_id, recipe_id=recipe_id)

    async def list_mine(self, user_id: int) -> list[BookmarkedRecipe]:
        """The user's bookmarked recipes with full details, newest bookmark first."""
        bookmarks = await self._bookmarks.list_for_user(user_id)
        if not bookmarks:
            return []

        details = {
            recipe.id: recipe
            for recipe in await self._recipes.list_details(
                [b.recipe_id for b in bookmarks]
            )
        }
        return [
            BookmarkedRecipe(
                bookmark_id=b.id,
                bookmarked_at=b.created_at,
                recipe=details[b.recipe_id],
            )
            for b in bookmarks
            # A recipe deleted after the bookmark listing is skipped
            if b.recipe_id in details
        ]
