"""Bookmark request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

from pydantic import Field, StrictInt

from recipe_share.database.repositories.base import MAX_ROW_ID
from recipe_share.schemas.base import APIRequest, APIResponse
from recipe_share.schemas.recipe import RecipeResponse


if TYPE_CHECKING:
    from recipe_share.database.repositories.bookmarks import BookmarkRecord
    from recipe_share.services.bookmarks import BookmarkedRecipe


class AddBookmarkRequest(APIRequest):
    recipe_id: Annotated[StrictInt, Field(le=MAX_ROW_ID)]


class BookmarkResponse(APIResponse):
    id: int
    user_id: int
    recipe_id: int
    created_at: datetime

    @classmethod
    def from_record(cls, bookmark: BookmarkRecord) -> BookmarkResponse:
        return cls(
            id=bookmark.id,
            user_id=bookmark.user_id,
            recipe_id=bookmark.recipe_id,
            created_at=bookmark.created_at,
        )


class BookmarkCreatedResponse(APIResponse):
    message: str
    bookmark: BookmarkResponse


class BookmarkedRecipeResponse(APIResponse):
    id: int
    bookmarked_at: datetime
    recipe: RecipeResponse

    @classmethod
    def from_bookmarked(cls, item: BookmarkedRecipe) -> BookmarkedRecipeResponse:
        return cls(
            id=item.bookmark_id,
            bookmarked_at=item.bookmarked_at,
            recipe=RecipeResponse.from_detail(item.recipe),
        )
