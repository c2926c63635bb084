"""Bookmark endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from recipe_share.api.dependencies import PathId, get_bookmark_service
from recipe_share.auth.dependencies import CurrentUserDep
from recipe_share.schemas.base import MessageResponse
from recipe_share.schemas.bookmark import (
    AddBookmarkRequest,
    BookmarkCreatedResponse,
    BookmarkedRecipeResponse,
    BookmarkResponse,
)
from recipe_share.services.bookmarks import BookmarkService  # noqa: TC001


router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.post(
    "",
    response_model=BookmarkCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Bookmark a recipe",
    responses={
        400: {"description": "Already bookmarked"},
        404: {"description": "Recipe not found"},
    },
)
async def add_bookmark(
    body: AddBookmarkRequest,
    user: CurrentUserDep,
    bookmarks: Annotated[BookmarkService, Depends(get_bookmark_service)],
) -> BookmarkCreatedResponse:
    bookmark = await bookmarks.add(user.id, body.recipe_id)
    return BookmarkCreatedResponse(
        message="Recipe bookmarked",
        bookmark=BookmarkResponse.from_record(bookmark),
    )


@router.delete(
    "/{recipe_id}",
    response_model=MessageResponse,
    summary="Remove a bookmark",
    responses={404: {"description": "Bookmark not found"}},
)
async def remove_bookmark(
    recipe_id: PathId,
    user: CurrentUserDep,
    bookmarks: Annotated[BookmarkService, Depends(get_bookmark_service)],
) -> MessageResponse:
    await bookmarks.remove(user.id, recipe_id)
    return MessageResponse(message="Bookmark removed")


@router.get(
    "",
    response_model=list[BookmarkedRecipeResponse],
    summary="Your bookmarked recipes, newest first",
)
async def list_bookmarks(
    user: CurrentUserDep,
    bookmarks: Annotated[BookmarkService, Depends(get_bookmark_service)],
) -> list[BookmarkedRecipeResponse]:
    return [
        BookmarkedRecipeResponse.from_bookmarked(item)
        for item in await bookmarks.list_mine(user.id)
    ]
