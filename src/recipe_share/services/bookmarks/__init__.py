"""Bookmark service."""

from recipe_share.services.bookmarks.service import BookmarkedRecipe, BookmarkService


__all__ = ["BookmarkService", "BookmarkedRecipe"]
