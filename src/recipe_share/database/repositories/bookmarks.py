"""Bookmark repository."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from recipe_share.database.repositories.base import BaseRepository


class BookmarkRecord(BaseModel):
    """Data transfer object for a stored bookmark."""

    id: int
    user_id: int
    recipe_id: int
    created_at: datetime


class BookmarkRepository(BaseRepository):
    """Repository for the ``bookmarks`` table."""

    async def add(self, user_id: int, recipe_id: int) -> BookmarkRecord | None:
        """Create a bookmark.

        Returns:
            The bookmark, or None if the user had already bookmarked the recipe.
        """
        query = """
            INSERT INTO bookmarks (user_id, recipe_id)
            VALUES ($1, $2)
            ON CONFLICT (user_id, recipe_id) DO NOTHING
            RETURNING id, user_id, recipe_id, created_at
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, user_id, recipe_id)
        return BookmarkRecord(**dict(row)) if row is not None else None

    async def delete(self, user_id: int, recipe_id: int) -> bool:
        query = """
            DELETE FROM bookmarks
            WHERE user_id = $1 AND recipe_id = $2
            RETURNING id
        """
        async with self.connection() as conn:
            deleted = await conn.fetchval(query, user_id, recipe_id)
        return deleted is not None

    async def list_for_user(self, user_id: int) -> list[BookmarkRecord]:
        """The user's bookmarks, newest first."""
        query = """
            SELECT id, user_id, recipe_id, created_at
            FROM bookmarks
            WHERE user_id = $1
            ORDER BY created_at DESC, id DESC
        """
        async with self.connection() as conn:
            rows = await conn.fetch(query, user_id)
        return [BookmarkRecord(**dict(row)) for row in rows]
