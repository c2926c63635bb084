"""Comment repository.

Comments form a two-level tree: a top-level comment has ``parent_id`` NULL,
a reply points at a top-level comment. Deleting a comment cascades to its
replies through the foreign key.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from recipe_share.database.repositories.base import BaseRepository


if TYPE_CHECKING:
    from collections.abc import Sequence

    from asyncpg import Record

_COMMENT_COLUMNS = "id, recipe_id, user_id, parent_id, content, created_at, updated_at"

_WITH_AUTHOR = """
    SELECT c.id, c.recipe_id, c.user_id, c.parent_id, c.content,
           c.created_at, c.updated_at, u.name AS user_name
    FROM comments c
    JOIN users u ON u.id = c.user_id
"""


class CommentRecord(BaseModel):
    """Data transfer object for a stored comment."""

    id: int
    recipe_id: int
    user_id: int
    parent_id: int | None = None
    content: str
    created_at: datetime
    updated_at: datetime


class CommentWithAuthor(CommentRecord):
    user_name: str


def _to_comment(row: Record | None) -> CommentRecord | None:
    return CommentRecord(**dict(row)) if row is not None else None


class CommentRepository(BaseRepository):
    """Repository for the ``comments`` table."""

    async def count_top_level(self, recipe_id: int) -> int:
        query = """
            SELECT count(*) FROM comments
            WHERE recipe_id = $1 AND parent_id IS NULL
        """
        async with self.connection() as conn:
            return int(await conn.fetchval(query, recipe_id))

    async def list_top_level(
        self,
        recipe_id: int,
        *,
        limit: int,
        offset: int,
    ) -> list[CommentWithAuthor]:
        """Top-level comments of a recipe, newest first."""
        query = f"""
            {_WITH_AUTHOR}
            WHERE c.recipe_id = $1 AND c.parent_id IS NULL
            ORDER BY c.created_at DESC, c.id DESC
            LIMIT $2 OFFSET $3
        """
        async with self.connection() as conn:
            rows = await conn.fetch(query, recipe_id, limit, offset)
        return [CommentWithAuthor(**dict(row)) for row in rows]

    async def list_replies(self, parent_ids: Sequence[int]) -> list[CommentWithAuthor]:
        """Replies to any of ``parent_ids``, oldest first."""
        if not parent_ids:
            return []
        query = f"""
            {_WITH_AUTHOR}
            WHERE c.parent_id = ANY($1::int[])
            ORDER BY c.created_at ASC, c.id ASC
        """
        async with self.connection() as conn:
            rows = await conn.fetch(query, list(parent_ids))
        return [CommentWithAuthor(**dict(row)) for row in rows]

    async def get(self, comment_id: int) -> CommentRecord | None:
        query = f"SELECT {_COMMENT_COLUMNS} FROM comments WHERE id = $1"
        async with self.connection() as conn:
            row = await conn.fetchrow(query, comment_id)
        return _to_comment(row)

    async def create(
        self,
        *,
        recipe_id: int,
        user_id: int,
        content: str,
        parent_id: int | None = None,
    ) -> CommentRecord:
        query = f"""
            INSERT INTO comments (recipe_id, user_id, parent_id, content)
            VALUES ($1, $2, $3, $4)
            RETURNING {_COMMENT_COLUMNS}
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, recipe_id, user_id, parent_id, content)
        return CommentRecord(**dict(row))

    async def delete(self, comment_id: int) -> bool:
        async with self.connection() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM comments WHERE id = $1 RETURNING id", comment_id
            )
        return deleted is not None
