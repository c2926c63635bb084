"""Rating repository.

One row per (user, recipe). Writes go through a single upsert so two
concurrent ratings by the same user leave exactly one row.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from recipe_share.database.repositories.base import BaseRepository


_RATING_COLUMNS = "id, user_id, recipe_id, value, created_at, updated_at"


class RatingRecord(BaseModel):
    """Data transfer object for a stored rating."""

    id: int
    user_id: int
    recipe_id: int
    value: float
    created_at: datetime
    updated_at: datetime


class UserRating(RatingRecord):
    """A user's rating joined with a summary of the rated recipe."""

    recipe_title: str
    recipe_image_url: str


class RatingAggregate(BaseModel):
    mean: float | None = None
    count: int = 0


class TopRatedRow(BaseModel):
    recipe_id: int
    mean: float
    votes: int
    title: str
    image_url: str


class RatingRepository(BaseRepository):
    """Repository for the ``ratings`` table."""

    async def upsert(
        self,
        user_id: int,
        recipe_id: int,
        value: float,
    ) -> tuple[RatingRecord, bool]:
        """Insert or overwrite the user's rating of a recipe.

        Returns:
            The stored rating and True if a new row was inserted.
        """
        # xmax is zero only for a row version created by a plain INSERT
        query = f"""
            INSERT INTO ratings (user_id, recipe_id, value)
            VALUES ($1, $2, $3)
            ON CONFLICT (user_id, recipe_id)
            DO UPDATE SET value = EXCLUDED.value, updated_at = now()
            RETURNING {_RATING_COLUMNS}, (xmax = 0) AS inserted
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, user_id, recipe_id, value)
        data = dict(row)
        inserted = bool(data.pop("inserted"))
        return RatingRecord(**data), inserted

    async def aggregate(self, recipe_id: int) -> RatingAggregate:
        query = """
            SELECT avg(value) AS mean, count(*) AS count
            FROM ratings
            WHERE recipe_id = $1
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, recipe_id)
        return RatingAggregate(mean=row["mean"], count=row["count"])

    async def list_for_user(self, user_id: int) -> list[UserRating]:
        query = """
            SELECT r.id, r.user_id, r.recipe_id, r.value, r.created_at, r.updated_at,
                   rc.title AS recipe_title, rc.image_url AS recipe_image_url
            FROM ratings r
            JOIN recipes rc ON rc.id = r.recipe_id
            WHERE r.user_id = $1
            ORDER BY r.updated_at DESC, r.id DESC
        """
        async with self.connection() as conn:
            rows = await conn.fetch(query, user_id)
        return [UserRating(**dict(row)) for row in rows]

    async def delete(self, user_id: int, recipe_id: int) -> bool:
        query = """
            DELETE FROM ratings
            WHERE user_id = $1 AND recipe_id = $2
            RETURNING id
        """
        async with self.connection() as conn:
            deleted = await conn.fetchval(query, user_id, recipe_id)
        return deleted is not None

    async def top_rated(self, limit: int) -> list[TopRatedRow]:
        """Recipes by mean rating, highest first; ties broken by recipe id."""
        query = """
            SELECT r.recipe_id, avg(r.value) AS mean, count(*) AS votes,
                   rc.title, rc.image_url
            FROM ratings r
            JOIN recipes rc ON rc.id = r.recipe_id
            GROUP BY r.recipe_id, rc.title, rc.image_url
            ORDER BY mean DESC, r.recipe_id ASC
            LIMIT $1
        """
        async with self.connection() as conn:
            rows = await conn.fetch(query, limit)
        return [TopRatedRow(**dict(row)) for row in rows]
