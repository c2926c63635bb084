"""Rating aggregation service."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from recipe_share.core.exceptions import InvalidInputError, NotFoundError
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.database.repositories.ratings import (
        RatingRecord,
        RatingRepository,
        TopRatedRow,
        UserRating,
    )
    from recipe_share.database.repositories.recipes import RecipeRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    average: float
    count: int


class RatingService:
    """One rating per user per recipe, with averages and a top-rated list."""

    def __init__(
        self,
        *,
        ratings: RatingRepository,
        recipes: RecipeRepository,
        min_value: float = 1.0,
        max_value: float = 5.0,
        top_default_limit: int = 5,
        top_max_limit: int = 100,
    ) -> None:
        self._ratings = ratings
        self._recipes = recipes
        self.min_value = min_value
        self.max_value = max_value
        self.top_default_limit = top_default_limit
        self.top_max_limit = top_max_limit

    async def rate(
        self,
        recipe_id: int,
        user_id: int,
        value: float,
    ) -> tuple[RatingRecord, bool]:
        """Create or replace the user's rating.

        Returns:
            The stored rating and True if it did not exist before.

        Raises:
            InvalidInputError: ``value`` is outside the allowed range.
            NotFoundError: The recipe does not exist.
        """
        if (
            isinstance(value, bool)
            or not math.isfinite(value)
            or not self.min_value <= value <= self.max_value
        ):
            msg = (
                f"Rating value must be between {self.min_value:g} "
                f"and {self.max_value:g}"
            )
            raise InvalidInputError(msg)

        if not await self._recipes.exists(recipe_id):
            msg = "Recipe not found"
            raise NotFoundError(msg)

        rating, created = await self._ratings.upsert(user_id, recipe_id, float(value))
        logger.info(
            "Recipe rated",
            recipe_id=recipe_id,
            user_id=user_id,
            created=created,
        )
        return rating, created

    async def average(self, recipe_id: int) -> RatingSummary:
        """Mean rating rounded to two decimals; ``(0, 0)`` when unrated."""
        aggregate = await self._ratings.aggregate(recipe_id)
        if not aggregate.count or aggregate.mean is None:
            return RatingSummary(average=0.0, count=0)
        return RatingSummary(average=round(aggregate.mean, 2), count=aggregate.count)

    async def list_for_user(self, user_id: int) -> list[UserRating]:
        return await self._ratings.list_for_user(user_id)

    async def remove(self, recipe_id: int, user_id: int) -> None:
        """Delete the user's rating of a recipe.

        Raises:
            NotFoundError: The user had not rated the recipe.
        """
        if not await self._ratings.delete(user_id, recipe_id):
            msg = "Rating not found"
            raise NotFoundError(msg)
        logger.info("Rating removed", recipe_id=recipe_id, user_id=user_id)

    async def top_rated(self, limit: int | None = None) -> list[TopRatedRow]:
        """Highest mean ratings first, ties broken by ascending recipe id."""
        limit = self.top_default_limit if limit is None else limit
        if not 1 <= limit <= self.top_max_limit:
            msg = f"limit must be between 1 and {self.top_max_limit}"
            raise InvalidInputError(msg)
        return await self._ratings.top_rated(limit)
