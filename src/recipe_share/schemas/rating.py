"""Rating request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from recipe_share.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from recipe_share.database.repositories.ratings import (
        RatingRecord,
        TopRatedRow,
        UserRating,
    )


class RateRecipeRequest(APIRequest):
    # Strict so JSON booleans and numeric strings are not coerced
    value: Annotated[float, Field(strict=True)]


class RatingResponse(APIResponse):
    id: int
    user_id: int
    recipe_id: int
    value: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, rating: RatingRecord) -> RatingResponse:
        return cls(
            id=rating.id,
            user_id=rating.user_id,
            recipe_id=rating.recipe_id,
            value=rating.value,
            created_at=rating.created_at,
            updated_at=rating.updated_at,
        )


class RateRecipeResponse(APIResponse):
    message: str
    created: bool
    rating: RatingResponse


class AverageRatingResponse(APIResponse):
    recipe_id: int
    average: float
    count: int


class RatedRecipe(APIResponse):
    id: int
    title: str
    image_url: str


class UserRatingResponse(RatingResponse):
    recipe: RatedRecipe

    @classmethod
    def from_user_rating(cls, rating: UserRating) -> UserRatingResponse:
        return cls(
            **RatingResponse.from_record(rating).model_dump(by_alias=False),
            recipe=RatedRecipe(
                id=rating.recipe_id,
                title=rating.recipe_title,
                image_url=rating.recipe_image_url,
            ),
        )


class TopRatedRecipeResponse(APIResponse):
    recipe_id: int
    average_rating: float
    total_votes: int
    recipe: RatedRecipe

    @classmethod
    def from_row(cls, row: TopRatedRow) -> TopRatedRecipeResponse:
        return cls(
            recipe_id=row.recipe_id,
            average_rating=round(row.mean, 2),
            total_votes=row.votes,
            recipe=RatedRecipe(id=row.recipe_id, title=row.title, image_url=row.image_url),
        )
