"""Rating endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from recipe_share.api.dependencies import PathId, get_rating_service
from recipe_share.auth.dependencies import CurrentUserDep
from recipe_share.schemas.base import MessageResponse
from recipe_share.schemas.rating import (
    AverageRatingResponse,
    RateRecipeRequest,
    RateRecipeResponse,
    RatingResponse,
    TopRatedRecipeResponse,
    UserRatingResponse,
)
from recipe_share.services.ratings import RatingService  # noqa: TC001


router = APIRouter(prefix="/ratings", tags=["Ratings"])


@router.post(
    "/recipe/{recipe_id}",
    response_model=RateRecipeResponse,
    summary="Rate a recipe (creates or replaces your rating)",
    responses={
        201: {"description": "Rating created"},
        400: {"description": "Value outside 1-5"},
        404: {"description": "Recipe not found"},
    },
)
async def rate_recipe(
    recipe_id: PathId,
    body: RateRecipeRequest,
    response: Response,
    user: CurrentUserDep,
    ratings: Annotated[RatingService, Depends(get_rating_service)],
) -> RateRecipeResponse:
    rating, created = await ratings.rate(recipe_id, user.id, body.value)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return RateRecipeResponse(
        message="Rating created" if created else "Rating updated",
        created=created,
        rating=RatingResponse.from_record(rating),
    )


@router.get(
    "/recipe/{recipe_id}",
    response_model=AverageRatingResponse,
    summary="Average rating of a recipe",
)
async def get_average_rating(
    recipe_id: PathId,
    ratings: Annotated[RatingService, Depends(get_rating_service)],
) -> AverageRatingResponse:
    summary = await ratings.average(recipe_id)
    return AverageRatingResponse(
        recipe_id=recipe_id,
        average=summary.average,
        count=summary.count,
    )


@router.get(
    "/my",
    response_model=list[UserRatingResponse],
    summary="Your ratings",
)
async def list_my_ratings(
    user: CurrentUserDep,
    ratings: Annotated[RatingService, Depends(get_rating_service)],
) -> list[UserRatingResponse]:
    return [
        UserRatingResponse.from_user_rating(r)
        for r in await ratings.list_for_user(user.id)
    ]


@router.delete(
    "/recipe/{recipe_id}",
    response_model=MessageResponse,
    summary="Remove your rating",
    responses={404: {"description": "You have not rated this recipe"}},
)
async def delete_rating(
    recipe_id: PathId,
    user: CurrentUserDep,
    ratings: Annotated[RatingService, Depends(get_rating_service)],
) -> MessageResponse:
    await ratings.remove(recipe_id, user.id)
    return MessageResponse(message="Rating deleted successfully")


@router.get(
    "/top",
    response_model=list[TopRatedRecipeResponse],
    summary="Top rated recipes",
)
async def top_rated_recipes(
    ratings: Annotated[RatingService, Depends(get_rating_service)],
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[TopRatedRecipeResponse]:
    return [TopRatedRecipeResponse.from_row(r) for r in await ratings.top_rated(limit)]
