"""Recipe response schemas.

Recipe creation and update arrive as multipart forms, so there are no
request body models here; see the recipes endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from recipe_share.schemas.base import APIResponse


if TYPE_CHECKING:
    from recipe_share.database.repositories.recipes import RecipeDetail, RecipeRecord


class IngredientResponse(APIResponse):
    id: int
    name: str
    quantity: str
    unit: str


class InstructionResponse(APIResponse):
    id: int
    order: int
    description: str


class RecipeSummaryResponse(APIResponse):
    id: int
    title: str
    description: str
    image_url: str
    time: str
    owner_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, recipe: RecipeRecord) -> RecipeSummaryResponse:
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            image_url=recipe.image_url,
            time=recipe.time,
            owner_id=recipe.owner_id,
            created_at=recipe.created_at,
            updated_at=recipe.updated_at,
        )


class RecipeResponse(RecipeSummaryResponse):
    ingredients: list[IngredientResponse]
    instructions: list[InstructionResponse]

    @classmethod
    def from_detail(cls, recipe: RecipeDetail) -> RecipeResponse:
        return cls(
            **RecipeSummaryResponse.from_record(recipe).model_dump(by_alias=False),
            ingredients=[
                IngredientResponse(**i.model_dump()) for i in recipe.ingredients
            ],
            instructions=[
                InstructionResponse(**s.model_dump()) for s in recipe.instructions
            ],
        )


class RecipeMutationResponse(APIResponse):
    message: str
    recipe: RecipeSummaryResponse


class RecipeCreatedResponse(APIResponse):
    message: str
    recipe: RecipeResponse
