"""Recipe endpoints.

Create and update take ``multipart/form-data``: scalar fields as form
fields, the photo as ``image``, and ingredients/instructions as JSON-encoded
arrays in form fields.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status

from recipe_share.api.dependencies import get_recipe_service
from recipe_share.auth.dependencies import CurrentUserDep
from recipe_share.database.repositories.base import MAX_ROW_ID
from recipe_share.schemas.base import MessageResponse
from recipe_share.schemas.recipe import (
    RecipeCreatedResponse,
    RecipeMutationResponse,
    RecipeResponse,
    RecipeSummaryResponse,
)
from recipe_share.services.recipes import ImageUpload, RecipeService


router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeId = Annotated[int, Path(ge=1, le=MAX_ROW_ID, description="Recipe ID")]


async def _read_upload(upload: UploadFile | None, limit: int) -> ImageUpload | None:
    if upload is None:
        return None
    # One byte past the limit is enough to reject an oversized file
    data = await upload.read(limit + 1)
    if not data:
        return None
    return ImageUpload(
        data=data,
        content_type=upload.content_type or "application/octet-stream",
        filename=upload.filename,
    )


@router.get(
    "",
    response_model=list[RecipeResponse],
    summary="List recipes, newest first",
)
async def list_recipes(
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
) -> list[RecipeResponse]:
    return [RecipeResponse.from_detail(r) for r in await recipes.list_all()]


@router.get(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Get a recipe with ingredients and instructions",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: RecipeId,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
) -> RecipeResponse:
    return RecipeResponse.from_detail(await recipes.get(recipe_id))


@router.post(
    "",
    response_model=RecipeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a recipe",
    responses={
        400: {"description": "Missing image or malformed fields"},
        401: {"description": "Authentication required"},
    },
)
async def create_recipe(
    user: CurrentUserDep,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
    title: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    time: Annotated[str, Form()] = "",
    ingredients: Annotated[str | None, Form(description="JSON array")] = None,
    instructions: Annotated[str | None, Form(description="JSON array")] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> RecipeCreatedResponse:
    recipe = await recipes.create(
        user.id,
        title=title,
        description=description,
        time=time,
        image=await _read_upload(image, recipes.max_image_bytes),
        ingredients=ingredients,
        instructions=instructions,
    )
    return RecipeCreatedResponse(
        message="Recipe created successfully",
        recipe=RecipeResponse.from_detail(recipe),
    )


@router.patch(
    "/{recipe_id}",
    response_model=RecipeMutationResponse,
    summary="Update your recipe",
    responses={
        403: {"description": "Not the recipe owner"},
        404: {"description": "Recipe not found"},
    },
)
async def update_recipe(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    time: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> RecipeMutationResponse:
    updated = await recipes.update(
        recipe_id,
        user,
        title=title,
        description=description,
        time=time,
        image=await _read_upload(image, recipes.max_image_bytes),
    )
    return RecipeMutationResponse(
        message="Recipe updated successfully",
        recipe=RecipeSummaryResponse.from_record(updated),
    )


@router.delete(
    "/{recipe_id}",
    response_model=MessageResponse,
    summary="Delete your recipe",
    responses={
        403: {"description": "Not the recipe owner"},
        404: {"description": "Recipe not found"},
    },
)
async def delete_recipe(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
) -> MessageResponse:
    await recipes.delete(recipe_id, user)
    return MessageResponse(message="Recipe deleted successfully")
