"""Recipe service.

Recipes are created from multipart form submissions: scalar fields, an
image file, and ingredients/instructions as JSON-encoded arrays. The image
is validated before anything is uploaded, and the recipe row plus its
children are written in one transaction after the upload succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from recipe_share.core.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    validation_details,
)
from recipe_share.database.repositories.recipes import (
    IngredientDraft,
    InstructionDraft,
)
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.auth.dependencies import CurrentUser
    from recipe_share.database.repositories.recipes import (
        RecipeDetail,
        RecipeRecord,
        RecipeRepository,
    )
    from recipe_share.storage.s3 import ImageStorage

logger = get_logger(__name__)

_INGREDIENTS = TypeAdapter(list[IngredientDraft])
_INSTRUCTIONS = TypeAdapter(list[InstructionDraft])

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file held in memory."""

    data: bytes
    content_type: str
    filename: str | None = None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class RecipeService:
    """Recipe CRUD with owner-only mutation."""

    def __init__(
        self,
        *,
        recipes: RecipeRepository,
        storage: ImageStorage,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self._recipes = recipes
        self._storage = storage
        self.max_image_bytes = max_image_bytes

    async def list_all(self) -> list[RecipeDetail]:
        return await self._recipes.list_details()

    async def get(self, recipe_id: int) -> RecipeDetail:
        recipe = await self._recipes.get_detail(recipe_id)
        if recipe is None:
            msg = "Recipe not found"
            raise NotFoundError(msg)
        return recipe

    def validate_image(self, image: ImageUpload | None) -> ImageUpload:
        """Require an ``image/*`` upload no larger than ``max_image_bytes``.

        Raises:
            InvalidInputError: The image is missing, not an image, or too large.
        """
        if image is None or not image.data:
            msg = "Image is required"
            raise InvalidInputError(msg)
        if not image.content_type.startswith("image/"):
            msg = "Only image files are allowed"
            raise InvalidInputError(msg)
        if len(image.data) > self.max_image_bytes:
            limit_mb = self.max_image_bytes / (1024 * 1024)
            msg = f"Image must be at most {limit_mb:g} MB"
            raise InvalidInputError(msg)
        return image

    @staticmethod
    def parse_ingredients(raw: str | None) -> list[IngredientDraft]:
        """Parse a JSON array of ``{name, quantity, unit}`` objects."""
        if raw is None or not raw.strip():
            return []
        try:
            return _INGREDIENTS.validate_json(raw)
        except ValidationError as e:
            msg = "ingredients must be a JSON array of {name, quantity, unit}"
            raise InvalidInputError(
                msg, details=validation_details(e.errors())
            ) from e

    @staticmethod
    def parse_instructions(raw: str | None) -> list[InstructionDraft]:
        """Parse a JSON array of ``{order, description}`` objects."""
        if raw is None or not raw.strip():
            return []
        try:
            return _INSTRUCTIONS.validate_json(raw)
        except ValidationError as e:
            msg = "instructions must be a JSON array of {order, description}"
            raise InvalidInputError(
                msg, details=validation_details(e.errors())
            ) from e

    async def create(
        self,
        owner_id: int,
        *,
        title: str,
        description: str,
        time: str,
        image: ImageUpload | None,
        ingredients: str | None = None,
        instructions: str | None = None,
    ) -> RecipeDetail:
        """Validate the submission, upload the image and store the recipe.

        Raises:
            InvalidInputError: Any field is missing or malformed.
            StorageError: The image upload failed.
        """
        image = self.validate_image(image)
        title_value = _blank_to_none(title)
        description_value = _blank_to_none(description)
        time_value = _blank_to_none(time)
        if title_value is None or description_value is None or time_value is None:
            msg = "Title, description, and time are required"
            raise InvalidInputError(msg)
        ingredient_drafts = self.parse_ingredients(ingredients)
        instruction_drafts = self.parse_instructions(instructions)

        image_url = await self._storage.store_image(
            image.data, image.content_type, image.filename
        )
        return await self._recipes.create(
            owner_id=owner_id,
            title=title_value,
            description=description_value,
            time=time_value,
            image_url=image_url,
            ingredients=ingredient_drafts,
            instructions=instruction_drafts,
        )

    async def update(
        self,
        recipe_id: int,
        actor: CurrentUser,
        *,
        title: str | None = None,
        description: str | None = None,
        time: str | None = None,
        image: ImageUpload | None = None,
    ) -> RecipeRecord:
        """Apply a partial update; blank or missing fields keep their values.

        Raises:
            NotFoundError: The recipe does not exist.
            ForbiddenError: ``actor`` does not own the recipe.
        """
        recipe = await self._recipes.get(recipe_id)
        if recipe is None:
            msg = "Recipe not found"
            raise NotFoundError(msg)
        if recipe.owner_id != actor.id:
            msg = "You can only modify your own recipes"
            raise ForbiddenError(msg)

        image_url = None
        if image is not None and image.data:
            image = self.validate_image(image)
            image_url = await self._storage.store_image(
                image.data, image.content_type, image.filename
            )

        updated = await self._recipes.update(
            recipe_id,
            title=_blank_to_none(title),
            description=_blank_to_none(description),
            time=_blank_to_none(time),
            image_url=image_url,
        )
        if updated is None:
            msg = "Recipe not found"
            raise NotFoundError(msg)

        logger.info("Recipe updated", recipe_id=recipe_id, image_replaced=bool(image_url))
        return updated

    async def delete(self, recipe_id: int, actor: CurrentUser) -> None:
        """Delete a recipe owned by ``actor``.

        Raises:
            NotFoundError: The recipe does not exist.
            ForbiddenError: ``actor`` does not own the recipe.
        """
        recipe = await self._recipes.get(recipe_id)
        if recipe is None:
            msg = "Recipe not found"
            raise NotFoundError(msg)
        if recipe.owner_id != actor.id:
            msg = "You can only delete your own recipes"
            raise ForbiddenError(msg)

        await self._recipes.delete(recipe_id)
        logger.info("Recipe deleted", recipe_id=recipe_id, actor_id=actor.id)
