"""Recipe service."""

from recipe_share.services.recipes.service import ImageUpload, RecipeService


__all__ = ["ImageUpload", "RecipeService"]
