"""Object storage for recipe images."""

from recipe_share.storage.s3 import ImageStorage, S3ImageStorage


__all__ = ["ImageStorage", "S3ImageStorage"]
