"""Recipe image storage on S3-compatible object storage.

Objects are written under ``{key_prefix}{uuid}{ext}`` with a long-lived
public ``Cache-Control`` header; the returned URL is what gets stored on the
recipe. boto3 is synchronous, so uploads run in a worker thread.
"""

from __future__ import annotations

import asyncio
import mimetypes
import uuid
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from recipe_share.core.exceptions import StorageError
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.core.config.settings import StorageSettings

logger = get_logger(__name__)


class ImageStorage(Protocol):
    """Stores an image and returns its public URL."""

    async def store_image(
        self,
        data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> str: ...


def object_extension(content_type: str, filename: str | None) -> str:
    """Pick a file extension from the upload name, falling back to the MIME type."""
    if filename:
        suffix = PurePath(filename).suffix.lower()
        if suffix:
            return suffix
    return mimetypes.guess_extension(content_type) or ""


class S3ImageStorage:
    """``ImageStorage`` backed by an S3 bucket."""

    def __init__(self, settings: StorageSettings, client: Any | None = None) -> None:
        if not settings.bucket:
            msg = "storage.bucket must be configured"
            raise ValueError(msg)
        self._settings = settings
        self._client = client or boto3.client(
            "s3",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
        )

    def public_url(self, key: str) -> str:
        base = self._settings.public_base_url
        if base:
            return f"{base.rstrip('/')}/{key}"
        if self._settings.endpoint_url:
            return f"{self._settings.endpoint_url.rstrip('/')}/{self._settings.bucket}/{key}"
        return (
            f"https://{self._settings.bucket}.s3."
            f"{self._settings.region}.amazonaws.com/{key}"
        )

    async def store_image(
        self,
        data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> str:
        """Upload ``data`` and return its public URL.

        Raises:
            StorageError: If the object store rejects the upload.
        """
        key = (
            f"{self._settings.key_prefix}{uuid.uuid4()}"
            f"{object_extension(content_type, filename)}"
        )
        try:
            await asyncio.to_thread(
                self._client.put_object,
                Bucket=self._settings.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl=self._settings.cache_control,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Image upload failed",
                bucket=self._settings.bucket,
                key=key,
                error=str(e),
            )
            msg = f"S3 upload failed: {e}"
            raise StorageError(msg) from e

        logger.info("Image uploaded", key=key, size=len(data))
        return self.public_url(key)
