"""Unit tests for S3 image storage."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from recipe_share.core.config.settings import StorageSettings
from recipe_share.core.exceptions import StorageError
from recipe_share.storage.s3 import S3ImageStorage, object_extension


pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def storage_settings() -> StorageSettings:
    return StorageSettings(bucket="recipe-images", region="eu-west-1")


class TestObjectExtension:
    """Tests for object_extension."""

    def test_prefers_filename_suffix(self) -> None:
        """Should keep the uploaded file's extension, lowercased."""
        assert object_extension("image/png", "Bread.JPG") == ".jpg"

    def test_falls_back_to_content_type(self) -> None:
        """Should derive the extension from the MIME type."""
        assert object_extension("image/png", None) == ".png"

    def test_unknown_type(self) -> None:
        """Should return an empty extension when nothing is known."""
        assert object_extension("application/x-unknown-thing", "blob") == ""


class TestConstruction:
    """Tests for S3ImageStorage construction."""

    def test_requires_bucket(self, client) -> None:
        """Should refuse an empty bucket name."""
        with pytest.raises(ValueError, match="bucket"):
            S3ImageStorage(StorageSettings(bucket=""), client=client)


class TestPublicUrl:
    """Tests for S3ImageStorage.public_url."""

    def test_public_base_url(self, client) -> None:
        """Should prefer the configured public base URL."""
        storage = S3ImageStorage(
            StorageSettings(bucket="b", public_base_url="https://cdn.test/img/"),
            client=client,
        )

        assert storage.public_url("recipes/a.png") == "https://cdn.test/img/recipes/a.png"

    def test_custom_endpoint(self, client) -> None:
        """Should use path-style URLs for custom endpoints."""
        storage = S3ImageStorage(
            StorageSettings(bucket="b", endpoint_url="http://localhost:9000"),
            client=client,
        )

        assert storage.public_url("k.png") == "http://localhost:9000/b/k.png"

    def test_aws_default(self, client, storage_settings) -> None:
        """Should use the virtual-hosted AWS URL otherwise."""
        storage = S3ImageStorage(storage_settings, client=client)

        assert (
            storage.public_url("k.png")
            == "https://recipe-images.s3.eu-west-1.amazonaws.com/k.png"
        )


class TestStoreImage:
    """Tests for S3ImageStorage.store_image."""

    @pytest.mark.asyncio
    async def test_uploads_object(self, client, storage_settings) -> None:
        """Should put the object under the key prefix and return its URL."""
        storage = S3ImageStorage(storage_settings, client=client)

        url = await storage.store_image(b"\x89PNG", "image/png", "bread.png")

        client.put_object.assert_called_once()
        kwargs = client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "recipe-images"
        assert kwargs["Key"].startswith("recipes/")
        assert kwargs["Key"].endswith(".png")
        assert kwargs["Body"] == b"\x89PNG"
        assert kwargs["ContentType"] == "image/png"
        assert kwargs["CacheControl"] == "public, max-age=31536000"
        assert url.endswith(kwargs["Key"])

    @pytest.mark.asyncio
    async def test_keys_are_unique(self, client, storage_settings) -> None:
        """Should never reuse a key for two uploads."""
        storage = S3ImageStorage(storage_settings, client=client)

        first = await storage.store_image(b"a", "image/png")
        second = await storage.store_image(b"b", "image/png")

        assert first != second

    @pytest.mark.asyncio
    async def test_client_error(self, client, storage_settings) -> None:
        """Should raise StorageError when S3 rejects the upload."""
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        storage = S3ImageStorage(storage_settings, client=client)

        with pytest.raises(StorageError, match="S3 upload failed"):
            await storage.store_image(b"a", "image/png")

    @pytest.mark.asyncio
    async def test_connection_error(self, client, storage_settings) -> None:
        """Should raise StorageError when the endpoint is unreachable."""
        client.put_object.side_effect = EndpointConnectionError(
            endpoint_url="https://s3.test"
        )
        storage = S3ImageStorage(storage_settings, client=client)

        with pytest.raises(StorageError):
            await storage.store_image(b"a", "image/png")
