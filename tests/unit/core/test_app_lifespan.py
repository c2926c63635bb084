"""Unit tests for application startup and shutdown.

Tests cover:
- Service wiring on app state
- Recipe service gating on object storage
- Startup and shutdown ordering
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from recipe_share.core.events import build_services, lifespan
from recipe_share.services.auth import AuthService
from recipe_share.services.recipes import RecipeService


pytestmark = pytest.mark.unit

MODULE = "recipe_share.core.events.lifespan"


class TestBuildServices:
    """Tests for build_services."""

    def test_wires_services(self, test_settings) -> None:
        """Should attach every service to app state."""
        app = FastAPI()
        pool = MagicMock()

        with patch(f"{MODULE}.S3ImageStorage") as storage_cls:
            build_services(app, test_settings, pool)

        assert isinstance(app.state.auth_service, AuthService)
        assert isinstance(app.state.recipe_service, RecipeService)
        assert app.state.recipe_service.max_image_bytes == 1024
        assert app.state.comment_service.max_length == 300
        assert app.state.rating_service.top_max_limit == 100
        assert app.state.bookmark_service is not None
        assert app.state.user_service is not None
        storage_cls.assert_called_once_with(test_settings.storage)

    def test_without_bucket(self, test_settings) -> None:
        """Should leave the recipe service unset without a bucket."""
        app = FastAPI()
        settings = test_settings.model_copy(
            update={"storage": test_settings.storage.model_copy(update={"bucket": ""})}
        )

        build_services(app, settings, MagicMock())

        assert app.state.recipe_service is None
        assert app.state.auth_service is not None

    def test_missing_secrets_abort(self, test_settings) -> None:
        """Should refuse to start without token secrets."""
        settings = test_settings.model_copy(update={"REFRESH_TOKEN_SECRET": ""})

        with pytest.raises(ValueError, match="REFRESH_TOKEN_SECRET"):
            build_services(FastAPI(), settings, MagicMock())


class TestLifespan:
    """Tests for the lifespan context manager."""

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self, test_settings) -> None:
        """Should open the pool, build services and close everything."""
        app = FastAPI()
        app.state.settings = test_settings
        pool = MagicMock()

        with (
            patch(f"{MODULE}.setup_logging") as setup_logging,
            patch(
                f"{MODULE}.init_database_pool", new=AsyncMock(return_value=pool)
            ) as init_pool,
            patch(f"{MODULE}.close_database_pool", new=AsyncMock()) as close_pool,
            patch(f"{MODULE}.shutdown_tracing") as shutdown_tracing,
            patch(f"{MODULE}.S3ImageStorage"),
        ):
            async with lifespan(app):
                init_pool.assert_awaited_once_with(test_settings)
                assert app.state.token_service is not None
                close_pool.assert_not_awaited()

        setup_logging.assert_called_once()
        shutdown_tracing.assert_called_once()
        close_pool.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_failure_aborts_startup(self, test_settings) -> None:
        """Should propagate pool errors so the process does not serve."""
        app = FastAPI()
        app.state.settings = test_settings

        with (
            patch(f"{MODULE}.setup_logging"),
            patch(
                f"{MODULE}.init_database_pool",
                new=AsyncMock(side_effect=OSError("connection refused")),
            ),
            pytest.raises(OSError, match="connection refused"),
        ):
            async with lifespan(app):
                pytest.fail("startup should not complete")
