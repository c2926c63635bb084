"""Unit tests for the application factory."""

from __future__ import annotations

import pytest
from fastapi.middleware.cors import CORSMiddleware

from recipe_share.core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from recipe_share.factory import create_app


pytestmark = pytest.mark.unit


def _paths(app) -> set[str]:
    return {route.path for route in app.routes}


class TestCreateApp:
    """Tests for create_app."""

    def test_mounts_v1_routes(self, test_settings) -> None:
        """Should mount every router under the v1 prefix."""
        app = create_app(test_settings)

        paths = _paths(app)
        for path in (
            "/api/v1/health",
            "/api/v1/ready",
            "/api/v1/auth/login",
            "/api/v1/auth/token",
            "/api/v1/recipes",
            "/api/v1/recipes/{recipe_id}",
            "/api/v1/comments/recipe/{recipe_id}",
            "/api/v1/ratings/top",
            "/api/v1/bookmarks",
            "/api/v1/users/profile",
        ):
            assert path in paths

    def test_stores_settings(self, test_settings) -> None:
        """Should keep the settings on app state."""
        app = create_app(test_settings)

        assert app.state.settings is test_settings

    def test_docs_outside_production(self, test_settings) -> None:
        """Should expose docs in non-production environments."""
        app = create_app(test_settings)

        assert app.docs_url == "/docs"

    def test_no_docs_in_production(self, test_settings) -> None:
        """Should hide docs and the schema in production."""
        settings = test_settings.model_copy(update={"APP_ENV": "production"})

        app = create_app(settings)

        assert app.docs_url is None
        assert app.openapi_url is None

    def test_middleware_stack(self, test_settings) -> None:
        """Should install the request id and security headers middleware."""
        app = create_app(test_settings)

        classes = [m.cls for m in app.user_middleware]
        assert RequestIDMiddleware in classes
        assert SecurityHeadersMiddleware in classes
        assert CORSMiddleware not in classes

    def test_cors_with_origins(self, test_settings) -> None:
        """Should allow credentialed CORS for configured origins."""
        settings = test_settings.model_copy(
            update={
                "api": test_settings.api.model_copy(
                    update={"cors_origins": ["http://localhost:3000"]}
                )
            }
        )

        app = create_app(settings)

        [cors] = [m for m in app.user_middleware if m.cls is CORSMiddleware]
        assert cors.kwargs["allow_credentials"] is True
        assert cors.kwargs["allow_origins"] == ["http://localhost:3000"]
