"""Fixtures for HTTP-level tests of the v1 API.

The app is built with ``create_app`` and its services are swapped for ones
backed by the in-memory repositories. ``ASGITransport`` does not run the
lifespan, so nothing here touches PostgreSQL or S3.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_share.factory import create_app


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import FastAPI

    from recipe_share.database.repositories import UserRecord


@pytest.fixture
def app(
    test_settings,
    token_service,
    auth_service,
    recipe_service,
    comment_service,
    rating_service,
    bookmark_service,
    user_service,
) -> FastAPI:
    app = create_app(test_settings)
    app.state.token_service = token_service
    app.state.auth_service = auth_service
    app.state.recipe_service = recipe_service
    app.state.comment_service = comment_service
    app.state.rating_service = rating_service
    app.state.bookmark_service = bookmark_service
    app.state.user_service = user_service
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def signed_in(
    user_repo, token_service
) -> Callable[..., Awaitable[tuple[UserRecord, dict[str, str]]]]:
    """Create a user directly in the store and return bearer headers for it."""

    async def _signed_in(
        name: str = "Ada",
        email: str = "ada@example.com",
        role: str = "user",
    ) -> tuple[UserRecord, dict[str, str]]:
        user = await user_repo.create(name, email, "not-a-real-hash", role)
        token = token_service.issue_access_token(user)
        return user, {"Authorization": f"Bearer {token}"}

    return _signed_in


@pytest.fixture
def seed_recipe(recipe_repo) -> Callable[..., Awaitable[int]]:
    """Insert a recipe owned by ``owner_id`` and return its id."""

    async def _seed(owner_id: int, title: str = "Bread") -> int:
        recipe = await recipe_repo.create(
            owner_id=owner_id,
            title=title,
            description="Crusty loaf",
            time="3 h",
            image_url=f"https://images.test/{title.lower()}.png",
            ingredients=[],
            instructions=[],
        )
        return recipe.id

    return _seed
