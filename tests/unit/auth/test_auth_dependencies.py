"""Unit tests for authentication dependencies.

Tests cover:
- Resolving the caller from a bearer access token
- Rejection of missing, expired and wrong-kind tokens
- Token service lookup on app state
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from recipe_share.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_token_service,
)
from recipe_share.auth.permissions import Role
from recipe_share.core.exceptions import ServiceUnavailableError, UnauthorizedError


pytestmark = pytest.mark.unit


@pytest.fixture
def cook() -> SimpleNamespace:
    return SimpleNamespace(id=3, email="cook@example.com", role="user")


class TestGetCurrentUser:
    """Tests for get_current_user."""

    @pytest.mark.asyncio
    async def test_resolves_user_from_access_token(self, token_service, cook) -> None:
        """Should build CurrentUser from the token claims."""
        token = token_service.issue_access_token(cook)

        user = await get_current_user(token, token_service)

        assert user == CurrentUser(id=3, email="cook@example.com", role="user")

    @pytest.mark.asyncio
    async def test_missing_token(self, token_service) -> None:
        """Should require a token."""
        with pytest.raises(UnauthorizedError, match="required"):
            await get_current_user(None, token_service)

    @pytest.mark.asyncio
    async def test_expired_token(self, token_service, cook) -> None:
        """Should report expiry distinctly."""
        with freeze_time(datetime.now(UTC) - timedelta(minutes=11)):
            token = token_service.issue_access_token(cook)

        with pytest.raises(UnauthorizedError, match="expired"):
            await get_current_user(token, token_service)

    @pytest.mark.asyncio
    async def test_refresh_token_is_rejected(self, token_service, cook) -> None:
        """Should not accept a refresh token as bearer credentials."""
        token = token_service.issue_refresh_token(cook)

        with pytest.raises(UnauthorizedError, match="Invalid access token"):
            await get_current_user(token, token_service)


class TestGetTokenService:
    """Tests for get_token_service."""

    def test_returns_service_from_state(self, token_service) -> None:
        """Should return the service stored at startup."""
        request = MagicMock()
        request.app.state.token_service = token_service

        assert get_token_service(request) is token_service

    def test_raises_when_not_initialized(self) -> None:
        """Should report 503 when startup did not complete."""
        request = MagicMock()
        request.app.state = SimpleNamespace()

        with pytest.raises(ServiceUnavailableError):
            get_token_service(request)


class TestCurrentUser:
    """Tests for CurrentUser."""

    @pytest.mark.parametrize(
        ("role", "expected"),
        [(Role.ADMIN.value, True), (Role.USER.value, False)],
    )
    def test_is_admin(self, role: str, expected: bool) -> None:
        """Should recognise the admin role only."""
        user = CurrentUser(id=1, email="a@b.co", role=role)

        assert user.is_admin() is expected
