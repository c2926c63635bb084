"""Shared test fixtures and configuration for the Recipe Share API tests.

Provides test settings, a token service, and in-memory repositories wired
into real service objects.
"""

from __future__ import annotations

import os


# Must be set before Settings reads the YAML overlays
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

from recipe_share.auth.tokens import TokenService  # noqa: E402
from recipe_share.core.config import Settings, get_settings  # noqa: E402
from recipe_share.services.auth import AuthService  # noqa: E402
from recipe_share.services.bookmarks import BookmarkService  # noqa: E402
from recipe_share.services.comments import CommentService  # noqa: E402
from recipe_share.services.ratings import RatingService  # noqa: E402
from recipe_share.services.recipes import RecipeService  # noqa: E402
from recipe_share.services.users import UserService  # noqa: E402
from tests.fixtures.memory_store import (  # noqa: E402
    MemoryBookmarkRepository,
    MemoryCommentRepository,
    MemoryImageStorage,
    MemoryRatingRepository,
    MemoryRecipeRepository,
    MemoryStore,
    MemoryUserRepository,
)


ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with test secrets and observability switched off."""
    return Settings(
        APP_ENV="test",
        ACCESS_TOKEN_SECRET=ACCESS_SECRET,
        REFRESH_TOKEN_SECRET=REFRESH_SECRET,
        auth={
            "bcrypt_rounds": 4,
            "cookie": {"secure": False, "samesite": "lax"},
        },
        storage={"bucket": "test-bucket", "max_image_bytes": 1024},
        observability={
            "tracing": {"enabled": False},
            "metrics": {"enabled": False},
        },
    )


@pytest.fixture
def token_service(test_settings: Settings) -> TokenService:
    return TokenService.from_settings(test_settings)


# =============================================================================
# In-memory persistence
# =============================================================================


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def user_repo(store: MemoryStore) -> MemoryUserRepository:
    return MemoryUserRepository(store)


@pytest.fixture
def recipe_repo(store: MemoryStore) -> MemoryRecipeRepository:
    return MemoryRecipeRepository(store)


@pytest.fixture
def comment_repo(store: MemoryStore) -> MemoryCommentRepository:
    return MemoryCommentRepository(store)


@pytest.fixture
def rating_repo(store: MemoryStore) -> MemoryRatingRepository:
    return MemoryRatingRepository(store)


@pytest.fixture
def bookmark_repo(store: MemoryStore) -> MemoryBookmarkRepository:
    return MemoryBookmarkRepository(store)


@pytest.fixture
def image_storage() -> MemoryImageStorage:
    return MemoryImageStorage()


# =============================================================================
# Services over in-memory repositories
# =============================================================================


@pytest.fixture
def auth_service(
    user_repo: MemoryUserRepository,
    token_service: TokenService,
) -> AuthService:
    return AuthService(users=user_repo, tokens=token_service, bcrypt_rounds=4)


@pytest.fixture
def recipe_service(
    recipe_repo: MemoryRecipeRepository,
    image_storage: MemoryImageStorage,
    test_settings: Settings,
) -> RecipeService:
    return RecipeService(
        recipes=recipe_repo,
        storage=image_storage,
        max_image_bytes=test_settings.storage.max_image_bytes,
    )


@pytest.fixture
def comment_service(
    comment_repo: MemoryCommentRepository,
    recipe_repo: MemoryRecipeRepository,
) -> CommentService:
    return CommentService(comments=comment_repo, recipes=recipe_repo)


@pytest.fixture
def rating_service(
    rating_repo: MemoryRatingRepository,
    recipe_repo: MemoryRecipeRepository,
) -> RatingService:
    return RatingService(ratings=rating_repo, recipes=recipe_repo)


@pytest.fixture
def bookmark_service(
    bookmark_repo: MemoryBookmarkRepository,
    recipe_repo: MemoryRecipeRepository,
) -> BookmarkService:
    return BookmarkService(bookmarks=bookmark_repo, recipes=recipe_repo)


@pytest.fixture
def user_service(user_repo: MemoryUserRepository) -> UserService:
    return UserService(users=user_repo)
