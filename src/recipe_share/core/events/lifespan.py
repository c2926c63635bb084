"""Application lifespan event handlers.

Startup opens the database pool and wires repositories into services on
``app.state``; shutdown closes the pool and flushes pending spans.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_share.auth.tokens import TokenService
from recipe_share.core.config import get_settings
from recipe_share.database import close_database_pool, init_database_pool
from recipe_share.database.repositories import (
    BookmarkRepository,
    CommentRepository,
    RatingRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_share.observability.logging import get_logger, setup_logging
from recipe_share.observability.tracing import shutdown_tracing
from recipe_share.services.auth import AuthService
from recipe_share.services.bookmarks import BookmarkService
from recipe_share.services.comments import CommentService
from recipe_share.services.ratings import RatingService
from recipe_share.services.recipes import RecipeService
from recipe_share.services.users import UserService
from recipe_share.storage import S3ImageStorage


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from asyncpg import Pool
    from fastapi import FastAPI

    from recipe_share.core.config import Settings

logger = get_logger(__name__)


def build_services(app: FastAPI, settings: Settings, pool: Pool | None = None) -> None:
    """Construct repositories and services and attach them to ``app.state``.

    The token service is required; a misconfigured secret aborts startup.
    Recipe publishing needs object storage, so without a bucket the recipe
    service is left unset and its endpoints answer 503.
    """
    tokens = TokenService.from_settings(settings)

    users = UserRepository(pool)
    recipes = RecipeRepository(pool)
    comments = CommentRepository(pool)
    ratings = RatingRepository(pool)
    bookmarks = BookmarkRepository(pool)

    app.state.token_service = tokens
    app.state.auth_service = AuthService(
        users=users,
        tokens=tokens,
        bcrypt_rounds=settings.auth.bcrypt_rounds,
    )
    app.state.comment_service = CommentService(
        comments=comments,
        recipes=recipes,
        max_length=settings.comments.max_length,
        default_page_size=settings.comments.default_page_size,
        max_page_size=settings.comments.max_page_size,
    )
    app.state.rating_service = RatingService(
        ratings=ratings,
        recipes=recipes,
        min_value=settings.ratings.min_value,
        max_value=settings.ratings.max_value,
        top_default_limit=settings.ratings.top_default_limit,
        top_max_limit=settings.ratings.top_max_limit,
    )
    app.state.bookmark_service = BookmarkService(bookmarks=bookmarks, recipes=recipes)
    app.state.user_service = UserService(users=users)

    if settings.storage.bucket:
        app.state.recipe_service = RecipeService(
            recipes=recipes,
            storage=S3ImageStorage(settings.storage),
            max_image_bytes=settings.storage.max_image_bytes,
        )
    else:
        logger.warning("storage.bucket not configured - recipe endpoints unavailable")
        app.state.recipe_service = None

    logger.info("Services initialized", image_storage=bool(settings.storage.bucket))


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Database is critical - don't continue without it
    pool = await init_database_pool(settings)
    build_services(app, settings, pool)

    logger.info("Application startup complete")


async def _shutdown() -> None:
    logger.info("Shutting down application")
    shutdown_tracing()
    await close_database_pool()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Uses the settings the app was created with, falling back to
    ``get_settings()``.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown()
