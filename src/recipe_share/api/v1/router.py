"""API v1 router aggregating all endpoint routers.

Mounted under ``settings.api.v1_prefix`` (``/api/v1`` by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_share.api.v1.endpoints import (
    auth,
    bookmarks,
    comments,
    health,
    ratings,
    recipes,
    users,
)


router = APIRouter()

router.include_router(health.router)
router.include_router(auth.router)
router.include_router(recipes.router)
router.include_router(comments.router)
router.include_router(ratings.router)
router.include_router(bookmarks.router)
router.include_router(users.router)
