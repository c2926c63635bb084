"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- Optional schema bootstrap from ``schema.sql``
- A readiness probe used by the ``/ready`` endpoint
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import asyncpg

from recipe_share.core.config import get_settings
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from recipe_share.core.config import Settings

logger = get_logger(__name__)

SCHEMA_FILE = Path(__file__).with_name("schema.sql")

# Global connection pool
_pool: Pool | None = None


async def init_database_pool(settings: Settings | None = None) -> Pool:
    """Create the global connection pool and verify connectivity.

    Should be called during application startup (lifespan).
    """
    global _pool  # noqa: PLW0603

    if settings is None:
        settings = get_settings()
    db = settings.database

    logger.info(
        "Initializing database connection pool",
        host=db.host,
        port=db.port,
        database=db.name,
        schema=db.db_schema,
    )

    _pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=db.ssl if db.ssl else None,
        server_settings={"search_path": db.db_schema},
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.exception("Failed to connect to database")
        raise

    logger.info("Database connection established successfully")

    if db.apply_schema:
        await apply_schema(_pool)

    return _pool


async def apply_schema(pool: Pool) -> None:
    """Execute ``schema.sql``; every statement in it is idempotent."""
    ddl = SCHEMA_FILE.read_text(encoding="utf-8")
    async with pool.acquire() as conn:
        await conn.execute(ddl)
    logger.info("Database schema applied", schema_file=SCHEMA_FILE.name)


async def close_database_pool() -> None:
    """Close the global connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool  # noqa: PLW0603

    if _pool:
        logger.info("Closing database connection pool")
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the global connection pool.

    Raises:
        RuntimeError: If the pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Report ``healthy``, ``unhealthy`` or ``not_initialized``."""
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.warning("Database health check failed")
        return {"database": "unhealthy"}
    return {"database": "healthy"}
