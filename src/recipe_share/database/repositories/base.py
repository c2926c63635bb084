"""Shared plumbing for asyncpg repositories."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import asyncpg

from recipe_share.core.exceptions import StoreError
from recipe_share.database.connection import get_database_pool
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from asyncpg import Connection, Pool

logger = get_logger(__name__)

# Upper bound of the SERIAL id columns
MAX_ROW_ID = 2**31 - 1


class BaseRepository:
    """Base for repositories using raw asyncpg queries.

    Driver and network failures surface as ``StoreError`` so services and
    handlers never see asyncpg exception types.
    """

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Connection]:
        """Acquire a pooled connection, translating driver errors."""
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(
                "Database operation failed",
                repository=type(self).__name__,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StoreError from e
