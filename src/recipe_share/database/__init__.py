"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Health check utilities
"""

from recipe_share.database.connection import (
    apply_schema,
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


__all__ = [
    "apply_schema",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
