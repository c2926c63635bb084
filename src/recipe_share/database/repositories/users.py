"""User credential store.

Holds user identity, the bcrypt password hash, the role, and the refresh
token of the user's single active session. Session writes are single
statements so concurrent logins and logouts never interleave.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from recipe_share.database.repositories.base import BaseRepository


if TYPE_CHECKING:
    from asyncpg import Record

_USER_COLUMNS = "id, name, email, password_hash, role, refresh_token"


class UserRecord(BaseModel):
    """Data transfer object for a stored user."""

    id: int
    name: str
    email: str
    password_hash: str
    role: str
    refresh_token: str | None = None


def _to_user(row: Record | None) -> UserRecord | None:
    return UserRecord(**dict(row)) if row is not None else None


class UserRepository(BaseRepository):
    """Repository for the ``users`` table."""

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str = "user",
    ) -> UserRecord | None:
        """Insert a user.

        Returns:
            The new user, or None when the email is already registered.
        """
        query = f"""
            INSERT INTO users (name, email, password_hash, role)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, name, email, password_hash, role)
        return _to_user(row)

    async def get_by_id(self, user_id: int) -> UserRecord | None:
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE id = $1"
        async with self.connection() as conn:
            row = await conn.fetchrow(query, user_id)
        return _to_user(row)

    async def get_by_email(self, email: str) -> UserRecord | None:
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE email = $1"
        async with self.connection() as conn:
            row = await conn.fetchrow(query, email)
        return _to_user(row)

    async def get_by_refresh_token(self, token: str) -> UserRecord | None:
        """Find the user whose active session is ``token``."""
        query = f"SELECT {_USER_COLUMNS} FROM users WHERE refresh_token = $1"
        async with self.connection() as conn:
            row = await conn.fetchrow(query, token)
        return _to_user(row)

    async def set_refresh_token(self, user_id: int, token: str) -> UserRecord | None:
        """Replace the user's session token, invalidating any previous one."""
        query = f"""
            UPDATE users
            SET refresh_token = $2, updated_at = now()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, user_id, token)
        return _to_user(row)

    async def clear_refresh_token(self, token: str) -> int | None:
        """End the session identified by ``token``.

        Returns:
            Id of the user that held the token, or None if nobody did.
        """
        query = """
            UPDATE users
            SET refresh_token = NULL, updated_at = now()
            WHERE refresh_token = $1
            RETURNING id
        """
        async with self.connection() as conn:
            return await conn.fetchval(query, token)

    async def update_name(self, user_id: int, name: str) -> UserRecord | None:
        query = f"""
            UPDATE users
            SET name = $2, updated_at = now()
            WHERE id = $1
            RETURNING {_USER_COLUMNS}
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(query, user_id, name)
        return _to_user(row)
