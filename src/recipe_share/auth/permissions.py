"""User roles."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Roles a user can hold.

    Admins may delete any comment. Only plain users may edit their profile.
    """

    USER = "user"
    ADMIN = "admin"
