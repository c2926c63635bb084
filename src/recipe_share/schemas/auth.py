"""Authentication request and response schemas."""

from __future__ import annotations

from pydantic import Field, StrictStr

from recipe_share.schemas.base import APIResponse, StrictAPIRequest


class RegisterRequest(StrictAPIRequest):
    """Body of ``POST /auth/register``.

    Only presence and type are checked here; email format and password
    length are enforced by the auth service.
    """

    name: StrictStr = Field(..., description="Display name")
    email: StrictStr = Field(..., description="Unique email address")
    password: StrictStr = Field(..., description="Password (min 6 characters)")


class LoginRequest(StrictAPIRequest):
    """Body of ``POST /auth/login``."""

    email: StrictStr
    password: StrictStr


class PublicUser(APIResponse):
    id: int
    name: str
    email: str


class SessionUser(PublicUser):
    role: str
    refresh_token: str


class RegisterResponse(APIResponse):
    message: str
    user: PublicUser


class LoginResponse(APIResponse):
    success: bool = True
    message: str
    access_token: str
    refresh_token: str
    user: SessionUser


class AccessTokenResponse(APIResponse):
    access_token: str
