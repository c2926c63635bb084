"""Authentication endpoints.

The refresh token travels in an HTTP-only cookie. Login sets it (and also
echoes it in the body); logout and access-token refresh read it from the
cookie only. Access tokens are returned in the body and presented by
clients as ``Authorization: Bearer``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from recipe_share.api.dependencies import get_app_settings, get_auth_service
from recipe_share.core.config import Settings  # noqa: TC001
from recipe_share.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    SessionUser,
)
from recipe_share.schemas.base import MessageResponse
from recipe_share.services.auth import AuthService  # noqa: TC001


router = APIRouter(prefix="/auth", tags=["Auth"])


def _refresh_cookie(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.auth.cookie.name)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={400: {"description": "Invalid input or email already registered"}},
)
async def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    user = await auth.register(body.name, body.email, body.password)
    return RegisterResponse(
        message="User registered successfully",
        user=PublicUser(id=user.id, name=user.name, email=user.email),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in and start a session",
    responses={
        400: {"description": "Invalid input"},
        401: {"description": "Wrong password"},
        404: {"description": "Unknown email"},
    },
)
async def login(
    body: LoginRequest,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """Issue access and refresh tokens.

    Any refresh token from a previous login stops working.
    """
    result = await auth.login(body.email, body.password)

    cookie = settings.auth.cookie
    response.set_cookie(
        key=cookie.name,
        value=result.refresh_token,
        max_age=settings.auth.jwt.refresh_token_expire_days * 24 * 60 * 60,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )

    user = result.user
    return LoginResponse(
        message="Login successful",
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        user=SessionUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            refresh_token=result.refresh_token,
        ),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="End the current session",
    responses={401: {"description": "No active session for the cookie"}},
)
async def logout(
    request: Request,
    response: Response,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    await auth.logout(_refresh_cookie(request, settings))

    cookie = settings.auth.cookie
    response.delete_cookie(
        key=cookie.name,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )
    return MessageResponse(message="Logout successful")


@router.get(
    "/token",
    response_model=AccessTokenResponse,
    summary="Get a new access token",
    responses={
        401: {"description": "Missing or unrecognized refresh token"},
        403: {"description": "Refresh token failed verification"},
    },
)
async def refresh_access_token(
    request: Request,
    auth: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AccessTokenResponse:
    access_token = await auth.refresh(_refresh_cookie(request, settings))
    return AccessTokenResponse(access_token=access_token)
