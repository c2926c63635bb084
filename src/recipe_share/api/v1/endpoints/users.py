"""User profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_share.api.dependencies import get_user_service
from recipe_share.auth.dependencies import CurrentUserDep
from recipe_share.schemas.user import (
    EditProfileRequest,
    EditProfileResponse,
    ProfileResponse,
)
from recipe_share.services.users import UserService  # noqa: TC001


router = APIRouter(prefix="/users", tags=["Users"])


@router.patch(
    "/profile",
    response_model=EditProfileResponse,
    summary="Edit your profile",
    responses={
        400: {"description": "Blank name"},
        403: {"description": "Only accounts with the user role may edit"},
    },
)
async def edit_profile(
    body: EditProfileRequest,
    user: CurrentUserDep,
    users: Annotated[UserService, Depends(get_user_service)],
) -> EditProfileResponse:
    updated = await users.edit_profile(user, body.name)
    return EditProfileResponse(
        message="Profile updated successfully",
        user=ProfileResponse(
            id=updated.id,
            name=updated.name,
            email=updated.email,
            role=updated.role,
        ),
    )
