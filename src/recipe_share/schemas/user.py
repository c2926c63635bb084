"""User profile schemas."""

from __future__ import annotations

from pydantic import StrictStr

from recipe_share.schemas.base import APIRequest, APIResponse


class EditProfileRequest(APIRequest):
    name: StrictStr


class ProfileResponse(APIResponse):
    id: int
    name: str
    email: str
    role: str


class EditProfileResponse(APIResponse):
    message: str
    user: ProfileResponse
