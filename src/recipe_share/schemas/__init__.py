"""API request and response schemas."""

from recipe_share.schemas.base import (
    APIRequest,
    APIResponse,
    MessageResponse,
    StrictAPIRequest,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "MessageResponse",
    "StrictAPIRequest",
]
