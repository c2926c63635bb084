"""Comment endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from recipe_share.api.dependencies import PathId, get_comment_service
from recipe_share.auth.dependencies import CurrentUserDep
from recipe_share.schemas.base import MessageResponse
from recipe_share.schemas.comment import (
    CommentCreatedResponse,
    CommentPageResponse,
    CommentResponse,
    CreateCommentRequest,
)
from recipe_share.services.comments import CommentService  # noqa: TC001


router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get(
    "/recipe/{recipe_id}",
    response_model=CommentPageResponse,
    summary="List a recipe's comments with replies",
)
async def list_comments(
    recipe_id: PathId,
    comments: Annotated[CommentService, Depends(get_comment_service)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> CommentPageResponse:
    """Top-level comments newest first, each with its replies oldest first."""
    result = await comments.list_for_recipe(recipe_id, page=page, page_size=limit)
    return CommentPageResponse.from_page(result)


@router.post(
    "/recipe/{recipe_id}",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a recipe or reply to a comment",
    responses={
        400: {"description": "Invalid content or parent"},
        401: {"description": "Authentication required"},
        404: {"description": "Recipe not found"},
    },
)
async def create_comment(
    recipe_id: PathId,
    body: CreateCommentRequest,
    user: CurrentUserDep,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> CommentCreatedResponse:
    comment = await comments.create(
        recipe_id,
        user.id,
        body.content,
        body.parent_id,
    )
    return CommentCreatedResponse(
        message="Comment added successfully",
        comment=CommentResponse.from_record(comment),
    )


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment and its replies",
    responses={
        403: {"description": "Not the author and not an admin"},
        404: {"description": "Comment not found"},
    },
)
async def delete_comment(
    comment_id: PathId,
    user: CurrentUserDep,
    comments: Annotated[CommentService, Depends(get_comment_service)],
) -> MessageResponse:
    await comments.delete(comment_id, user)
    return MessageResponse(message="Comment deleted successfully")
