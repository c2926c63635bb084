"""Comment request and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field, StrictInt, StrictStr

from recipe_share.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from recipe_share.database.repositories.comments import (
        CommentRecord,
        CommentWithAuthor,
    )
    from recipe_share.services.comments import CommentPage


class CreateCommentRequest(APIRequest):
    """Body of ``POST /comments/recipe/{recipeId}``.

    ``parentId`` may be an integer, a numeric string, or ``""``/``"null"``
    for a top-level comment.
    """

    content: StrictStr
    parent_id: StrictInt | StrictStr | None = Field(default=None)


class CommentAuthor(APIResponse):
    id: int
    name: str


class CommentResponse(APIResponse):
    id: int
    recipe_id: int
    user_id: int
    parent_id: int | None
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, comment: CommentRecord) -> CommentResponse:
        return cls(
            id=comment.id,
            recipe_id=comment.recipe_id,
            user_id=comment.user_id,
            parent_id=comment.parent_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class AuthoredCommentResponse(CommentResponse):
    user: CommentAuthor

    @classmethod
    def from_authored(cls, comment: CommentWithAuthor) -> AuthoredCommentResponse:
        return cls(
            **CommentResponse.from_record(comment).model_dump(by_alias=False),
            user=CommentAuthor(id=comment.user_id, name=comment.user_name),
        )


class CommentThreadResponse(AuthoredCommentResponse):
    replies: list[AuthoredCommentResponse]


class CommentPageResponse(APIResponse):
    comments: list[CommentThreadResponse]
    total_pages: int
    current_page: int

    @classmethod
    def from_page(cls, page: CommentPage) -> CommentPageResponse:
        return cls(
            comments=[
                CommentThreadResponse(
                    **AuthoredCommentResponse.from_authored(thread.comment).model_dump(
                        by_alias=False
                    ),
                    replies=[
                        AuthoredCommentResponse.from_authored(r) for r in thread.replies
                    ],
                )
                for thread in page.threads
            ],
            total_pages=page.total_pages,
            current_page=page.current_page,
        )


class CommentCreatedResponse(APIResponse):
    message: str
    comment: CommentResponse
