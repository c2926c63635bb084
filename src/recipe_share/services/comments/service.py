"""Comment tree service.

Comments nest one level deep: a reply must point at a top-level comment of
the same recipe. Listings page over top-level comments only and attach each
page's replies with one extra query.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from recipe_share.core.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from recipe_share.database.repositories.base import MAX_ROW_ID
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_share.auth.dependencies import CurrentUser
    from recipe_share.database.repositories.comments import (
        CommentRecord,
        CommentRepository,
        CommentWithAuthor,
    )
    from recipe_share.database.repositories.recipes import RecipeRepository

logger = get_logger(__name__)

# Clients send these when a form's parent field is left empty
_NO_PARENT_SENTINELS = frozenset({"", "null"})


@dataclass(frozen=True)
class CommentThread:
    comment: CommentWithAuthor
    replies: list[CommentWithAuthor] = field(default_factory=list)


@dataclass(frozen=True)
class CommentPage:
    threads: list[CommentThread]
    total_pages: int
    current_page: int


def normalize_parent_id(value: int | str | None) -> int | None:
    """Interpret a submitted ``parentId``.

    Integers pass through; strings are trimmed, ``""`` and ``"null"`` mean no
    parent, and ASCII digit strings are converted. Ids outside the INTEGER
    column range cannot name a comment and are rejected.

    Raises:
        InvalidInputError: For any other value.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        msg = "parentId must be an integer"
        raise InvalidInputError(msg)
    if isinstance(value, int):
        parent_id = value
    else:
        text = value.strip()
        if text.lower() in _NO_PARENT_SENTINELS:
            return None
        if not (text.isascii() and text.isdecimal()):
            msg = "parentId must be an integer"
            raise InvalidInputError(msg)
        parent_id = int(text)
    if not 1 <= parent_id <= MAX_ROW_ID:
        msg = "Parent comment not found"
        raise InvalidInputError(msg)
    return parent_id


class CommentService:
    """Create, list and delete recipe comments."""

    def __init__(
        self,
        *,
        comments: CommentRepository,
        recipes: RecipeRepository,
        max_length: int = 300,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self._comments = comments
        self._recipes = recipes
        self.max_length = max_length
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def list_for_recipe(
        self,
        recipe_id: int,
        page: int = 1,
        page_size: int | None = None,
    ) -> CommentPage:
        """Page through a recipe's top-level comments, newest first.

        ``total_pages`` counts top-level comments only; replies ride along
        with their parent, oldest first.
        """
        page_size = page_size or self.default_page_size
        if page < 1 or not 1 <= page_size <= self.max_page_size:
            msg = f"page must be >= 1 and limit between 1 and {self.max_page_size}"
            raise InvalidInputError(msg)

        total = await self._comments.count_top_level(recipe_id)
        top_level = await self._comments.list_top_level(
            recipe_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        replies = await self._comments.list_replies([c.id for c in top_level])

        by_parent: dict[int, list[CommentWithAuthor]] = {}
        for reply in replies:
            by_parent.setdefault(reply.parent_id, []).append(reply)

        return CommentPage(
            threads=[
                CommentThread(comment=c, replies=by_parent.get(c.id, []))
                for c in top_level
            ],
            total_pages=math.ceil(total / page_size),
            current_page=page,
        )

    async def create(
        self,
        recipe_id: int,
        author_id: int,
        content: str,
        parent_id: int | str | None = None,
    ) -> CommentRecord:
        """Add a comment or a reply to a top-level comment.

        Raises:
            InvalidInputError: Blank or over-long content, unknown parent, or a
                parent that is itself a reply.
            NotFoundError: The recipe does not exist.
        """
        content = content or ""
        if not content.strip():
            msg = "Comment content must not be empty"
            raise InvalidInputError(msg)
        if len(content) > self.max_length:
            msg = f"Comment must be at most {self.max_length} characters"
            raise InvalidInputError(msg)
        parent = normalize_parent_id(parent_id)

        if not await self._recipes.exists(recipe_id):
            msg = "Recipe not found"
            raise NotFoundError(msg)

        if parent is not None:
            parent_comment = await self._comments.get(parent)
            if parent_comment is None or parent_comment.recipe_id != recipe_id:
                msg = "Parent comment not found"
                raise InvalidInputError(msg)
            if parent_comment.parent_id is not None:
                msg = "Replies can only be made to top-level comments"
                raise InvalidInputError(msg)

        comment = await self._comments.create(
            recipe_id=recipe_id,
            user_id=author_id,
            content=content.strip(),
            parent_id=parent,
        )
        logger.info(
            "Comment created",
            comment_id=comment.id,
            recipe_id=recipe_id,
            is_reply=parent is not None,
        )
        return comment

    async def delete(self, comment_id: int, actor: CurrentUser) -> None:
        """Delete a comment (and its replies) as its author or an admin.

        Raises:
            NotFoundError: The comment does not exist.
            ForbiddenError: ``actor`` is neither the author nor an admin.
        """
        comment = await self._comments.get(comment_id)
        if comment is None:
            msg = "Comment not found"
            raise NotFoundError(msg)
        if comment.user_id != actor.id and not actor.is_admin():
            msg = "You can only delete your own comments"
            raise ForbiddenError(msg)

        if not await self._comments.delete(comment_id):
            msg = "Comment not found"
            raise NotFoundError(msg)
        logger.info("Comment deleted", comment_id=comment_id, actor_id=actor.id)
