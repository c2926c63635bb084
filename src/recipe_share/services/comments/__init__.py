"""Comment tree service."""

from recipe_share.services.comments.service import (
    CommentPage,
    CommentService,
    CommentThread,
    normalize_parent_id,
)


__all__ = ["CommentPage", "CommentService", "CommentThread", "normalize_parent_id"]
