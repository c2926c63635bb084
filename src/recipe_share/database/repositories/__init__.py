"""Repository classes for data access."""

from recipe_share.database.repositories.bookmarks import (
    BookmarkRecord,
    BookmarkRepository,
)
from recipe_share.database.repositories.comments import (
    CommentRecord,
    CommentRepository,
    CommentWithAuthor,
)
from recipe_share.database.repositories.ratings import (
    RatingAggregate,
    RatingRecord,
    RatingRepository,
    TopRatedRow,
    UserRating,
)
from recipe_share.database.repositories.recipes import (
    IngredientDraft,
    IngredientRecord,
    InstructionDraft,
    InstructionRecord,
    RecipeDetail,
    RecipeRecord,
    RecipeRepository,
)
from recipe_share.database.repositories.users import UserRecord, UserRepository


__all__ = [
    "BookmarkRecord",
    "BookmarkRepository",
    "CommentRecord",
    "CommentRepository",
    "CommentWithAuthor",
    "IngredientDraft",
    "IngredientRecord",
    "InstructionDraft",
    "InstructionRecord",
    "RatingAggregate",
    "RatingRecord",
    "RatingRepository",
    "RecipeDetail",
    "RecipeRecord",
    "RecipeRepository",
    "TopRatedRow",
    "UserRating",
    "UserRecord",
    "UserRepository",
]
