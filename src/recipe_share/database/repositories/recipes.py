"""Recipe repository.

Recipes are stored with their ingredients and instructions in child tables.
Detail reads load the children for a batch of recipes with one query per
child table rather than one per recipe.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_share.database.repositories.base import BaseRepository
from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Sequence

    from asyncpg import Connection, Record

logger = get_logger(__name__)

_RECIPE_COLUMNS = (
    "id, title, description, image_url, time, owner_id, created_at, updated_at"
)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class IngredientDraft(BaseModel):
    """Ingredient as submitted when creating a recipe."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1)
    quantity: str = Field(min_length=1)
    unit: str = ""

    @field_validator("quantity", "unit", mode="before")
    @classmethod
    def _stringify_numbers(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class InstructionDraft(BaseModel):
    """Instruction step as submitted when creating a recipe."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    order: int = Field(ge=1)
    description: str = Field(min_length=1)


class IngredientRecord(BaseModel):
    id: int
    name: str
    quantity: str
    unit: str


class InstructionRecord(BaseModel):
    id: int
    order: int
    description: str


class RecipeRecord(BaseModel):
    """Data transfer object for a stored recipe row."""

    id: int
    title: str
    description: str
    image_url: str
    time: str
    owner_id: int
    created_at: datetime
    updated_at: datetime


class RecipeDetail(RecipeRecord):
    """Recipe with its ingredients (insertion order) and steps (step order)."""

    ingredients: list[IngredientRecord] = []
    instructions: list[InstructionRecord] = []


def _to_recipe(row: Record | None) -> RecipeRecord | None:
    return RecipeRecord(**dict(row)) if row is not None else None


def _to_ingredient(row: Record) -> IngredientRecord:
    return IngredientRecord(
        id=row["id"],
        name=row["name"],
        quantity=row["quantity"],
        unit=row["unit"],
    )


def _to_instruction(row: Record) -> InstructionRecord:
    return InstructionRecord(
        id=row["id"],
        order=row["step_order"],
        description=row["description"],
    )


# =============================================================================
# Repository
# =============================================================================


class RecipeRepository(BaseRepository):
    """Repository for ``recipes`` and its child tables."""

    async def exists(self, recipe_id: int) -> bool:
        query = "SELECT EXISTS (SELECT 1 FROM recipes WHERE id = $1)"
        async with self.connection() as conn:
            return bool(await conn.fetchval(query, recipe_id))

    async def get(self, recipe_id: int) -> RecipeRecord | None:
        query = f"SELECT {_RECIPE_COLUMNS} FROM recipes WHERE id = $1"
        async with self.connection() as conn:
            row = await conn.fetchrow(query, recipe_id)
        return _to_recipe(row)

    async def get_detail(self, recipe_id: int) -> RecipeDetail | None:
        details = await self.list_details([recipe_id])
        return details[0] if details else None

    async def list_details(self, ids: Sequence[int] | None = None) -> list[RecipeDetail]:
        """Load recipes with children, newest first.

        Args:
            ids: Restrict to these recipe ids. None loads every recipe.
        """
        async with self.connection() as conn:
            if ids is None:
                rows = await conn.fetch(
                    f"""
                    SELECT {_RECIPE_COLUMNS} FROM recipes
                    ORDER BY created_at DESC, id DESC
                    """
                )
            else:
                rows = await conn.fetch(
                    f"""
                    SELECT {_RECIPE_COLUMNS} FROM recipes
                    WHERE id = ANY($1::int[])
                    ORDER BY created_at DESC, id DESC
                    """,
                    list(ids),
                )
            if not rows:
                return []
            return await self._attach_children(conn, rows)

    async def _attach_children(
        self,
        conn: Connection,
        rows: Sequence[Record],
    ) -> list[RecipeDetail]:
        recipe_ids = [row["id"] for row in rows]
        ingredient_rows = await conn.fetch(
            """
            SELECT id, recipe_id, name, quantity, unit FROM ingredients
            WHERE recipe_id = ANY($1::int[])
            ORDER BY id
            """,
            recipe_ids,
        )
        instruction_rows = await conn.fetch(
            """
            SELECT id, recipe_id, step_order, description FROM instructions
            WHERE recipe_id = ANY($1::int[])
            ORDER BY step_order, id
            """,
            recipe_ids,
        )

        ingredients: dict[int, list[IngredientRecord]] = {}
        for row in ingredient_rows:
            ingredients.setdefault(row["recipe_id"], []).append(_to_ingredient(row))
        instructions: dict[int, list[InstructionRecord]] = {}
        for row in instruction_rows:
            instructions.setdefault(row["recipe_id"], []).append(_to_instruction(row))

        return [
            RecipeDetail(
                **dict(row),
                ingredients=ingredients.get(row["id"], []),
                instructions=instructions.get(row["id"], []),
            )
            for row in rows
        ]

    async def create(
        self,
        *,
        owner_id: int,
        title: str,
        description: str,
        time: str,
        image_url: str,
        ingredients: Sequence[IngredientDraft],
        instructions: Sequence[InstructionDraft],
    ) -> RecipeDetail:
        """Insert a recipe and its children in one transaction."""
        async with self.connection() as conn, conn.transaction():
            row = await conn.fetchrow(
                f"""
                INSERT INTO recipes (title, description, image_url, time, owner_id)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_RECIPE_COLUMNS}
                """,
                title,
                description,
                image_url,
                time,
                owner_id,
            )
            recipe_id = row["id"]

            ingredient_rows = []
            if ingredients:
                ingredient_rows = await conn.fetch(
                    """
                    INSERT INTO ingredients (recipe_id, name, quantity, unit)
                    SELECT $1, i.name, i.quantity, i.unit
                    FROM unnest($2::text[], $3::text[], $4::text[])
                        WITH ORDINALITY AS i(name, quantity, unit, n)
                    ORDER BY i.n
                    RETURNING id, recipe_id, name, quantity, unit
                    """,
                    recipe_id,
                    [ing.name for ing in ingredients],
                    [ing.quantity for ing in ingredients],
                    [ing.unit for ing in ingredients],
                )

            instruction_rows = []
            if instructions:
                instruction_rows = await conn.fetch(
                    """
                    INSERT INTO instructions (recipe_id, step_order, description)
                    SELECT $1, s.step_order, s.description
                    FROM unnest($2::int[], $3::text[]) AS s(step_order, description)
                    RETURNING id, recipe_id, step_order, description
                    """,
                    recipe_id,
                    [step.order for step in instructions],
                    [step.description for step in instructions],
                )

        logger.info(
            "Recipe created",
            recipe_id=recipe_id,
            owner_id=owner_id,
            ingredients=len(ingredient_rows),
            instructions=len(instruction_rows),
        )
        return RecipeDetail(
            **dict(row),
            ingredients=sorted(
                (_to_ingredient(r) for r in ingredient_rows), key=lambda i: i.id
            ),
            instructions=sorted(
                (_to_instruction(r) for r in instruction_rows),
                key=lambda s: (s.order, s.id),
            ),
        )

    async def update(
        self,
        recipe_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        time: str | None = None,
        image_url: str | None = None,
    ) -> RecipeRecord | None:
        """Overwrite the given fields; None keeps the stored value."""
        query = f"""
            UPDATE recipes
            SET title = COALESCE($2, title),
                description = COALESCE($3, description),
                time = COALESCE($4, time),
                image_url = COALESCE($5, image_url),
                updated_at = now()
            WHERE id = $1
            RETURNING {_RECIPE_COLUMNS}
        """
        async with self.connection() as conn:
            row = await conn.fetchrow(
                query, recipe_id, title, description, time, image_url
            )
        return _to_recipe(row)

    async def delete(self, recipe_id: int) -> bool:
        """Delete a recipe; children, comments, ratings and bookmarks cascade."""
        async with self.connection() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM recipes WHERE id = $1 RETURNING id", recipe_id
            )
        return deleted is not None
