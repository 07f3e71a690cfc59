"""Supabase implementation for catalog reference data."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from cooking_companion.domain.catalog import (
    Category,
    Ingredient,
    NutrientProfile,
    Recipe,
    RecipeItem,
    UnitDescriptor,
)
from cooking_companion.services.catalog import CatalogRepository

_RECIPE_COLUMNS = "id, name, recipe_items(ingredient_id, amount)"
_INGREDIENT_COLUMNS = "*, categories(id, name)"


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Read-only Supabase repository for recipes and ingredients."""

    client: AsyncClient

    async def find_recipe_by_name(self, name: str) -> Recipe | None:
        """Return a recipe whose name matches case-insensitively."""
        response = await (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .ilike("name", _escape_like(name))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    async def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = await (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    async def list_ingredients(self, ingredient_ids: list[UUID]) -> list[Ingredient]:
        """Return ingredients by id."""
        if not ingredient_ids:
            return []
        response = await (
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .in_("id", [str(ingredient_id) for ingredient_id in ingredient_ids])
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]

    async def list_ingredients_in_categories(
        self, category_ids: list[UUID]
    ) -> list[Ingredient]:
        """Return every ingredient of the given categories."""
        if not category_ids:
            return []
        response = await (
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .in_("category_id", [str(category_id) for category_id in category_ids])
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so names match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row with embedded items into a domain model."""
    return Recipe(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        items=[
            RecipeItem(
                ingredient_id=UUID(item["ingredient_id"]),
                amount=float(item.get("amount", 0.0)),
            )
            for item in row.get("recipe_items") or []
        ],
    )


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row with its embedded category."""
    category = row.get("categories") or {}
    return Ingredient(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        unit=UnitDescriptor(
            unit_type=str(row.get("unit_type", "g")),
            grams_per_unit=float(row.get("grams_per_unit", 1.0)),
        ),
        category=Category(
            id=UUID(category.get("id") or row["category_id"]),
            name=str(category.get("name", "")),
        ),
        nutrients=NutrientProfile(
            energy_kj=float(row.get("energy_kj") or 0.0),
            sugars_g=float(row.get("sugars_g") or 0.0),
            saturated_fat_g=float(row.get("saturated_fat_g") or 0.0),
            sodium_mg=float(row.get("sodium_mg") or 0.0),
            fiber_g=float(row.get("fiber_g") or 0.0),
            protein_g=float(row.get("protein_g") or 0.0),
            fruit_veg_nut_pct=float(row.get("fruit_veg_nut_pct") or 0.0),
        ),
        tags=frozenset(row.get("tags") or []),
    )
