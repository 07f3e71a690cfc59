"""Supabase-backed personalized recipe repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import AsyncClient

from cooking_companion.domain.models import (
    BlockedSubstitution,
    PersonalizedRecipe,
    RecipeIngredient,
)
from cooking_companion.services.recipes import PersonalizedRecipeRepository

_COLUMNS = "id, user_id, recipe_id, ingredients_json, blocked_json"


@dataclass
class SupabasePersonalizedRecipeRepository(PersonalizedRecipeRepository):
    """Supabase implementation storing the working list as JSON."""

    client: AsyncClient

    async def find_personalized_recipe(
        self, user_id: UUID, recipe_id: UUID
    ) -> PersonalizedRecipe | None:
        """Return the user's copy of a recipe, if present."""
        response = await (
            self.client.table("personalized_recipes")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("recipe_id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    async def get_personalized_recipe(
        self, personalized_recipe_id: UUID
    ) -> PersonalizedRecipe | None:
        """Return a personalized recipe by id, if present."""
        response = await (
            self.client.table("personalized_recipes")
            .select(_COLUMNS)
            .eq("id", str(personalized_recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    async def create_personalized_recipe(
        self, user_id: UUID, recipe_id: UUID, ingredients: list[RecipeIngredient]
    ) -> PersonalizedRecipe:
        """Create a personalized recipe row and return it."""
        response = await (
            self.client.table("personalized_recipes")
            .insert(
                {
                    "user_id": str(user_id),
                    "recipe_id": str(recipe_id),
                    "ingredients_json": _ingredients_to_json(ingredients),
                    "blocked_json": [],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create personalized recipe")
        return _parse_recipe(response.data[0])

    async def save_personalized_recipe(self, recipe: PersonalizedRecipe) -> None:
        """Write the ingredient list and blocked substitutions in a single update."""
        response = await (
            self.client.table("personalized_recipes")
            .update(
                {
                    "ingredients_json": _ingredients_to_json(recipe.ingredients),
                    "blocked_json": _blocked_to_json(recipe.blocked_substitutions),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(recipe.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save personalized recipe")


def _ingredients_to_json(
    ingredients: list[RecipeIngredient],
) -> list[dict[str, object]]:
    return [
        {
            "ingredient_id": str(entry.ingredient_id),
            "amount": entry.amount,
            "substitution_for": (
                str(entry.substitution_for) if entry.substitution_for else None
            ),
        }
        for entry in ingredients
    ]


def _blocked_to_json(blocked: list[BlockedSubstitution]) -> list[dict[str, object]]:
    return [
        {
            "original_id": str(entry.original_id),
            "substitute_ids": sorted(str(item) for item in entry.substitute_ids),
        }
        for entry in blocked
    ]


def _parse_recipe(row: dict[str, object]) -> PersonalizedRecipe:
    """Parse a personalized recipe row into a domain model."""
    return PersonalizedRecipe(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        recipe_id=UUID(row["recipe_id"]),
        ingredients=[
            RecipeIngredient(
                ingredient_id=UUID(item["ingredient_id"]),
                amount=float(item["amount"]),
                substitution_for=(
                    UUID(item["substitution_for"])
                    if item.get("substitution_for")
                    else None
                ),
            )
            for item in row.get("ingredients_json") or []
        ],
        blocked_substitutions=[
            BlockedSubstitution(
                original_id=UUID(item["original_id"]),
                substitute_ids=frozenset(
                    UUID(value) for value in item.get("substitute_ids", [])
                ),
            )
            for item in row.get("blocked_json") or []
        ],
    )
