"""Personalized recipe lifecycle."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from cooking_companion.domain.catalog import Recipe
from cooking_companion.domain.errors import NotFoundError
from cooking_companion.domain.models import (
    BlockedSubstitution,
    PersonalizedRecipe,
    RecipeIngredient,
)

_logger = logging.getLogger(__name__)


class PersonalizedRecipeRepository(Protocol):
    """Persistence interface for personalized recipes."""

    async def find_personalized_recipe(
        self, user_id: UUID, recipe_id: UUID
    ) -> PersonalizedRecipe | None:
        """Return the user's copy of a recipe, if present."""

    async def get_personalized_recipe(
        self, personalized_recipe_id: UUID
    ) -> PersonalizedRecipe | None:
        """Return a personalized recipe by id, if present."""

    async def create_personalized_recipe(
        self, user_id: UUID, recipe_id: UUID, ingredients: list[RecipeIngredient]
    ) -> PersonalizedRecipe:
        """Create and return a personalized recipe."""

    async def save_personalized_recipe(self, recipe: PersonalizedRecipe) -> None:
        """Persist the ingredient list and blocked substitutions in one write."""


@dataclass
class PersonalizedRecipeService:
    """Application service for a user's working copies of recipes."""

    repository: PersonalizedRecipeRepository

    async def ensure_personalized_recipe(
        self, user_id: UUID, recipe: Recipe
    ) -> PersonalizedRecipe:
        """Return the user's copy of a recipe, cloning it on first use."""
        existing = await self.repository.find_personalized_recipe(user_id, recipe.id)
        if existing:
            return existing

        _logger.info(
            "Creating personalized copy of %s for user %s", recipe.name, user_id
        )
        return await self.repository.create_personalized_recipe(
            user_id=user_id,
            recipe_id=recipe.id,
            ingredients=clone_items(recipe),
        )

    async def get(self, personalized_recipe_id: UUID) -> PersonalizedRecipe:
        """Return a personalized recipe or raise ``NotFoundError``."""
        recipe = await self.repository.get_personalized_recipe(personalized_recipe_id)
        if recipe is None:
            raise NotFoundError(
                f"Personalized recipe {personalized_recipe_id} not found"
            )
        return recipe

    async def find(self, user_id: UUID, recipe_id: UUID) -> PersonalizedRecipe | None:
        """Return the user's copy of a recipe, if present."""
        return await self.repository.find_personalized_recipe(user_id, recipe_id)

    async def block_substitutes(
        self,
        recipe: PersonalizedRecipe,
        original_id: UUID,
        substitute_ids: list[UUID],
    ) -> None:
        """Permanently exclude substitutes for an original ingredient."""
        recipe.blocked_substitutions.append(
            BlockedSubstitution(
                original_id=original_id,
                substitute_ids=frozenset(substitute_ids),
            )
        )
        await self.repository.save_personalized_recipe(recipe)


def clone_items(recipe: Recipe) -> list[RecipeIngredient]:
    """Copy canonical items into a working list with one entry per ingredient."""
    amounts: dict[UUID, float] = {}
    for item in recipe.items:
        amounts[item.ingredient_id] = amounts.get(item.ingredient_id, 0.0) + item.amount
    return [
        RecipeIngredient(ingredient_id=ingredient_id, amount=amount)
        for ingredient_id, amount in amounts.items()
    ]
