"""Read access to recipes and ingredients with caching."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from cooking_companion.domain.catalog import Ingredient, IngredientCatalog, Recipe
from cooking_companion.domain.errors import NotFoundError
from cooking_companion.services.cache import ReferenceCache

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for catalog reference data."""

    async def find_recipe_by_name(self, name: str) -> Recipe | None:
        """Return a canonical recipe by name, if present."""

    async def get_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a canonical recipe by id, if present."""

    async def list_ingredients(self, ingredient_ids: list[UUID]) -> list[Ingredient]:
        """Return the ingredients with the given ids."""

    async def list_ingredients_in_categories(
        self, category_ids: list[UUID]
    ) -> list[Ingredient]:
        """Return every ingredient belonging to the given categories."""


@dataclass
class CatalogService:
    """Service for catalog lookups with caching."""

    repository: CatalogRepository
    cache: ReferenceCache
    ttl_seconds: int = 300

    async def find_recipe_by_name(self, name: str) -> Recipe | None:
        """Return a canonical recipe by case-insensitive name."""
        cache_key = f"recipe:name:{name.strip().lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Recipe):
            return cached
        recipe = await self.repository.find_recipe_by_name(name.strip())
        if recipe is not None:
            self.cache.set(cache_key, recipe, ttl_seconds=self.ttl_seconds)
        return recipe

    async def get_recipe(self, recipe_id: UUID) -> Recipe:
        """Return a canonical recipe by id or raise ``NotFoundError``."""
        cache_key = f"recipe:id:{recipe_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Recipe):
            return cached
        recipe = await self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        self.cache.set(cache_key, recipe, ttl_seconds=self.ttl_seconds)
        return recipe

    async def load_catalog(self, ingredient_ids: list[UUID]) -> IngredientCatalog:
        """Load the given ingredients plus every member of their categories."""
        wanted = set(ingredient_ids)
        ingredients = await self.repository.list_ingredients(
            sorted(wanted, key=str)
        )
        resolved = {ingredient.id: ingredient for ingredient in ingredients}
        missing = wanted - resolved.keys()
        if missing:
            _logger.error(
                "Ingredients missing from catalog: %s", sorted(map(str, missing))
            )
            raise NotFoundError(f"{len(missing)} ingredient(s) missing from catalog")

        category_ids = sorted(
            {ingredient.category.id for ingredient in ingredients}, key=str
        )
        for member in await self._category_members(category_ids):
            resolved.setdefault(member.id, member)
        return IngredientCatalog(ingredients=resolved)

    async def _category_members(self, category_ids: list[UUID]) -> list[Ingredient]:
        members: list[Ingredient] = []
        uncached: list[UUID] = []
        for category_id in category_ids:
            cached = self.cache.get(f"category:{category_id}")
            if isinstance(cached, list):
                members.extend(cached)
            else:
                uncached.append(category_id)
        if not uncached:
            return members

        fetched = await self.repository.list_ingredients_in_categories(uncached)
        for category_id in uncached:
            group = [item for item in fetched if item.category.id == category_id]
            self.cache.set(
                f"category:{category_id}", group, ttl_seconds=self.ttl_seconds
            )
        members.extend(fetched)
        return members
