"""Resolved inputs for pure recommendation components."""

from dataclasses import dataclass

from cooking_companion.domain.catalog import IngredientCatalog, Recipe
from cooking_companion.domain.models import PersonalizedRecipe, UserConstraints


@dataclass(frozen=True)
class CookingContext:
    """Personalized recipe joined with its catalog data and user constraints."""

    personalized_recipe: PersonalizedRecipe
    recipe: Recipe
    catalog: IngredientCatalog
    constraints: UserConstraints
