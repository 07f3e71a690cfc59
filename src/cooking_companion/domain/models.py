"""Domain models for user-owned data."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Lifestyle:
    """Dietary lifestyle and the ingredient tags it rules out."""

    name: str
    excluded_tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class NutritionGoal:
    """Nutrition goal focused on one nutrient.

    ``nutrient`` names a ``NutrientProfile`` field; ``direction`` is
    ``"lower"`` or ``"higher"``.
    """

    name: str
    nutrient: str
    direction: str = "lower"


@dataclass(frozen=True)
class UserConstraints:
    """Allergies, dislikes, goal and lifestyle of a user."""

    user_id: UUID
    allergies: frozenset[str] = field(default_factory=frozenset)
    dislikes: frozenset[UUID] = field(default_factory=frozenset)
    goal: NutritionGoal | None = None
    lifestyle: Lifestyle | None = None


@dataclass(frozen=True)
class RecipeIngredient:
    """Entry of a personalized recipe's working ingredient list."""

    ingredient_id: UUID
    amount: float
    substitution_for: UUID | None = None


@dataclass(frozen=True)
class BlockedSubstitution:
    """Substitutes the user refused for one original ingredient."""

    original_id: UUID
    substitute_ids: frozenset[UUID]


@dataclass
class PersonalizedRecipe:
    """User-specific working copy of a canonical recipe."""

    id: UUID
    user_id: UUID
    recipe_id: UUID
    ingredients: list[RecipeIngredient]
    blocked_substitutions: list[BlockedSubstitution] = field(default_factory=list)

    def find_ingredient(self, ingredient_id: UUID) -> RecipeIngredient | None:
        """Return the working-list entry for an ingredient, if present."""
        for entry in self.ingredients:
            if entry.ingredient_id == ingredient_id:
                return entry
        return None

    def blocked_for(self, original_id: UUID) -> set[UUID]:
        """Return every substitute blocked for an original ingredient."""
        blocked: set[UUID] = set()
        for entry in self.blocked_substitutions:
            if entry.original_id == original_id:
                blocked.update(entry.substitute_ids)
        return blocked


@dataclass(frozen=True)
class SubstitutionRecord:
    """Append-only audit entry for an applied substitution."""

    id: UUID
    personalized_recipe_id: UUID
    original_id: UUID
    substitute_id: UUID
    amount: float
    created_at: datetime
