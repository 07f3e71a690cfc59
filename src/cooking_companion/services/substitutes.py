"""Substitute candidate generation for a single ingredient."""

from dataclasses import dataclass
from uuid import UUID

from cooking_companion.domain.catalog import (
    Ingredient,
    IngredientCatalog,
    UnitDescriptor,
)
from cooking_companion.domain.models import (
    NutritionGoal,
    RecipeIngredient,
    UserConstraints,
)
from cooking_companion.domain.nutrition import SubjectType
from cooking_companion.services.nutrition import NutritionAggregator
from cooking_companion.services.scoring import NutriScoreCalculator

MAX_CANDIDATES = 3


@dataclass(frozen=True)
class SubstituteCandidate:
    """Eligible replacement with the amount it would use."""

    ingredient: Ingredient
    amount: float
    improvement: int
    goal_aligned: bool = True


@dataclass
class SubstituteCandidateGenerator:
    """Ranks same-category replacements that respect the user's constraints."""

    catalog: IngredientCatalog
    aggregator: NutritionAggregator
    calculator: NutriScoreCalculator
    max_candidates: int = MAX_CANDIDATES

    def generate(
        self,
        original: Ingredient,
        recipe_ingredients: list[RecipeIngredient],
        constraints: UserConstraints,
        blocked: set[UUID],
    ) -> list[SubstituteCandidate]:
        """Return at most ``max_candidates`` substitutes, best first.

        An empty list means no substitution is possible.
        """
        amount = _amount_in_recipe(original.id, recipe_ingredients)
        original_score = self._score(original, amount)
        lifestyle = constraints.lifestyle
        excluded_tags = lifestyle.excluded_tags if lifestyle else frozenset()

        candidates: list[SubstituteCandidate] = []
        for ingredient in self.catalog.in_category(original.category.id):
            if ingredient.id == original.id or ingredient.id in blocked:
                continue
            if ingredient.tags & constraints.allergies:
                continue
            if ingredient.id in constraints.dislikes:
                continue
            if ingredient.tags & excluded_tags:
                continue
            candidate_amount = convert_amount(amount, original.unit, ingredient.unit)
            candidates.append(
                SubstituteCandidate(
                    ingredient=ingredient,
                    amount=candidate_amount,
                    improvement=original_score
                    - self._score(ingredient, candidate_amount),
                    goal_aligned=_goal_aligned(constraints.goal, original, ingredient),
                )
            )

        candidates.sort(
            key=lambda candidate: (
                not candidate.goal_aligned,
                -candidate.improvement,
                str(candidate.ingredient.id),
            )
        )
        return candidates[: self.max_candidates]

    def _score(self, ingredient: Ingredient, amount: float) -> int:
        vector = self.aggregator.aggregate([(ingredient, amount)])
        return self.calculator.score(vector, SubjectType.INGREDIENT)


def convert_amount(
    amount: float, source: UnitDescriptor, target: UnitDescriptor
) -> float:
    """Convert an amount between units so that the mass stays the same."""
    if source == target or target.grams_per_unit <= 0:
        return amount
    return round(amount * source.grams_per_unit / target.grams_per_unit, 2)


def _amount_in_recipe(
    ingredient_id: UUID, recipe_ingredients: list[RecipeIngredient]
) -> float:
    for entry in recipe_ingredients:
        if entry.ingredient_id == ingredient_id:
            return entry.amount
    return 0.0


def _goal_aligned(
    goal: NutritionGoal | None, original: Ingredient, candidate: Ingredient
) -> bool:
    """Return false when the candidate moves away from the user's goal."""
    if goal is None:
        return True
    original_value = getattr(original.nutrients, goal.nutrient, None)
    candidate_value = getattr(candidate.nutrients, goal.nutrient, None)
    if original_value is None or candidate_value is None:
        return True
    if goal.direction == "higher":
        return candidate_value >= original_value
    return candidate_value <= original_value
