"""Selection of the ingredient to propose a substitution for."""

from dataclasses import dataclass

from cooking_companion.domain.catalog import Ingredient
from cooking_companion.domain.context import CookingContext
from cooking_companion.domain.nutrition import SubjectType
from cooking_companion.services.nutrition import NutritionAggregator
from cooking_companion.services.scoring import NutriScoreCalculator
from cooking_companion.services.substitutes import SubstituteCandidateGenerator


@dataclass
class WorstIngredientSelector:
    """Finds the least healthy ingredient that can still be replaced."""

    generator: SubstituteCandidateGenerator
    aggregator: NutritionAggregator
    calculator: NutriScoreCalculator

    def select_worst(self, context: CookingContext) -> Ingredient | None:
        """Return the worst-scoring replaceable ingredient, or ``None``."""
        recipe = context.personalized_recipe
        ranked: list[tuple[int, float, str, Ingredient]] = []
        for entry in recipe.ingredients:
            ingredient = context.catalog.get(entry.ingredient_id)
            if ingredient is None:
                continue
            items = [(ingredient, entry.amount)]
            score = self.calculator.score(
                self.aggregator.aggregate(items), SubjectType.INGREDIENT
            )
            mass = self.aggregator.total_weight(items)
            ranked.append((-score, -mass, str(ingredient.id), ingredient))

        ranked.sort(key=lambda row: row[:3])
        for *_, ingredient in ranked:
            candidates = self.generator.generate(
                ingredient,
                recipe.ingredients,
                context.constraints,
                recipe.blocked_for(ingredient.id),
            )
            if candidates:
                return ingredient
        return None
