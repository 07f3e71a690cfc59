"""Aggregation of weighted ingredient nutrients."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from cooking_companion.domain.catalog import Ingredient
from cooking_companion.domain.errors import InvalidQuantityError
from cooking_companion.domain.nutrition import NutrientVector

_logger = logging.getLogger(__name__)


@dataclass
class NutritionAggregator:
    """Sums per-100 g nutrient profiles weighted by ingredient mass."""

    def aggregate(self, items: Iterable[tuple[Ingredient, float]]) -> NutrientVector:
        """Return the summed nutrient vector of ``(ingredient, amount)`` pairs."""
        totals = {
            "weight_g": 0.0,
            "energy_kj": 0.0,
            "sugars_g": 0.0,
            "saturated_fat_g": 0.0,
            "sodium_mg": 0.0,
            "fiber_g": 0.0,
            "protein_g": 0.0,
            "fruit_veg_nut_g": 0.0,
        }
        for ingredient, amount in items:
            grams = grams_for(ingredient, amount)
            factor = grams / 100
            profile = ingredient.nutrients
            totals["weight_g"] += grams
            totals["energy_kj"] += profile.energy_kj * factor
            totals["sugars_g"] += profile.sugars_g * factor
            totals["saturated_fat_g"] += profile.saturated_fat_g * factor
            totals["sodium_mg"] += profile.sodium_mg * factor
            totals["fiber_g"] += profile.fiber_g * factor
            totals["protein_g"] += profile.protein_g * factor
            totals["fruit_veg_nut_g"] += profile.fruit_veg_nut_pct * factor
        return NutrientVector(**totals)

    def total_weight(self, items: Iterable[tuple[Ingredient, float]]) -> float:
        """Return the total mass in grams of ``(ingredient, amount)`` pairs."""
        return sum(grams_for(ingredient, amount) for ingredient, amount in items)


def grams_for(ingredient: Ingredient, amount: float) -> float:
    """Convert an amount in the ingredient's unit to grams."""
    check_amount(amount, ingredient.name)
    return float(amount) * ingredient.unit.grams_per_unit


def check_amount(amount: object, label: str) -> None:
    """Raise when an amount is negative or not a number."""
    if isinstance(amount, bool) or not isinstance(amount, int | float):
        _logger.error("Non-numeric amount for %s: %r", label, amount)
        raise InvalidQuantityError(f"Amount for {label} is not a number")
    if math.isnan(amount) or amount < 0:
        _logger.error("Invalid amount for %s: %s", label, amount)
        raise InvalidQuantityError(f"Amount for {label} must be non-negative")
