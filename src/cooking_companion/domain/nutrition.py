"""Nutrition domain models."""

from dataclasses import dataclass
from enum import Enum


class SubjectType(str, Enum):
    """What a nutrient vector describes."""

    INGREDIENT = "ingredient"
    RECIPE = "recipe"


@dataclass(frozen=True)
class NutrientVector:
    """Absolute nutrient totals for a list of weighted ingredients."""

    weight_g: float = 0.0
    energy_kj: float = 0.0
    sugars_g: float = 0.0
    saturated_fat_g: float = 0.0
    sodium_mg: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fruit_veg_nut_g: float = 0.0


@dataclass(frozen=True)
class ScoreSummary:
    """Numeric score, letter grade and weight of one side of a comparison."""

    score: int
    grade: str
    weight_g: float
    nutrients: NutrientVector


@dataclass(frozen=True)
class RescoreReport:
    """Before/after comparison of a canonical and personalized recipe."""

    before: ScoreSummary
    after: ScoreSummary
