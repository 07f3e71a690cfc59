"""Nutri-Score calculation driven by a configurable point table."""

from dataclasses import dataclass, field
from pathlib import Path

from cooking_companion.domain.nutrition import NutrientVector, SubjectType
from cooking_companion.domain.scoring import (
    Basis,
    GradeThreshold,
    PointBand,
    ScoringTable,
    ScoringVariant,
)

_WORST_GRADE = "E"


@dataclass
class NutriScoreCalculator:
    """Maps nutrient vectors to numeric scores and letter grades.

    Lower scores are healthier. Negative nutrients (energy, sugars,
    saturated fat, sodium) add points; fiber, protein and fruit/vegetable/nut
    content subtract them.
    """

    table: ScoringTable = field(default_factory=lambda: DEFAULT_SCORING_TABLE)

    def score(self, vector: NutrientVector, subject_type: SubjectType) -> int:
        """Return the numeric score of a nutrient vector."""
        variant = self._variant(subject_type)
        values = _normalize(vector, variant.basis)

        negative = (
            _points(variant.energy_kj, values["energy_kj"])
            + _points(variant.sugars_g, values["sugars_g"])
            + _points(variant.saturated_fat_g, values["saturated_fat_g"])
            + _points(variant.sodium_mg, values["sodium_mg"])
        )
        fvn = _points(variant.fruit_veg_nut_pct, values["fruit_veg_nut_pct"])
        fiber = _points(variant.fiber_g, values["fiber_g"])
        protein = _points(variant.protein_g, values["protein_g"])
        if (
            negative >= variant.protein_cap_threshold
            and fvn < variant.protein_cap_fvn_points
        ):
            protein = 0
        return negative - (fvn + fiber + protein)

    def grade(self, score: int) -> str:
        """Return the letter grade (A best, E worst) for a numeric score."""
        for threshold in self.table.grade_thresholds:
            if score <= threshold.max_score:
                return threshold.grade
        return _WORST_GRADE

    def _variant(self, subject_type: SubjectType) -> ScoringVariant:
        if subject_type is SubjectType.INGREDIENT:
            return self.table.ingredient
        return self.table.recipe


def load_scoring_table(path: str | None) -> ScoringTable:
    """Load a scoring table from JSON, falling back to the built-in one."""
    if not path:
        return DEFAULT_SCORING_TABLE
    return ScoringTable.model_validate_json(Path(path).read_text(encoding="utf-8"))


def _normalize(vector: NutrientVector, basis: Basis) -> dict[str, float]:
    weight = vector.weight_g
    fvn_pct = vector.fruit_veg_nut_g / weight * 100 if weight > 0 else 0.0
    if basis is Basis.PER_100G:
        factor = 100 / weight if weight > 0 else 0.0
    else:
        factor = 1.0
    return {
        "energy_kj": vector.energy_kj * factor,
        "sugars_g": vector.sugars_g * factor,
        "saturated_fat_g": vector.saturated_fat_g * factor,
        "sodium_mg": vector.sodium_mg * factor,
        "fiber_g": vector.fiber_g * factor,
        "protein_g": vector.protein_g * factor,
        "fruit_veg_nut_pct": fvn_pct,
    }


def _points(bands: list[PointBand], value: float) -> int:
    for band in bands:
        if band.contains(value):
            return band.points
    return 0


def _steps(bounds: list[float], points: list[int] | None = None) -> list[PointBand]:
    """Build bands from ascending upper bounds; the last band is open-ended."""
    awarded = points or list(range(len(bounds) + 1))
    bands = []
    lower: float | None = None
    for bound, value in zip(bounds, awarded, strict=False):
        bands.append(PointBand(lower=lower, upper=bound, points=value))
        lower = bound
    bands.append(PointBand(lower=lower, upper=None, points=awarded[len(bounds)]))
    return bands


# Bands of the 2017 general-food Nutri-Score, per 100 g.
_GENERAL_FOOD = ScoringVariant(
    basis=Basis.PER_100G,
    energy_kj=_steps([335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350]),
    sugars_g=_steps([4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45]),
    saturated_fat_g=_steps([1, 2, 3, 4, 5, 6, 7, 8, 9, 10]),
    sodium_mg=_steps([90, 180, 270, 360, 450, 540, 630, 720, 810, 900]),
    fiber_g=_steps([0.9, 1.9, 2.8, 3.7, 4.7]),
    protein_g=_steps([1.6, 3.2, 4.8, 6.4, 8.0]),
    fruit_veg_nut_pct=_steps([40, 60, 80], points=[0, 1, 2, 5]),
)

DEFAULT_SCORING_TABLE = ScoringTable(
    ingredient=_GENERAL_FOOD,
    recipe=_GENERAL_FOOD,
    grade_thresholds=[
        GradeThreshold(max_score=-1, grade="A"),
        GradeThreshold(max_score=2, grade="B"),
        GradeThreshold(max_score=10, grade="C"),
        GradeThreshold(max_score=18, grade="D"),
    ],
)
