"""Configurable Nutri-Score point tables."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class Basis(str, Enum):
    """Normalization applied to a nutrient vector before scoring."""

    PER_100G = "per_100g"
    ABSOLUTE = "absolute"


class PointBand(BaseModel):
    """Points awarded when ``lower < value <= upper``.

    A missing bound is open-ended.
    """

    lower: float | None = None
    upper: float | None = None
    points: int = Field(ge=0)

    def contains(self, value: float) -> bool:
        """Return true when the value falls inside the band."""
        if self.lower is not None and value <= self.lower:
            return False
        return self.upper is None or value <= self.upper


class ScoringVariant(BaseModel):
    """Point tables and normalization for one subject type."""

    basis: Basis = Basis.PER_100G
    energy_kj: list[PointBand]
    sugars_g: list[PointBand]
    saturated_fat_g: list[PointBand]
    sodium_mg: list[PointBand]
    fiber_g: list[PointBand]
    protein_g: list[PointBand]
    fruit_veg_nut_pct: list[PointBand]
    protein_cap_threshold: int = 11
    protein_cap_fvn_points: int = 5


class GradeThreshold(BaseModel):
    """Highest numeric score that still earns a grade."""

    max_score: int
    grade: str = Field(pattern="^[A-E]$")


class ScoringTable(BaseModel):
    """Full scoring configuration keyed by subject type."""

    ingredient: ScoringVariant
    recipe: ScoringVariant
    grade_thresholds: list[GradeThreshold]

    @model_validator(mode="after")
    def _check_thresholds_ascending(self) -> "ScoringTable":
        bounds = [threshold.max_score for threshold in self.grade_thresholds]
        if bounds != sorted(bounds):
            raise ValueError("grade_thresholds must be ascending")
        return self
