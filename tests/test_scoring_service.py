"""Tests for Nutri-Score calculation."""

import json

import pytest
from pydantic import ValidationError

from cooking_companion.domain.nutrition import NutrientVector, SubjectType
from cooking_companion.domain.scoring import ScoringTable
from cooking_companion.services.nutrition import NutritionAggregator
from cooking_companion.services.scoring import (
    DEFAULT_SCORING_TABLE,
    NutriScoreCalculator,
    load_scoring_table,
)
from tests.conftest import ALMOND_MILK, CREAM, OAT_MILK, WHITE_FLOUR, WHOLE_MILK


def _ingredient_score(ingredient, amount: float = 100) -> int:
    vector = NutritionAggregator().aggregate([(ingredient, amount)])
    return NutriScoreCalculator().score(vector, SubjectType.INGREDIENT)


def test_score_of_catalog_ingredients() -> None:
    assert _ingredient_score(WHOLE_MILK) == 1
    assert _ingredient_score(OAT_MILK) == -1
    assert _ingredient_score(ALMOND_MILK) == 0
    assert _ingredient_score(WHITE_FLOUR) == -3


def test_score_is_normalized_per_100g() -> None:
    assert _ingredient_score(WHOLE_MILK, 100) == _ingredient_score(WHOLE_MILK, 350)


def test_protein_not_counted_for_high_negative_points() -> None:
    # 12 negative points; protein would otherwise subtract 1
    assert _ingredient_score(CREAM) == 12


def test_recipe_score_and_grade() -> None:
    calculator = NutriScoreCalculator()
    vector = NutritionAggregator().aggregate([(WHOLE_MILK, 200), (WHITE_FLOUR, 150)])

    score = calculator.score(vector, SubjectType.RECIPE)

    assert score == -2
    assert calculator.grade(score) == "A"


def test_zero_weight_vector_scores_zero() -> None:
    calculator = NutriScoreCalculator()

    assert calculator.score(NutrientVector(), SubjectType.RECIPE) == 0


def test_score_is_deterministic() -> None:
    calculator = NutriScoreCalculator()
    vector = NutrientVector(
        weight_g=100, energy_kj=1200, sugars_g=20, saturated_fat_g=5, sodium_mg=300
    )

    scores = {calculator.score(vector, SubjectType.RECIPE) for _ in range(5)}

    assert scores == {18}
    assert calculator.grade(18) == "D"


@pytest.mark.parametrize(
    ("score", "grade"),
    [(-15, "A"), (-1, "A"), (0, "B"), (2, "B"), (3, "C"), (10, "C"), (11, "D"),
     (18, "D"), (19, "E"), (40, "E")],
)
def test_grade_buckets(score: int, grade: str) -> None:
    assert NutriScoreCalculator().grade(score) == grade


def test_absolute_basis_ignores_weight(tmp_path) -> None:
    raw = DEFAULT_SCORING_TABLE.model_dump(mode="json")
    raw["ingredient"]["basis"] = "absolute"
    path = tmp_path / "table.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    calculator = NutriScoreCalculator(load_scoring_table(str(path)))

    small = NutritionAggregator().aggregate([(WHOLE_MILK, 100)])
    large = NutritionAggregator().aggregate([(WHOLE_MILK, 1000)])

    assert calculator.score(large, SubjectType.INGREDIENT) > calculator.score(
        small, SubjectType.INGREDIENT
    )
    assert calculator.score(small, SubjectType.RECIPE) == calculator.score(
        large, SubjectType.RECIPE
    )


def test_load_scoring_table_defaults_without_path() -> None:
    assert load_scoring_table(None) is DEFAULT_SCORING_TABLE


def test_scoring_table_rejects_descending_thresholds() -> None:
    raw = DEFAULT_SCORING_TABLE.model_dump(mode="json")
    raw["grade_thresholds"] = [
        {"max_score": 5, "grade": "A"},
        {"max_score": 1, "grade": "B"},
    ]

    with pytest.raises(ValidationError):
        ScoringTable.model_validate(raw)
