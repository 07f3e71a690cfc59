"""Tests for container wiring."""

import pytest
from pydantic import ValidationError

from cooking_companion.config import Settings
from cooking_companion.containers import build_container
from cooking_companion.services.scoring import DEFAULT_SCORING_TABLE


def test_build_container_creates_manager(settings) -> None:
    container = build_container(settings)

    manager = container.cooking_manager
    assert manager.max_candidates == 3
    assert manager.calculator.table == DEFAULT_SCORING_TABLE
    assert manager.catalog_service.ttl_seconds == settings.catalog_ttl_seconds


@pytest.mark.parametrize("value", [0, 4])
def test_max_candidates_is_bounded(settings, value: int) -> None:
    with pytest.raises(ValidationError):
        Settings(**{**settings.model_dump(), "max_candidates": value})
