"""Tests for catalog lookups and the reference cache."""

import asyncio
from uuid import uuid4

import pytest

from cooking_companion.domain.errors import NotFoundError
from cooking_companion.services.cache import InMemoryReferenceCache
from cooking_companion.services.catalog import CatalogService
from tests.conftest import (
    ALL_INGREDIENTS,
    MILK,
    PANCAKES,
    WHITE_FLOUR,
    WHOLE_MILK,
    InMemoryCatalogRepository,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _service(
    clock: FakeClock | None = None,
) -> tuple[CatalogService, InMemoryCatalogRepository]:
    repository = InMemoryCatalogRepository(
        recipes={PANCAKES.id: PANCAKES},
        ingredients={ingredient.id: ingredient for ingredient in ALL_INGREDIENTS},
    )
    cache = InMemoryReferenceCache(clock=clock or FakeClock())
    return CatalogService(repository, cache, ttl_seconds=60), repository


def test_recipe_lookup_by_name_is_cached_case_insensitively() -> None:
    service, repository = _service()

    first = asyncio.run(service.find_recipe_by_name("Pancakes"))
    second = asyncio.run(service.find_recipe_by_name("  PANCAKES "))

    assert first == second == PANCAKES
    assert repository.calls == ["find_recipe_by_name"]


def test_missing_recipe_is_not_cached() -> None:
    service, repository = _service()

    assert asyncio.run(service.find_recipe_by_name("lasagne")) is None
    assert asyncio.run(service.find_recipe_by_name("lasagne")) is None

    assert repository.calls.count("find_recipe_by_name") == 2


def test_get_recipe_raises_when_missing() -> None:
    service, _ = _service()

    assert asyncio.run(service.get_recipe(PANCAKES.id)) == PANCAKES
    with pytest.raises(NotFoundError):
        asyncio.run(service.get_recipe(uuid4()))


def test_load_catalog_includes_category_members() -> None:
    service, repository = _service()

    catalog = asyncio.run(service.load_catalog([WHOLE_MILK.id, WHITE_FLOUR.id]))

    assert set(catalog.ingredients) == {ingredient.id for ingredient in ALL_INGREDIENTS}
    milk_ids = [item.id for item in catalog.in_category(MILK.id)]
    assert milk_ids == sorted(
        (item.id for item in ALL_INGREDIENTS if item.category == MILK), key=str
    )

    asyncio.run(service.load_catalog([WHOLE_MILK.id]))
    assert repository.calls.count("list_ingredients_in_categories") == 1


def test_load_catalog_raises_for_unknown_ingredient() -> None:
    service, _ = _service()

    with pytest.raises(NotFoundError):
        asyncio.run(service.load_catalog([WHOLE_MILK.id, uuid4()]))


def test_cache_entries_expire() -> None:
    clock = FakeClock()
    service, repository = _service(clock)

    asyncio.run(service.find_recipe_by_name("pancakes"))
    clock.now += 61
    asyncio.run(service.find_recipe_by_name("pancakes"))

    assert repository.calls.count("find_recipe_by_name") == 2


def test_zero_ttl_disables_caching() -> None:
    cache = InMemoryReferenceCache()

    cache.set("key", "value", ttl_seconds=0)

    assert cache.get("key") is None
