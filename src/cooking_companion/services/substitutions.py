"""Applying substitutions to personalized recipes."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from cooking_companion.domain.errors import InvalidQuantityError
from cooking_companion.domain.models import (
    PersonalizedRecipe,
    RecipeIngredient,
    SubstitutionRecord,
)
from cooking_companion.services.nutrition import check_amount
from cooking_companion.services.recipes import PersonalizedRecipeRepository

_logger = logging.getLogger(__name__)


class SubstitutionRecordRepository(Protocol):
    """Persistence interface for the substitution audit trail."""

    async def append_record(self, record: SubstitutionRecord) -> None:
        """Append an immutable substitution record."""

    async def list_records(
        self, personalized_recipe_id: UUID
    ) -> list[SubstitutionRecord]:
        """Return substitution records of a personalized recipe, oldest first."""


@dataclass
class SubstitutionApplier:
    """Replaces an ingredient in a personalized recipe and records the change."""

    record_repository: SubstitutionRecordRepository
    recipe_repository: PersonalizedRecipeRepository

    async def apply(
        self,
        recipe: PersonalizedRecipe,
        original_id: UUID,
        substitute_id: UUID,
        amount: float,
    ) -> SubstitutionRecord:
        """Swap ``original_id`` for ``amount`` of ``substitute_id``.

        The audit record is written before the recipe is touched, so a
        failing merge still leaves a trace of the attempted substitution.
        """
        check_amount(amount, f"substitute {substitute_id}")
        record = SubstitutionRecord(
            id=uuid4(),
            personalized_recipe_id=recipe.id,
            original_id=original_id,
            substitute_id=substitute_id,
            amount=float(amount),
            created_at=datetime.now(tz=UTC),
        )
        await self.record_repository.append_record(record)

        recipe.ingredients = merge_substitute(
            recipe.ingredients, original_id, substitute_id, float(amount), record.id
        )
        await self.recipe_repository.save_personalized_recipe(recipe)
        _logger.info(
            "Applied substitution %s -> %s (%s) on recipe %s",
            original_id,
            substitute_id,
            amount,
            recipe.id,
        )
        return record

    async def history(self, personalized_recipe_id: UUID) -> list[SubstitutionRecord]:
        """Return the audit trail of a personalized recipe."""
        return await self.record_repository.list_records(personalized_recipe_id)


def merge_substitute(
    ingredients: list[RecipeIngredient],
    original_id: UUID,
    substitute_id: UUID,
    amount: float,
    record_id: UUID,
) -> list[RecipeIngredient]:
    """Return a working list with the original removed and the substitute merged in.

    The result holds at most one entry per ingredient id.
    """
    merged: dict[UUID, RecipeIngredient] = {}
    for entry in ingredients:
        if entry.ingredient_id == original_id:
            continue
        current = merged.get(entry.ingredient_id)
        if current is None:
            merged[entry.ingredient_id] = entry
        else:
            merged[entry.ingredient_id] = replace(
                current, amount=current.amount + entry.amount
            )

    existing = merged.get(substitute_id)
    total = amount + (existing.amount if existing else 0.0)
    if total <= 0:
        _logger.error("Merged amount for %s is %s", substitute_id, total)
        raise InvalidQuantityError(f"Merged amount for {substitute_id} is {total}")
    merged[substitute_id] = RecipeIngredient(
        ingredient_id=substitute_id,
        amount=total,
        substitution_for=record_id,
    )
    return list(merged.values())
