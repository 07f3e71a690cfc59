"""Cooking session state machine for voice-driven substitutions."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from cooking_companion.domain.catalog import Ingredient, IngredientCatalog
from cooking_companion.domain.context import CookingContext
from cooking_companion.domain.errors import (
    InvalidSelectionError,
    NotFoundError,
    SessionAlreadyResolvedError,
)
from cooking_companion.domain.models import PersonalizedRecipe, SubstitutionRecord
from cooking_companion.domain.nutrition import (
    RescoreReport,
    ScoreSummary,
    SubjectType,
)
from cooking_companion.domain.sessions import (
    APPLIED,
    BLOCKED,
    PROPOSED,
    CookingSession,
    Proposal,
    ProposedSubstitute,
)
from cooking_companion.services.catalog import CatalogService
from cooking_companion.services.locks import UserLocks
from cooking_companion.services.nutrition import NutritionAggregator
from cooking_companion.services.recipes import PersonalizedRecipeService
from cooking_companion.services.scoring import NutriScoreCalculator
from cooking_companion.services.selection import WorstIngredientSelector
from cooking_companion.services.substitutes import (
    MAX_CANDIDATES,
    SubstituteCandidateGenerator,
)
from cooking_companion.services.substitutions import SubstitutionApplier
from cooking_companion.services.users import UserService

_logger = logging.getLogger(__name__)


class CookingSessionRepository(Protocol):
    """Persistence interface for the single active session of each user."""

    async def save_session(self, session: CookingSession) -> None:
        """Store a session as the user's active one."""

    async def load_session(self, user_id: UUID) -> CookingSession | None:
        """Return the user's session, if present."""

    async def clear_session(self, user_id: UUID) -> None:
        """Delete any session of the user."""

    async def transition_session(
        self, session_id: UUID, from_status: str, to_status: str
    ) -> bool:
        """Move a session to ``to_status`` if it is still in ``from_status``.

        Returns false when another request changed the status first.
        """


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of applying one of the proposed substitutes."""

    ingredient: str
    original: str
    record: SubstitutionRecord


@dataclass(frozen=True)
class BlockResult:
    """Outcome of refusing a proposal."""

    original: str
    blocked: list[str]


@dataclass
class CookingSessionManager:
    """Sequences start, propose, resolve and rescore across stateless requests."""

    catalog_service: CatalogService
    recipe_service: PersonalizedRecipeService
    user_service: UserService
    session_repository: CookingSessionRepository
    applier: SubstitutionApplier
    aggregator: NutritionAggregator = field(default_factory=NutritionAggregator)
    calculator: NutriScoreCalculator = field(default_factory=NutriScoreCalculator)
    locks: UserLocks = field(default_factory=UserLocks)
    max_candidates: int = MAX_CANDIDATES

    async def start_cooking(self, user_id: UUID, recipe_name: str) -> Proposal:
        """Start a new session and propose substitutes for the worst ingredient."""
        _logger.info("Start cooking %r for user %s", recipe_name, user_id)
        async with self.locks.hold(user_id):
            recipe = await self.catalog_service.find_recipe_by_name(recipe_name)
            if recipe is None:
                raise NotFoundError(f"Recipe not found: {recipe_name}")
            constraints = await self.user_service.load_constraints(user_id)
            personalized = await self.recipe_service.ensure_personalized_recipe(
                user_id, recipe
            )

            await self.session_repository.clear_session(user_id)

            catalog = await self.catalog_service.load_catalog(
                [entry.ingredient_id for entry in personalized.ingredients]
            )
            context = CookingContext(
                personalized_recipe=personalized,
                recipe=recipe,
                catalog=catalog,
                constraints=constraints,
            )
            proposal = self._propose(context)
            await self.session_repository.save_session(
                CookingSession(
                    id=uuid4(),
                    user_id=user_id,
                    personalized_recipe_id=personalized.id,
                    status=PROPOSED,
                    proposal=proposal,
                    created_at=datetime.now(tz=UTC),
                )
            )
        if proposal.available:
            _logger.info(
                "Proposed %s substitute(s) for %s",
                len(proposal.candidates),
                proposal.original_name,
            )
        else:
            _logger.info("No substitution available for user %s", user_id)
        return proposal

    async def get_substitutes(self, user_id: UUID) -> Proposal:
        """Return the pending proposal of the user's session."""
        session = await self.session_repository.load_session(user_id)
        if session is None:
            raise NotFoundError(f"No cooking session for user {user_id}")
        return session.proposal

    async def resolve_by_selection(
        self, user_id: UUID, choice_index: int
    ) -> SelectionResult:
        """Apply the substitute at ``choice_index`` (1-based) of the proposal."""
        async with self.locks.hold(user_id):
            session = await self._pending_session(user_id)
            candidates = session.proposal.candidates
            if not 1 <= choice_index <= len(candidates):
                raise InvalidSelectionError(
                    f"Choice {choice_index} is not one of {len(candidates)} option(s)"
                )
            chosen = candidates[choice_index - 1]
            original_id = session.proposal.original_id
            if original_id is None:
                raise InvalidSelectionError("Session has no substitution proposal")
            personalized = await self.recipe_service.get(session.personalized_recipe_id)

            await self._claim(session, APPLIED)
            try:
                record = await self.applier.apply(
                    personalized, original_id, chosen.ingredient_id, chosen.amount
                )
            except Exception:
                await self._release(session, APPLIED)
                raise
        return SelectionResult(
            ingredient=chosen.name,
            original=session.proposal.original_name or "",
            record=record,
        )

    async def resolve_by_blocking(self, user_id: UUID) -> BlockResult:
        """Refuse the proposal so its substitutes are never offered again."""
        async with self.locks.hold(user_id):
            session = await self._pending_session(user_id)
            proposal = session.proposal
            if not proposal.available or proposal.original_id is None:
                raise InvalidSelectionError("There is no proposal to block")
            personalized = await self.recipe_service.get(session.personalized_recipe_id)

            await self._claim(session, BLOCKED)
            try:
                await self.recipe_service.block_substitutes(
                    personalized,
                    proposal.original_id,
                    [candidate.ingredient_id for candidate in proposal.candidates],
                )
            except Exception:
                await self._release(session, BLOCKED)
                raise
        _logger.info(
            "Blocked substitutes for %s on recipe %s",
            proposal.original_name,
            personalized.id,
        )
        return BlockResult(
            original=proposal.original_name or "",
            blocked=[candidate.name for candidate in proposal.candidates],
        )

    async def rescore_after_resolution(self, user_id: UUID) -> RescoreReport:
        """Compare the canonical recipe's score with the personalized one."""
        session = await self.session_repository.load_session(user_id)
        if session is None:
            raise NotFoundError(f"No cooking session for user {user_id}")
        personalized = await self.recipe_service.get(session.personalized_recipe_id)
        recipe = await self.catalog_service.get_recipe(personalized.recipe_id)
        catalog = await self.catalog_service.load_catalog(
            [item.ingredient_id for item in recipe.items]
            + [entry.ingredient_id for entry in personalized.ingredients]
        )
        return RescoreReport(
            before=self._summarize(
                catalog, [(item.ingredient_id, item.amount) for item in recipe.items]
            ),
            after=self._summarize(
                catalog,
                [
                    (entry.ingredient_id, entry.amount)
                    for entry in personalized.ingredients
                ],
            ),
        )

    async def substitution_history(
        self, user_id: UUID, recipe_name: str
    ) -> list[SubstitutionRecord]:
        """Return the audit trail of the user's copy of a recipe."""
        recipe = await self.catalog_service.find_recipe_by_name(recipe_name)
        if recipe is None:
            raise NotFoundError(f"Recipe not found: {recipe_name}")
        personalized = await self.recipe_service.find(user_id, recipe.id)
        if personalized is None:
            raise NotFoundError(f"User {user_id} has not cooked {recipe_name}")
        return await self.applier.history(personalized.id)

    def _propose(self, context: CookingContext) -> Proposal:
        generator = SubstituteCandidateGenerator(
            catalog=context.catalog,
            aggregator=self.aggregator,
            calculator=self.calculator,
            max_candidates=self.max_candidates,
        )
        selector = WorstIngredientSelector(
            generator=generator,
            aggregator=self.aggregator,
            calculator=self.calculator,
        )
        worst = selector.select_worst(context)
        if worst is None:
            return Proposal()
        personalized: PersonalizedRecipe = context.personalized_recipe
        candidates = generator.generate(
            worst,
            personalized.ingredients,
            context.constraints,
            personalized.blocked_for(worst.id),
        )
        return Proposal(
            original_id=worst.id,
            original_name=worst.name,
            candidates=[
                ProposedSubstitute(
                    ingredient_id=candidate.ingredient.id,
                    name=candidate.ingredient.name,
                    amount=candidate.amount,
                )
                for candidate in candidates
            ],
        )

    async def _pending_session(self, user_id: UUID) -> CookingSession:
        session = await self.session_repository.load_session(user_id)
        if session is None:
            raise InvalidSelectionError(f"No cooking session for user {user_id}")
        if session.status != PROPOSED:
            raise SessionAlreadyResolvedError(
                f"Session {session.id} is already {session.status}"
            )
        return session

    async def _claim(self, session: CookingSession, status: str) -> None:
        claimed = await self.session_repository.transition_session(
            session.id, PROPOSED, status
        )
        if not claimed:
            _logger.warning("Session %s was resolved concurrently", session.id)
            raise SessionAlreadyResolvedError(f"Session {session.id} already resolved")

    async def _release(self, session: CookingSession, status: str) -> None:
        """Return a claimed session to ``PROPOSED`` after a failed write."""
        _logger.error("Resolving session %s failed; reopening it", session.id)
        await self.session_repository.transition_session(session.id, status, PROPOSED)

    def _summarize(
        self, catalog: IngredientCatalog, entries: list[tuple[UUID, float]]
    ) -> ScoreSummary:
        items: list[tuple[Ingredient, float]] = []
        for ingredient_id, amount in entries:
            ingredient = catalog.get(ingredient_id)
            if ingredient is None:
                raise NotFoundError(f"Ingredient {ingredient_id} not found")
            items.append((ingredient, amount))
        vector = self.aggregator.aggregate(items)
        score = self.calculator.score(vector, SubjectType.RECIPE)
        return ScoreSummary(
            score=score,
            grade=self.calculator.grade(score),
            weight_g=self.aggregator.total_weight(items),
            nutrients=vector,
        )
