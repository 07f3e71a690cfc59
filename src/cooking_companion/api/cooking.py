"""Voice skill endpoints for cooking sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from cooking_companion.api.skill_models import (
    BlockResponse,
    NutrientValues,
    ProposalResponse,
    RescoreResponse,
    SelectionResponse,
    StartCookingRequest,
    SubstituteView,
    UserRequest,
)

if TYPE_CHECKING:
    from cooking_companion.containers import AppContainer
    from cooking_companion.domain.nutrition import NutrientVector
    from cooking_companion.domain.sessions import Proposal


def _get_skill_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.skill_token


async def require_skill(
    x_skill_token: str | None = Header(default=None),
    skill_token: str = Depends(_get_skill_token),
) -> None:
    """Ensure requests come from the voice skill backend."""
    if not x_skill_token or x_skill_token != skill_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(
    prefix="/cooking", tags=["cooking"], dependencies=[Depends(require_skill)]
)


@router.post("/start")
async def start_cooking(
    body: StartCookingRequest, request: Request
) -> ProposalResponse:
    """Start cooking and propose substitutes for the least healthy ingredient."""
    container: AppContainer = request.app.state.container
    proposal = await container.cooking_manager.start_cooking(
        body.user_id, body.recipe_name
    )
    return _proposal_response(proposal)


@router.post("/substitutes")
async def get_substitutes(body: UserRequest, request: Request) -> ProposalResponse:
    """Return the pending proposal."""
    container: AppContainer = request.app.state.container
    proposal = await container.cooking_manager.get_substitutes(body.user_id)
    return _proposal_response(proposal)


@router.post("/substitute/{selected_number}")
async def substitute_original(
    selected_number: int, body: UserRequest, request: Request
) -> SelectionResponse:
    """Apply the substitute the user picked."""
    container: AppContainer = request.app.state.container
    result = await container.cooking_manager.resolve_by_selection(
        body.user_id, selected_number
    )
    return SelectionResponse(ingredient=result.ingredient, original=result.original)


@router.post("/block")
async def block_substitution(body: UserRequest, request: Request) -> BlockResponse:
    """Refuse the pending proposal."""
    container: AppContainer = request.app.state.container
    result = await container.cooking_manager.resolve_by_blocking(body.user_id)
    return BlockResponse(original=result.original, blocked=result.blocked)


@router.post("/nutri-score")
async def calculate_nutri_score(
    body: UserRequest, request: Request
) -> RescoreResponse:
    """Compare the canonical and personalized recipe scores."""
    container: AppContainer = request.app.state.container
    report = await container.cooking_manager.rescore_after_resolution(body.user_id)
    return RescoreResponse(
        old_score=report.before.score,
        new_score=report.after.score,
        old_grade=report.before.grade,
        new_grade=report.after.grade,
        old_weight=report.before.weight_g,
        new_weight=report.after.weight_g,
        old_values=_nutrient_values(report.before.nutrients),
        new_values=_nutrient_values(report.after.nutrients),
    )


def _proposal_response(proposal: Proposal) -> ProposalResponse:
    return ProposalResponse(
        available=proposal.available,
        original=proposal.original_name,
        substitutes=[
            SubstituteView(
                ingredient_id=candidate.ingredient_id,
                name=candidate.name,
                amount=candidate.amount,
            )
            for candidate in proposal.candidates
        ],
    )


def _nutrient_values(vector: NutrientVector) -> NutrientValues:
    return NutrientValues(
        energy_kj=vector.energy_kj,
        sugars_g=vector.sugars_g,
        saturated_fat_g=vector.saturated_fat_g,
        sodium_mg=vector.sodium_mg,
        fiber_g=vector.fiber_g,
        protein_g=vector.protein_g,
        fruit_veg_nut_g=vector.fruit_veg_nut_g,
    )
