"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from cooking_companion.api.skill_models import SubstitutionRecordView

if TYPE_CHECKING:
    from cooking_companion.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/history", dependencies=[Depends(require_admin)])
async def substitution_history(
    user_id: UUID, recipe_name: str, request: Request
) -> dict[str, object]:
    """Return the substitution audit trail of a user's recipe."""
    container: AppContainer = request.app.state.container
    records = await container.cooking_manager.substitution_history(
        user_id, recipe_name
    )
    return {
        "records": [
            SubstitutionRecordView(
                id=record.id,
                original_id=record.original_id,
                substitute_id=record.substitute_id,
                amount=record.amount,
                created_at=record.created_at.isoformat(),
            ).model_dump(mode="json")
            for record in records
        ]
    }
