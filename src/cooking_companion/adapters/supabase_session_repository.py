"""Supabase-backed cooking session repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import AsyncClient

from cooking_companion.domain.sessions import (
    CookingSession,
    Proposal,
    ProposedSubstitute,
)
from cooking_companion.services.cooking import CookingSessionRepository

_SESSION_COLUMNS = (
    "id, user_id, personalized_recipe_id, status, proposal_json, created_at"
)


@dataclass
class SupabaseSessionRepository(CookingSessionRepository):
    """Supabase implementation keyed by user, one row per user."""

    client: AsyncClient

    async def save_session(self, session: CookingSession) -> None:
        """Upsert the user's session row."""
        response = await (
            self.client.table("cooking_sessions")
            .upsert(
                {
                    "id": str(session.id),
                    "user_id": str(session.user_id),
                    "personalized_recipe_id": str(session.personalized_recipe_id),
                    "status": session.status,
                    "proposal_json": _proposal_to_json(session.proposal),
                    "created_at": session.created_at.isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save cooking session")

    async def load_session(self, user_id: UUID) -> CookingSession | None:
        """Return the user's session, if present."""
        response = await (
            self.client.table("cooking_sessions")
            .select(_SESSION_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    async def clear_session(self, user_id: UUID) -> None:
        """Delete any session row of the user."""
        await (
            self.client.table("cooking_sessions")
            .delete()
            .eq("user_id", str(user_id))
            .execute()
        )

    async def transition_session(
        self, session_id: UUID, from_status: str, to_status: str
    ) -> bool:
        """Compare-and-swap the session status."""
        response = await (
            self.client.table("cooking_sessions")
            .update(
                {
                    "status": to_status,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(session_id))
            .eq("status", from_status)
            .execute()
        )
        return bool(response.data)


def _proposal_to_json(proposal: Proposal) -> dict[str, object]:
    return {
        "original_id": str(proposal.original_id) if proposal.original_id else None,
        "original_name": proposal.original_name,
        "candidates": [
            {
                "ingredient_id": str(candidate.ingredient_id),
                "name": candidate.name,
                "amount": candidate.amount,
            }
            for candidate in proposal.candidates
        ],
    }


def _parse_proposal(raw: dict[str, object] | None) -> Proposal:
    if not raw:
        return Proposal()
    original_id = raw.get("original_id")
    return Proposal(
        original_id=UUID(str(original_id)) if original_id else None,
        original_name=raw.get("original_name"),
        candidates=[
            ProposedSubstitute(
                ingredient_id=UUID(str(item["ingredient_id"])),
                name=str(item.get("name", "")),
                amount=float(item.get("amount", 0.0)),
            )
            for item in raw.get("candidates", [])
        ],
    )


def _parse_session(row: dict[str, object]) -> CookingSession:
    """Parse a session row into a domain model."""
    return CookingSession(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        personalized_recipe_id=UUID(row["personalized_recipe_id"]),
        status=str(row["status"]),
        proposal=_parse_proposal(row.get("proposal_json")),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
