"""Domain models for cooking sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

PROPOSED = "PROPOSED"
APPLIED = "APPLIED"
BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class ProposedSubstitute:
    """Ranked substitute offered to the user."""

    ingredient_id: UUID
    name: str
    amount: float


@dataclass(frozen=True)
class Proposal:
    """Pending substitution proposal.

    ``original_id`` is ``None`` when nothing could be suggested.
    """

    original_id: UUID | None = None
    original_name: str | None = None
    candidates: list[ProposedSubstitute] = field(default_factory=list)

    @property
    def available(self) -> bool:
        """Return true when there is at least one substitute to pick."""
        return self.original_id is not None and bool(self.candidates)


@dataclass(frozen=True)
class CookingSession:
    """Represents the single active cooking session of a user."""

    id: UUID
    user_id: UUID
    personalized_recipe_id: UUID
    status: str
    proposal: Proposal
    created_at: datetime
