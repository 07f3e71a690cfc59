"""Access to user constraints owned by the account service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from cooking_companion.domain.errors import NotFoundError
from cooking_companion.domain.models import UserConstraints


class UserConstraintsRepository(Protocol):
    """Persistence interface for user constraints."""

    async def load_user_constraints(self, user_id: UUID) -> UserConstraints | None:
        """Return a user's allergies, dislikes, goal and lifestyle, if present."""


@dataclass
class UserService:
    """Application service for user lookups."""

    repository: UserConstraintsRepository

    async def load_constraints(self, user_id: UUID) -> UserConstraints:
        """Return the user's constraints or raise ``NotFoundError``."""
        constraints = await self.repository.load_user_constraints(user_id)
        if constraints is None:
            raise NotFoundError(f"User {user_id} not found")
        return constraints
