"""Supabase-backed user constraints repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from cooking_companion.domain.models import Lifestyle, NutritionGoal, UserConstraints
from cooking_companion.services.users import UserConstraintsRepository


@dataclass
class SupabaseUserRepository(UserConstraintsRepository):
    """Supabase implementation reading the account service's constraint view."""

    client: AsyncClient

    async def load_user_constraints(self, user_id: UUID) -> UserConstraints | None:
        """Return constraints for a user, if the user exists."""
        response = await (
            self.client.table("user_constraints")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        goal = None
        if row.get("goal_nutrient"):
            goal = NutritionGoal(
                name=str(row.get("goal_name") or row["goal_nutrient"]),
                nutrient=str(row["goal_nutrient"]),
                direction=str(row.get("goal_direction") or "lower"),
            )
        lifestyle = None
        if row.get("lifestyle_name"):
            lifestyle = Lifestyle(
                name=str(row["lifestyle_name"]),
                excluded_tags=frozenset(row.get("lifestyle_excluded_tags") or []),
            )
        return UserConstraints(
            user_id=UUID(row["user_id"]),
            allergies=frozenset(row.get("allergies") or []),
            dislikes=frozenset(UUID(value) for value in row.get("dislikes") or []),
            goal=goal,
            lifestyle=lifestyle,
        )
