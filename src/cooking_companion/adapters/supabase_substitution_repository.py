"""Supabase repository for the substitution audit trail."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import AsyncClient

from cooking_companion.domain.models import SubstitutionRecord
from cooking_companion.services.substitutions import SubstitutionRecordRepository


@dataclass
class SupabaseSubstitutionRepository(SubstitutionRecordRepository):
    """Supabase-backed, insert-only substitution records."""

    client: AsyncClient

    async def append_record(self, record: SubstitutionRecord) -> None:
        """Insert a substitution record row."""
        response = await (
            self.client.table("substitution_records")
            .insert(
                {
                    "id": str(record.id),
                    "personalized_recipe_id": str(record.personalized_recipe_id),
                    "original_id": str(record.original_id),
                    "substitute_id": str(record.substitute_id),
                    "amount": record.amount,
                    "created_at": record.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to record substitution")

    async def list_records(
        self, personalized_recipe_id: UUID
    ) -> list[SubstitutionRecord]:
        """Return records of a personalized recipe, oldest first."""
        response = await (
            self.client.table("substitution_records")
            .select("*")
            .eq("personalized_recipe_id", str(personalized_recipe_id))
            .order("created_at")
            .execute()
        )
        return [
            SubstitutionRecord(
                id=UUID(row["id"]),
                personalized_recipe_id=UUID(row["personalized_recipe_id"]),
                original_id=UUID(row["original_id"]),
                substitute_id=UUID(row["substitute_id"]),
                amount=float(row["amount"]),
                created_at=datetime.fromisoformat(row["created_at"]),
            )
            for row in response.data or []
        ]
