"""Pydantic models for voice skill requests and responses."""

from uuid import UUID

from pydantic import BaseModel, Field


class UserRequest(BaseModel):
    """Request carrying the voice platform's resolved user."""

    user_id: UUID


class StartCookingRequest(UserRequest):
    """Request to start cooking a recipe."""

    recipe_name: str = Field(min_length=1)


class SubstituteView(BaseModel):
    """Substitute offered in a proposal."""

    ingredient_id: UUID
    name: str
    amount: float


class ProposalResponse(BaseModel):
    """Proposal payload, or the no-substitution outcome."""

    available: bool
    original: str | None = None
    substitutes: list[SubstituteView] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    """Confirmation of an applied substitution."""

    ingredient: str
    original: str


class BlockResponse(BaseModel):
    """Acknowledgement of a blocked proposal."""

    msg: str = "Success!"
    original: str
    blocked: list[str]


class NutrientValues(BaseModel):
    """Absolute nutrient totals of a recipe."""

    energy_kj: float
    sugars_g: float
    saturated_fat_g: float
    sodium_mg: float
    fiber_g: float
    protein_g: float
    fruit_veg_nut_g: float


class RescoreResponse(BaseModel):
    """Before/after Nutri-Score comparison."""

    old_score: int
    new_score: int
    old_grade: str
    new_grade: str
    old_weight: float
    new_weight: float
    old_values: NutrientValues
    new_values: NutrientValues


class SubstitutionRecordView(BaseModel):
    """Audit entry of an applied substitution."""

    id: UUID
    original_id: UUID
    substitute_id: UUID
    amount: float
    created_at: str
