"""Domain models for catalog reference data."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class UnitDescriptor:
    """Unit of an ingredient amount, e.g. 1 piece = 50 g."""

    unit_type: str
    grams_per_unit: float


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient values per 100 g of an ingredient."""

    energy_kj: float = 0.0
    sugars_g: float = 0.0
    saturated_fat_g: float = 0.0
    sodium_mg: float = 0.0
    fiber_g: float = 0.0
    protein_g: float = 0.0
    fruit_veg_nut_pct: float = 0.0


@dataclass(frozen=True)
class Category:
    """Group of ingredients that can replace one another."""

    id: UUID
    name: str


@dataclass(frozen=True)
class Ingredient:
    """Catalog ingredient."""

    id: UUID
    name: str
    unit: UnitDescriptor
    category: Category
    nutrients: NutrientProfile
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class RecipeItem:
    """Ingredient reference and amount in a canonical recipe."""

    ingredient_id: UUID
    amount: float


@dataclass(frozen=True)
class Recipe:
    """Canonical, unpersonalized recipe."""

    id: UUID
    name: str
    items: list[RecipeItem]


@dataclass(frozen=True)
class IngredientCatalog:
    """Resolved set of ingredients needed for one cooking request."""

    ingredients: dict[UUID, Ingredient]

    def get(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if loaded."""
        return self.ingredients.get(ingredient_id)

    def in_category(self, category_id: UUID) -> list[Ingredient]:
        """Return loaded ingredients of a category ordered by id."""
        return sorted(
            (
                ingredient
                for ingredient in self.ingredients.values()
                if ingredient.category.id == category_id
            ),
            key=lambda ingredient: str(ingredient.id),
        )
