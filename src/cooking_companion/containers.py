"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient

from cooking_companion.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from cooking_companion.adapters.supabase_personalized_recipe_repository import (
    SupabasePersonalizedRecipeRepository,
)
from cooking_companion.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from cooking_companion.adapters.supabase_substitution_repository import (
    SupabaseSubstitutionRepository,
)
from cooking_companion.adapters.supabase_user_repository import SupabaseUserRepository
from cooking_companion.config import Settings
from cooking_companion.services.cache import InMemoryReferenceCache
from cooking_companion.services.catalog import CatalogService
from cooking_companion.services.cooking import CookingSessionManager
from cooking_companion.services.nutrition import NutritionAggregator
from cooking_companion.services.recipes import PersonalizedRecipeService
from cooking_companion.services.scoring import NutriScoreCalculator, load_scoring_table
from cooking_companion.services.substitutions import SubstitutionApplier
from cooking_companion.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cooking_manager: CookingSessionManager
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    recipe_repository = SupabasePersonalizedRecipeRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    substitution_repository = SupabaseSubstitutionRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)

    catalog_service = CatalogService(
        repository=catalog_repository,
        cache=InMemoryReferenceCache(),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    cooking_manager = CookingSessionManager(
        catalog_service=catalog_service,
        recipe_service=PersonalizedRecipeService(recipe_repository),
        user_service=UserService(user_repository),
        session_repository=session_repository,
        applier=SubstitutionApplier(
            record_repository=substitution_repository,
            recipe_repository=recipe_repository,
        ),
        aggregator=NutritionAggregator(),
        calculator=NutriScoreCalculator(
            load_scoring_table(resolved_settings.scoring_table_path)
        ),
        max_candidates=resolved_settings.max_candidates,
    )

    async def close_resources() -> None:
        await supabase_client.postgrest.aclose()

    return AppContainer(
        settings=resolved_settings,
        cooking_manager=cooking_manager,
        close_resources=close_resources,
    )
