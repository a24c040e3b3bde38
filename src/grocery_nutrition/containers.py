"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from grocery_nutrition.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from grocery_nutrition.adapters.supabase_comparison_repository import (
    SupabaseComparisonRepository,
)
from grocery_nutrition.adapters.supabase_contribution_repository import (
    SupabaseContributionRepository,
)
from grocery_nutrition.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from grocery_nutrition.adapters.supabase_review_repository import (
    SupabaseReviewRepository,
)
from grocery_nutrition.adapters.supabase_stats_repository import (
    SupabaseStatsRepository,
)
from grocery_nutrition.config import Settings
from grocery_nutrition.services.audit import AuditService
from grocery_nutrition.services.contributions import ContributionService
from grocery_nutrition.services.products import ProductService
from grocery_nutrition.services.reviews import ReviewService
from grocery_nutrition.services.saved_comparisons import SavedComparisonService
from grocery_nutrition.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_service: ProductService
    contribution_service: ContributionService
    audit_service: AuditService
    review_service: ReviewService
    comparison_service: SavedComparisonService
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    product_service = ProductService(
        repository=SupabaseProductRepository(supabase_client),
        default_portion_g=resolved_settings.default_portion_g,
        similar_limit=resolved_settings.similar_products_limit,
        candidate_limit=resolved_settings.catalog_candidate_limit,
        browse_limit=resolved_settings.browse_limit,
    )
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    contribution_service = ContributionService(
        repository=SupabaseContributionRepository(supabase_client),
        product_service=product_service,
        audit_service=audit_service,
    )
    return AppContainer(
        settings=resolved_settings,
        product_service=product_service,
        contribution_service=contribution_service,
        audit_service=audit_service,
        review_service=ReviewService(
            repository=SupabaseReviewRepository(supabase_client),
            product_service=product_service,
        ),
        comparison_service=SavedComparisonService(
            repository=SupabaseComparisonRepository(supabase_client),
            product_service=product_service,
        ),
        stats_service=StatsService(SupabaseStatsRepository(supabase_client)),
    )
