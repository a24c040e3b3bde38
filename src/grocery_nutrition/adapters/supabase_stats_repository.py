"""Supabase implementation for catalog counters."""

from dataclasses import dataclass

from supabase import Client

from grocery_nutrition.adapters.supabase_contribution_repository import (
    CONTRIBUTIONS_TABLE,
)
from grocery_nutrition.adapters.supabase_product_repository import PRODUCTS_TABLE
from grocery_nutrition.adapters.supabase_review_repository import REVIEWS_TABLE
from grocery_nutrition.domain.contributions import ContributionStatus
from grocery_nutrition.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Counts rows with exact PostgREST counts."""

    client: Client

    def count_products_with_nutrition(self) -> int:
        """Return how many products carry nutritional facts."""
        response = (
            self.client.table(PRODUCTS_TABLE)
            .select("id", count="exact")
            .eq("has_nutritional_info", True)
            .execute()
        )
        return response.count or 0

    def count_approved_contributions(self) -> int:
        """Return how many contributions were approved."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .select("id", count="exact")
            .eq("status", ContributionStatus.APPROVED.value)
            .execute()
        )
        return response.count or 0

    def count_reviews(self) -> int:
        """Return how many reviews exist."""
        response = (
            self.client.table(REVIEWS_TABLE).select("id", count="exact").execute()
        )
        return response.count or 0
