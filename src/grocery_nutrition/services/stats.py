"""Catalog-wide statistics."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from grocery_nutrition.domain.stats import PlatformStats


class StatsRepository(Protocol):
    """Persistence interface for catalog counters."""

    def count_products_with_nutrition(self) -> int:
        """Return how many products carry nutritional facts."""

    def count_approved_contributions(self) -> int:
        """Return how many contributions were approved."""

    def count_reviews(self) -> int:
        """Return how many reviews exist."""


@dataclass
class StatsService:
    """Service for platform statistics."""

    repository: StatsRepository

    def platform_stats(self) -> PlatformStats:
        """Return current catalog counters."""
        return PlatformStats(
            total_products=self.repository.count_products_with_nutrition(),
            total_contributions=self.repository.count_approved_contributions(),
            total_reviews=self.repository.count_reviews(),
            last_updated=datetime.now(tz=UTC),
        )
