"""Saved multi-product comparisons."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from grocery_nutrition.domain.comparisons import SavedComparison
from grocery_nutrition.domain.nutrition import MetricLeaders
from grocery_nutrition.services.comparison import COMPARISON_METRICS, metric_leaders
from grocery_nutrition.services.products import ProductService

_logger = logging.getLogger(__name__)

MIN_PRODUCTS = 2


class InvalidComparisonError(ValueError):
    """Raised when a comparison names fewer than two distinct products."""


class ComparisonNotFoundError(LookupError):
    """Raised when a saved comparison id does not exist."""


class ComparisonRepository(Protocol):
    """Persistence interface for saved comparisons."""

    def create_comparison(
        self, user_id: str, product_ids: Sequence[str]
    ) -> SavedComparison:
        """Store a comparison and return it."""

    def get_comparison(self, comparison_id: str) -> SavedComparison | None:
        """Return a saved comparison by id, if present."""

    def list_for_user(self, user_id: str) -> list[SavedComparison]:
        """Return a user's comparisons, newest first."""


@dataclass
class SavedComparisonService:
    """Application service for saving and summarizing comparisons."""

    repository: ComparisonRepository
    product_service: ProductService

    def save(self, user_id: str, product_ids: Sequence[str]) -> SavedComparison:
        """Save a comparison of two or more existing products."""
        unique_ids = list(dict.fromkeys(product_ids))
        if len(unique_ids) < MIN_PRODUCTS:
            raise InvalidComparisonError(
                "A comparison needs at least two different products"
            )
        for product_id in unique_ids:
            self.product_service.get_product(product_id)
        comparison = self.repository.create_comparison(user_id, unique_ids)
        _logger.info(
            "Comparison saved: id=%s user_id=%s products=%s",
            comparison.id,
            user_id,
            len(unique_ids),
        )
        return comparison

    def list_for_user(self, user_id: str) -> list[SavedComparison]:
        """Return the comparisons a user saved."""
        return self.repository.list_for_user(user_id)

    def get(self, comparison_id: str) -> SavedComparison:
        """Return a saved comparison or raise ComparisonNotFoundError."""
        comparison = self.repository.get_comparison(comparison_id)
        if comparison is None:
            raise ComparisonNotFoundError(comparison_id)
        return comparison

    def leaders(self, comparison: SavedComparison) -> list[MetricLeaders]:
        """Return best and worst products per metric for a saved comparison.

        Products that are gone or lack nutritional facts are left out.
        """
        entries = []
        for product_id in comparison.product_ids:
            product = self.product_service.repository.get_product(product_id)
            if product is not None and product.nutrition is not None:
                entries.append((product.id, product.nutrition))
        results = []
        for metric, _ in COMPARISON_METRICS:
            leaders = metric_leaders(entries, metric)
            if leaders is not None:
                results.append(leaders)
        return results
