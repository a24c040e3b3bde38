"""Product nutrition service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from grocery_nutrition.domain.nutrition import (
    ComparisonError,
    ComparisonResult,
    Nutrient,
    NutritionalFacts,
)
from grocery_nutrition.domain.products import Product, SimilarProduct
from grocery_nutrition.domain.reviews import ProductRating
from grocery_nutrition.services import scoring
from grocery_nutrition.services.catalog import (
    ALL_CATEGORIES,
    ProductFilters,
    filter_products,
    sort_products,
)
from grocery_nutrition.services.comparison import compare
from grocery_nutrition.services.similarity import rank_similar
from grocery_nutrition.services.validation import (
    format_allergens,
    generate_recommendations,
    nutritional_summary,
)

_logger = logging.getLogger(__name__)

PROFILE_NUTRIENTS = (
    Nutrient.CALORIES,
    Nutrient.PROTEIN,
    Nutrient.CARBS,
    Nutrient.FATS,
    Nutrient.SATURATED_FATS,
    Nutrient.FIBER,
    Nutrient.SODIUM,
    Nutrient.SUGAR,
)


class ProductNotFoundError(LookupError):
    """Raised when a product id does not exist."""


class ProductRepository(Protocol):
    """Persistence interface for catalog products."""

    def get_product(self, product_id: str) -> Product | None:
        """Return a product by id, if present."""

    def list_products(self, category: str | None, limit: int) -> list[Product]:
        """Return products, optionally restricted to one category."""

    def save_nutrition(self, product_id: str, facts: NutritionalFacts) -> Product:
        """Store a new nutrition record for a product and return the product."""

    def save_rating(self, rating: ProductRating) -> Product:
        """Store the aggregated review rating of a product."""


@dataclass
class ProductService:
    """Application service exposing nutrition features for products."""

    repository: ProductRepository
    default_portion_g: float = 100
    similar_limit: int = 5
    candidate_limit: int = 200
    browse_limit: int = 50

    def get_product(self, product_id: str) -> Product:
        """Return a product or raise ProductNotFoundError."""
        product = self.repository.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def nutrition_profile(
        self, product_id: str, portion_g: float | None = None
    ) -> dict[str, object]:
        """Return score, labels and advice for a product's nutrition."""
        product = self.get_product(product_id)
        facts = product.nutrition
        portion = portion_g or self.default_portion_g
        if facts is None:
            return {
                "product_id": product.id,
                "has_nutritional_info": False,
                "summary": nutritional_summary(None),
            }

        value = scoring.score(facts)
        score_category = scoring.category(value)
        return {
            "product_id": product.id,
            "has_nutritional_info": True,
            "portion_g": portion,
            "facts": facts.to_mapping(),
            "score": value,
            "category": {
                "label": score_category.label,
                "severity": score_category.severity,
                "description": score_category.description,
            },
            "traffic_lights": {
                nutrient.value: scoring.traffic_light(
                    facts.value_of(nutrient), nutrient, portion
                ).value
                for nutrient in scoring.TRAFFIC_LIGHT_THRESHOLDS
            },
            "daily_values": {
                nutrient.value: scoring.daily_value_percentage(
                    facts.value_of(nutrient), nutrient, portion
                )
                for nutrient in PROFILE_NUTRIENTS
            },
            "allergens": format_allergens(sorted(facts.allergens)),
            "recommendations": [
                {
                    "type": item.kind,
                    "message": item.message,
                    "priority": item.priority,
                }
                for item in generate_recommendations(facts)
            ],
            "summary": nutritional_summary(facts),
        }

    def compare_products(
        self, product_id_a: str, product_id_b: str
    ) -> ComparisonResult | ComparisonError:
        """Compare two products; missing products become a structured error."""
        product_a = self.repository.get_product(product_id_a)
        product_b = self.repository.get_product(product_id_b)
        if product_a is None or product_b is None:
            missing = product_id_a if product_a is None else product_id_b
            return ComparisonError(message=f"Product not found: {missing}")
        return compare(
            product_a.nutrition,
            product_b.nutrition,
            label_a=product_a.brand or product_a.name,
            label_b=product_b.brand or product_b.name,
        )

    def similar_products(
        self, product_id: str, limit: int | None = None
    ) -> list[SimilarProduct]:
        """Return products similar to the given one, most similar first."""
        reference = self.get_product(product_id)
        candidates = self.repository.list_products(
            reference.category, self.candidate_limit
        )
        return list(rank_similar(reference, candidates, limit or self.similar_limit))

    def browse(
        self,
        filters: ProductFilters,
        sort_by: str | None = None,
        order: str = "desc",
        limit: int | None = None,
    ) -> list[Product]:
        """Return catalog products matching filters in the requested order.

        Filters and sorting run over up to candidate_limit products of the
        category; the limit only applies to the final page.
        """
        category = filters.category if filters.category != ALL_CATEGORIES else None
        resolved_limit = limit or self.browse_limit
        candidates = self.repository.list_products(
            category, max(self.candidate_limit, resolved_limit)
        )
        products = filter_products(candidates, filters)
        if sort_by:
            products = sort_products(products, sort_by, order)
        return products[:resolved_limit]

    def update_nutrition(self, product_id: str, facts: NutritionalFacts) -> Product:
        """Score facts and store them as the product's new nutrition record."""
        self.get_product(product_id)
        scored = scoring.with_score(facts)
        product = self.repository.save_nutrition(product_id, scored)
        _logger.info(
            "Nutrition updated: product_id=%s score=%s", product_id, scored.score
        )
        return product

    def update_rating(self, rating: ProductRating) -> Product:
        """Store a recomputed review rating for a product."""
        product = self.repository.save_rating(rating)
        _logger.info(
            "Rating updated: product_id=%s average=%s reviews=%s",
            rating.product_id,
            rating.average_rating,
            rating.total_reviews,
        )
        return product
