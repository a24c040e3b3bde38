"""Catalog filtering and sorting."""

from collections.abc import Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from grocery_nutrition.domain.products import Product

ALL_CATEGORIES = "all"
SORT_KEYS = ("score", "calories", "protein", "name", "brand", "updated")


class ProductFilters(BaseModel):
    """Advanced search filters for the product catalog."""

    category: str | None = None
    min_score: float | None = Field(default=None, ge=0, le=10)
    max_calories: float | None = Field(default=None, ge=0)
    is_vegan: bool = False
    is_gluten_free: bool = False
    is_organic: bool = False
    exclude_allergens: list[str] = Field(default_factory=list)


def filter_products(
    products: Iterable[Product], filters: ProductFilters
) -> list[Product]:
    """Return products matching every active filter.

    Nutrition-based filters only apply to products with nutritional facts.
    """
    return [product for product in products if _matches(product, filters)]


def _matches(product: Product, filters: ProductFilters) -> bool:  # noqa: PLR0911
    if filters.category and filters.category != ALL_CATEGORIES:
        if product.category != filters.category:
            return False

    facts = product.nutrition
    if facts is None:
        return True
    if filters.min_score and (facts.score or 0) < filters.min_score:
        return False
    if filters.max_calories and facts.calories > filters.max_calories:
        return False
    if filters.is_vegan and not facts.is_vegan:
        return False
    if filters.is_gluten_free and not facts.is_gluten_free:
        return False
    if filters.is_organic and not facts.is_organic:
        return False
    if filters.exclude_allergens and facts.allergens.intersection(
        filters.exclude_allergens
    ):
        return False
    return True


def sort_products(
    products: Iterable[Product], sort_by: str, order: str = "desc"
) -> list[Product]:
    """Return products sorted by a catalog key; unknown keys keep input order."""
    items = list(products)
    if sort_by not in SORT_KEYS:
        return items
    return sorted(items, key=_SORT_KEY_FUNCS[sort_by], reverse=order != "asc")


def _score_key(product: Product) -> float:
    return (product.nutrition.score or 0) if product.nutrition else 0


def _calories_key(product: Product) -> float:
    return product.nutrition.calories if product.nutrition else 0


def _protein_key(product: Product) -> float:
    return product.nutrition.proteins if product.nutrition else 0


def _updated_key(product: Product) -> datetime:
    return product.updated_at or datetime.min.replace(tzinfo=UTC)


_SORT_KEY_FUNCS = {
    "score": _score_key,
    "calories": _calories_key,
    "protein": _protein_key,
    "name": lambda product: product.name.lower(),
    "brand": lambda product: product.brand.lower(),
    "updated": _updated_key,
}
