"""Supabase implementation for catalog products."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from grocery_nutrition.domain.nutrition import NutritionalFacts
from grocery_nutrition.domain.products import Product
from grocery_nutrition.domain.reviews import ProductRating
from grocery_nutrition.services.products import ProductRepository

PRODUCTS_TABLE = "products"


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase-backed repository for products and their nutrition."""

    client: Client

    def get_product(self, product_id: str) -> Product | None:
        """Return a product by id, if present."""
        response = (
            self.client.table(PRODUCTS_TABLE)
            .select("*")
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def list_products(self, category: str | None, limit: int) -> list[Product]:
        """Return products ordered by last update."""
        query = self.client.table(PRODUCTS_TABLE).select("*")
        if category:
            query = query.eq("category", category)
        response = query.order("updated_at", desc=True).limit(limit).execute()
        return [_parse_product(row) for row in response.data or []]

    def save_nutrition(self, product_id: str, facts: NutritionalFacts) -> Product:
        """Replace the nutrition document of a product."""
        response = (
            self.client.table(PRODUCTS_TABLE)
            .update(
                {
                    "nutritional_data": facts.to_mapping(),
                    "has_nutritional_info": True,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", product_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product nutrition")
        return _parse_product(response.data[0])

    def save_rating(self, rating: ProductRating) -> Product:
        """Store the aggregated review rating of a product."""
        response = (
            self.client.table(PRODUCTS_TABLE)
            .update(
                {
                    "average_rating": rating.average_rating,
                    "total_reviews": rating.total_reviews,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", rating.product_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update product rating")
        return _parse_product(response.data[0])


def _parse_product(row: dict[str, object]) -> Product:
    """Parse a product row into a domain model."""
    nutrition_raw = row.get("nutritional_data")
    updated_raw = row.get("updated_at")
    price = row.get("price")
    return Product(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        brand=str(row.get("brand") or ""),
        category=str(row.get("category") or ""),
        nutrition=(
            NutritionalFacts.from_mapping(nutrition_raw)
            if isinstance(nutrition_raw, dict)
            else None
        ),
        price=float(price) if price is not None else None,
        average_rating=float(row.get("average_rating") or 0),
        total_reviews=int(row.get("total_reviews") or 0),
        updated_at=(
            datetime.fromisoformat(updated_raw)
            if isinstance(updated_raw, str) and updated_raw
            else None
        ),
    )
