"""Domain models for catalog products."""

from dataclasses import dataclass
from datetime import datetime

from grocery_nutrition.domain.nutrition import NutritionalFacts


@dataclass(frozen=True)
class Product:
    """A catalog product with optional nutritional facts."""

    id: str
    name: str
    brand: str
    category: str
    nutrition: NutritionalFacts | None = None
    price: float | None = None
    average_rating: float = 0.0
    total_reviews: int = 0
    updated_at: datetime | None = None

    @property
    def has_nutritional_info(self) -> bool:
        return self.nutrition is not None


@dataclass(frozen=True)
class SimilarProduct:
    """A candidate product paired with its similarity to a reference."""

    product: Product
    similarity: float
