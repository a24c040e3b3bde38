"""Domain models for product reviews."""

from dataclasses import dataclass
from datetime import datetime

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    """A user's rating and comment on a product."""

    id: str
    product_id: str
    user_id: str
    rating: int
    username: str | None = None
    comment: str | None = None
    helpful: int = 0
    reported: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProductRating:
    """Aggregated rating of a product over its visible reviews."""

    product_id: str
    average_rating: float
    total_reviews: int
