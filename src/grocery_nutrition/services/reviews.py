"""Product reviews and rating aggregation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from grocery_nutrition.domain.reviews import (
    MAX_RATING,
    MIN_RATING,
    ProductRating,
    Review,
)
from grocery_nutrition.services.products import ProductService
from grocery_nutrition.services.scoring import round_half_up

_logger = logging.getLogger(__name__)


class InvalidReviewError(ValueError):
    """Raised when a review rating is outside the accepted range."""


class ReviewRepository(Protocol):
    """Persistence interface for product reviews."""

    def create_review(  # noqa: PLR0913
        self,
        product_id: str,
        user_id: str,
        rating: int,
        username: str | None,
        comment: str | None,
    ) -> Review:
        """Create a review and return it."""

    def list_reviews(self, product_id: str) -> list[Review]:
        """Return reviews of a product that were not reported, newest first."""


def average_rating(product_id: str, reviews: Iterable[Review]) -> ProductRating:
    """Aggregate visible reviews into a rating rounded to one decimal."""
    ratings = [review.rating for review in reviews if not review.reported]
    if not ratings:
        return ProductRating(product_id=product_id, average_rating=0.0, total_reviews=0)
    average = sum(ratings) / len(ratings)
    return ProductRating(
        product_id=product_id,
        average_rating=round_half_up(average * 10) / 10,
        total_reviews=len(ratings),
    )


@dataclass
class ReviewService:
    """Application service for product reviews."""

    repository: ReviewRepository
    product_service: ProductService

    def add_review(  # noqa: PLR0913
        self,
        product_id: str,
        user_id: str,
        rating: int,
        username: str | None = None,
        comment: str | None = None,
    ) -> tuple[Review, ProductRating]:
        """Store a review and refresh the product's average rating."""
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidReviewError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        self.product_service.get_product(product_id)
        review = self.repository.create_review(
            product_id, user_id, rating, username, comment
        )
        product_rating = self.refresh_rating(product_id)
        _logger.info(
            "Review added: id=%s product_id=%s rating=%s",
            review.id,
            product_id,
            rating,
        )
        return review, product_rating

    def list_reviews(self, product_id: str) -> list[Review]:
        """Return visible reviews for a product."""
        self.product_service.get_product(product_id)
        return self.repository.list_reviews(product_id)

    def refresh_rating(self, product_id: str) -> ProductRating:
        """Recompute and store a product's rating from its reviews."""
        rating = average_rating(product_id, self.repository.list_reviews(product_id))
        self.product_service.update_rating(rating)
        return rating
