"""Supabase implementation for product reviews."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from grocery_nutrition.domain.reviews import Review
from grocery_nutrition.services.reviews import ReviewRepository

REVIEWS_TABLE = "reviews"


@dataclass
class SupabaseReviewRepository(ReviewRepository):
    """Supabase-backed repository for reviews."""

    client: Client

    def create_review(  # noqa: PLR0913
        self,
        product_id: str,
        user_id: str,
        rating: int,
        username: str | None,
        comment: str | None,
    ) -> Review:
        """Insert a review."""
        response = (
            self.client.table(REVIEWS_TABLE)
            .insert(
                {
                    "product_id": product_id,
                    "user_id": user_id,
                    "username": username,
                    "rating": rating,
                    "comment": comment,
                    "helpful": 0,
                    "reported": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create review")
        return _parse_review(response.data[0])

    def list_reviews(self, product_id: str) -> list[Review]:
        """Return reviews that were not reported, newest first."""
        response = (
            self.client.table(REVIEWS_TABLE)
            .select("*")
            .eq("product_id", product_id)
            .eq("reported", False)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_review(row) for row in response.data or []]


def _parse_review(row: dict[str, object]) -> Review:
    created_raw = row.get("created_at")
    return Review(
        id=str(row["id"]),
        product_id=str(row.get("product_id", "")),
        user_id=str(row.get("user_id", "")),
        rating=int(row.get("rating") or 0),
        username=row.get("username"),
        comment=row.get("comment"),
        helpful=int(row.get("helpful") or 0),
        reported=bool(row.get("reported", False)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
