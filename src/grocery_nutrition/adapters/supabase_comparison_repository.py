"""Supabase implementation for saved comparisons."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from grocery_nutrition.domain.comparisons import SavedComparison
from grocery_nutrition.services.saved_comparisons import ComparisonRepository

COMPARISONS_TABLE = "comparisons"


@dataclass
class SupabaseComparisonRepository(ComparisonRepository):
    """Supabase-backed repository for saved comparisons."""

    client: Client

    def create_comparison(
        self, user_id: str, product_ids: Sequence[str]
    ) -> SavedComparison:
        """Insert a private comparison."""
        response = (
            self.client.table(COMPARISONS_TABLE)
            .insert(
                {
                    "user_id": user_id,
                    "product_ids": list(product_ids),
                    "shared": False,
                    "public": False,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save comparison")
        return _parse_comparison(response.data[0])

    def get_comparison(self, comparison_id: str) -> SavedComparison | None:
        """Return a comparison by id, if present."""
        response = (
            self.client.table(COMPARISONS_TABLE)
            .select("*")
            .eq("id", comparison_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_comparison(response.data[0])

    def list_for_user(self, user_id: str) -> list[SavedComparison]:
        """Return a user's comparisons, newest first."""
        response = (
            self.client.table(COMPARISONS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_comparison(row) for row in response.data or []]


def _parse_comparison(row: dict[str, object]) -> SavedComparison:
    created_raw = row.get("created_at")
    return SavedComparison(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        product_ids=tuple(str(item) for item in row.get("product_ids") or ()),
        shared=bool(row.get("shared", False)),
        public=bool(row.get("public", False)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
