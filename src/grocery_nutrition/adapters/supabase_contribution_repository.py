"""Supabase implementation for nutritional contributions."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from grocery_nutrition.domain.contributions import Contribution, ContributionStatus
from grocery_nutrition.domain.nutrition import NutritionalFacts
from grocery_nutrition.services.contributions import ContributionRepository

CONTRIBUTIONS_TABLE = "nutritional_contributions"


@dataclass
class SupabaseContributionRepository(ContributionRepository):
    """Supabase-backed repository for contributions."""

    client: Client

    def create_contribution(
        self, product_id: str, user_id: str, facts: NutritionalFacts
    ) -> Contribution:
        """Insert a pending contribution."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .insert(
                {
                    "product_id": product_id,
                    "user_id": user_id,
                    "nutritional_data": facts.to_mapping(),
                    "status": ContributionStatus.PENDING.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create contribution")
        return _parse_contribution(response.data[0])

    def get_contribution(self, contribution_id: str) -> Contribution | None:
        """Return a contribution by id, if present."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .select("*")
            .eq("id", contribution_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_contribution(response.data[0])

    def list_pending(self, limit: int) -> list[Contribution]:
        """Return pending contributions, newest first."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .select("*")
            .eq("status", ContributionStatus.PENDING.value)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_contribution(row) for row in response.data or []]

    def mark_reviewed(  # noqa: PLR0913
        self,
        contribution_id: str,
        status: ContributionStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        rejection_reason: str | None = None,
    ) -> Contribution | None:
        """Record the review outcome of a contribution that is still pending."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .update(
                {
                    "status": status.value,
                    "reviewed_by": reviewed_by,
                    "reviewed_at": reviewed_at.isoformat(),
                    "rejection_reason": rejection_reason,
                }
            )
            .eq("id", contribution_id)
            .eq("status", ContributionStatus.PENDING.value)
            .execute()
        )
        if not response.data:
            return None
        return _parse_contribution(response.data[0])

    def reopen(self, contribution_id: str) -> None:
        """Clear the review outcome of a contribution."""
        response = (
            self.client.table(CONTRIBUTIONS_TABLE)
            .update(
                {
                    "status": ContributionStatus.PENDING.value,
                    "reviewed_by": None,
                    "reviewed_at": None,
                    "rejection_reason": None,
                }
            )
            .eq("id", contribution_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to reopen contribution")


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_contribution(row: dict[str, object]) -> Contribution:
    """Parse a contribution row into a domain model."""
    return Contribution(
        id=str(row["id"]),
        product_id=str(row.get("product_id", "")),
        user_id=str(row.get("user_id", "")),
        facts=NutritionalFacts.from_mapping(row.get("nutritional_data") or {}),
        status=ContributionStatus(row.get("status", ContributionStatus.PENDING)),
        created_at=_parse_datetime(row.get("created_at")),
        reviewed_by=row.get("reviewed_by"),
        reviewed_at=_parse_datetime(row.get("reviewed_at")),
        rejection_reason=row.get("rejection_reason"),
    )
