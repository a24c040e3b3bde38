"""Domain models for user-submitted nutritional data."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from grocery_nutrition.domain.nutrition import NutritionalFacts


class ContributionStatus(StrEnum):
    """Review state of a contribution."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Contribution:
    """Nutritional data submitted by a user for a product."""

    id: str
    product_id: str
    user_id: str
    facts: NutritionalFacts
    status: ContributionStatus
    created_at: datetime | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
