"""Domain models for platform statistics."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PlatformStats:
    """Catalog-wide counters."""

    total_products: int
    total_contributions: int
    total_reviews: int
    last_updated: datetime
