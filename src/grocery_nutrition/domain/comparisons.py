"""Domain models for saved product comparisons."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SavedComparison:
    """A set of products a user chose to compare."""

    id: str
    user_id: str
    product_ids: tuple[str, ...]
    shared: bool = False
    public: bool = False
    created_at: datetime | None = None
