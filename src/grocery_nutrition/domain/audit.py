"""Domain models for audit events."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditEvent:
    """A recorded change made by a reviewer."""

    actor_id: str
    entity_type: str
    entity_id: str
    event_type: str
    occurred_at: datetime | None = None
    before: dict[str, object] | None = None
    after: dict[str, object] | None = None
