"""Audit trail for contribution reviews."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from grocery_nutrition.domain.audit import AuditEvent
from grocery_nutrition.domain.contributions import Contribution
from grocery_nutrition.domain.nutrition import NutritionalFacts

NUTRITION_ENTITY = "product_nutrition"
CONTRIBUTION_ENTITY = "contribution"


class AuditRepository(Protocol):
    """Persistence interface for audit events."""

    def create_event(self, event: AuditEvent) -> None:
        """Store an audit event."""

    def list_events(
        self, entity_type: str, entity_id: str, limit: int
    ) -> list[AuditEvent]:
        """Return events for one entity, newest first."""


@dataclass
class AuditService:
    """Records who changed a product's nutrition and why."""

    repository: AuditRepository

    def record_approval(
        self,
        admin_id: str,
        contribution: Contribution,
        before: NutritionalFacts | None,
        after: NutritionalFacts | None,
    ) -> AuditEvent:
        """Record the nutrition change caused by an approved contribution."""
        event = AuditEvent(
            actor_id=admin_id,
            entity_type=NUTRITION_ENTITY,
            entity_id=contribution.product_id,
            event_type="contribution_approved",
            occurred_at=datetime.now(tz=UTC),
            before=before.to_mapping() if before else None,
            after={
                **(after.to_mapping() if after else {}),
                "contributionId": contribution.id,
                "contributedBy": contribution.user_id,
            },
        )
        self.repository.create_event(event)
        return event

    def record_rejection(
        self, admin_id: str, contribution: Contribution, reason: str | None
    ) -> AuditEvent:
        """Record a rejected contribution."""
        event = AuditEvent(
            actor_id=admin_id,
            entity_type=CONTRIBUTION_ENTITY,
            entity_id=contribution.id,
            event_type="contribution_rejected",
            occurred_at=datetime.now(tz=UTC),
            after={"productId": contribution.product_id, "reason": reason},
        )
        self.repository.create_event(event)
        return event

    def nutrition_history(self, product_id: str, limit: int = 20) -> list[AuditEvent]:
        """Return approved nutrition changes for a product, newest first."""
        return self.repository.list_events(NUTRITION_ENTITY, product_id, limit)
