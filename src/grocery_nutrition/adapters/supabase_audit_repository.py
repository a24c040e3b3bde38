"""Supabase repository for audit events."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from grocery_nutrition.domain.audit import AuditEvent
from grocery_nutrition.services.audit import AuditRepository

AUDIT_TABLE = "audit_events"


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_event(self, event: AuditEvent) -> None:
        """Insert an audit event row."""
        self.client.table(AUDIT_TABLE).insert(
            {
                "actor_id": event.actor_id,
                "entity_type": event.entity_type,
                "entity_id": event.entity_id,
                "event_type": event.event_type,
                "before_json": event.before,
                "after_json": event.after,
                "created_at": (
                    event.occurred_at.isoformat() if event.occurred_at else None
                ),
            }
        ).execute()

    def list_events(
        self, entity_type: str, entity_id: str, limit: int
    ) -> list[AuditEvent]:
        """Return events for one entity, newest first."""
        response = (
            self.client.table(AUDIT_TABLE)
            .select("*")
            .eq("entity_type", entity_type)
            .eq("entity_id", entity_id)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_event(row) for row in response.data or []]


def _parse_event(row: dict[str, object]) -> AuditEvent:
    created_raw = row.get("created_at")
    return AuditEvent(
        actor_id=str(row.get("actor_id") or ""),
        entity_type=str(row.get("entity_type") or ""),
        entity_id=str(row.get("entity_id") or ""),
        event_type=str(row.get("event_type") or ""),
        occurred_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        before=row.get("before_json"),
        after=row.get("after_json"),
    )
