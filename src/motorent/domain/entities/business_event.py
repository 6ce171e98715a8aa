"""Business event - record that an operation happened on an entity."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from motorent.domain.value_objects.event_status import EventStatus


@dataclass(frozen=True)
class BusinessEvent:
    """Immutable event record; only delivery status is ever replaced."""

    id: UUID
    operation_key: str
    entity_type: str
    entity_id: str
    created_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)
    acting_user_id: str | None = None
    parent_event_id: UUID | None = None
    status: EventStatus = EventStatus.PENDING
    error: str | None = None
    processed_at: datetime | None = None

    def with_status(
        self,
        status: EventStatus,
        *,
        error: str | None = None,
        processed_at: datetime | None = None,
    ) -> "BusinessEvent":
        """Copy of the event carrying a new delivery status."""
        return replace(self, status=status, error=error, processed_at=processed_at)
