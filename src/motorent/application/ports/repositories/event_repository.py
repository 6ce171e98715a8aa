"""Business event repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from motorent.domain.entities import BusinessEvent
from motorent.domain.value_objects import EventStatus


class EventRepository(Protocol):
    """Port for business event persistence."""

    async def get_by_id(self, event_id: UUID) -> BusinessEvent | None: ...

    async def list(
        self,
        *,
        status: EventStatus | None = None,
        operation_key: str | None = None,
        limit: int = 50,
    ) -> list[BusinessEvent]: ...

    async def create(self, event: BusinessEvent) -> BusinessEvent: ...

    async def update_status(
        self,
        event_id: UUID,
        status: EventStatus,
        error: str | None = None,
        processed_at: datetime | None = None,
    ) -> None: ...
