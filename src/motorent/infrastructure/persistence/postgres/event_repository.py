"""PostgreSQL business event repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from motorent.domain.entities import BusinessEvent
from motorent.domain.value_objects import EventStatus

_COLUMNS = (
    "id, operation_key, entity_type, entity_id, payload, acting_user_id, "
    "parent_event_id, status, error, created_at, processed_at"
)


def _row_to_event(r: tuple) -> BusinessEvent:
    return BusinessEvent(
        id=r[0],
        operation_key=r[1],
        entity_type=r[2],
        entity_id=r[3],
        payload=r[4] or {},
        acting_user_id=r[5],
        parent_event_id=r[6],
        status=EventStatus(r[7]),
        error=r[8],
        created_at=r[9],
        processed_at=r[10],
    )


class PostgresEventRepository:
    """Business event repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, event_id: UUID) -> BusinessEvent | None:
        """Get event by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM business_event WHERE id = %s",
            (event_id,),
        )
        r = await cur.fetchone()
        return _row_to_event(r) if r else None

    async def list(
        self,
        *,
        status: EventStatus | None = None,
        operation_key: str | None = None,
        limit: int = 50,
    ) -> list[BusinessEvent]:
        """List most recent events, optionally filtered."""
        clauses = []
        params: list = []
        if status is not None:
            clauses.append("status = %s")
            params.append(status.value)
        if operation_key is not None:
            clauses.append("operation_key = %s")
            params.append(operation_key)
        where = f"WHERE {' AND '.join(clauses)} " if clauses else ""
        params.append(limit)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM business_event {where}ORDER BY created_at DESC LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        return [_row_to_event(r) for r in rows]

    async def create(self, event: BusinessEvent) -> BusinessEvent:
        """Create event."""
        await self._conn.execute(
            f"INSERT INTO business_event ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                event.id,
                event.operation_key,
                event.entity_type,
                event.entity_id,
                Jsonb(event.payload),
                event.acting_user_id,
                event.parent_event_id,
                event.status.value,
                event.error,
                event.created_at,
                event.processed_at,
            ),
        )
        return event

    async def update_status(
        self,
        event_id: UUID,
        status: EventStatus,
        error: str | None = None,
        processed_at: datetime | None = None,
    ) -> None:
        """Record delivery status."""
        await self._conn.execute(
            "UPDATE business_event SET status=%s, error=%s, processed_at=%s WHERE id=%s",
            (status.value, error, processed_at, event_id),
        )
