"""PostgreSQL alert repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from motorent.domain.entities import Alert


class PostgresAlertRepository:
    """Alert repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, alert: Alert) -> Alert:
        """Create alert."""
        await self._conn.execute(
            "INSERT INTO alert (id, kind, message, contract_id, created_at) "
            "VALUES (%s, %s, %s, %s, %s)",
            (alert.id, alert.kind, alert.message, alert.contract_id, alert.created_at),
        )
        return alert

    async def find_recent(self, contract_id: str, kind: str, since: datetime) -> Alert | None:
        """Most recent alert of kind for contract created after since."""
        cur = await self._conn.execute(
            "SELECT id, kind, message, created_at, contract_id FROM alert "
            "WHERE contract_id = %s AND kind = %s AND created_at >= %s "
            "ORDER BY created_at DESC LIMIT 1",
            (contract_id, kind, since),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Alert(id=r[0], kind=r[1], message=r[2], created_at=r[3], contract_id=r[4])
