"""PostgreSQL payment repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from motorent.domain.entities import Payment
from motorent.domain.value_objects import PaymentStatus

_COLUMNS = (
    "p.id, p.contract_id, p.amount, p.status, p.created_at, p.method, "
    "p.paid_at, p.notes, p.due_at, p.external_id"
)


def _row_to_payment(r: tuple) -> Payment:
    return Payment(
        id=r[0],
        contract_id=r[1],
        amount=r[2],
        status=PaymentStatus(r[3]),
        created_at=r[4],
        method=r[5],
        paid_at=r[6],
        notes=r[7],
        due_at=r[8],
        external_id=r[9],
    )


class PostgresPaymentRepository:
    """Payment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, payment_id: str) -> Payment | None:
        """Get payment by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payment p WHERE p.id = %s",
            (payment_id,),
        )
        r = await cur.fetchone()
        return _row_to_payment(r) if r else None

    async def update(self, payment: Payment) -> None:
        """Update mutable payment fields."""
        await self._conn.execute(
            "UPDATE payment SET status=%s, method=%s, paid_at=%s, notes=%s, external_id=%s "
            "WHERE id=%s",
            (
                payment.status.value,
                payment.method,
                payment.paid_at,
                payment.notes,
                payment.external_id,
                payment.id,
            ),
        )

    async def list_approved_without_invoice(
        self, paid_before: datetime, limit: int = 100
    ) -> list[Payment]:
        """Approved payments paid before cutoff that have no invoice."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payment p "
            "LEFT JOIN invoice i ON i.payment_id = p.id "
            "WHERE p.status = %s AND i.id IS NULL AND p.paid_at < %s "
            "ORDER BY p.paid_at LIMIT %s",
            (PaymentStatus.APROBADO.value, paid_before, limit),
        )
        rows = await cur.fetchall()
        return [_row_to_payment(r) for r in rows]

    async def count_by_contract(self, contract_id: str, status: PaymentStatus) -> int:
        """Count payments of a contract in a status."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM payment WHERE contract_id = %s AND status = %s",
            (contract_id, status.value),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def list_by_contract(
        self, contract_id: str, created_since: datetime
    ) -> list[Payment]:
        """Payments of a contract created at or after created_since, oldest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM payment p "
            "WHERE p.contract_id = %s AND p.created_at >= %s "
            "ORDER BY p.created_at",
            (contract_id, created_since),
        )
        rows = await cur.fetchall()
        return [_row_to_payment(r) for r in rows]
