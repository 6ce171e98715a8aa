"""PostgreSQL invoice repository implementation."""

from psycopg import AsyncConnection, Rollback

from motorent.domain.entities import Invoice

INVOICE_POINT_OF_SALE = 1


def format_invoice_number(point_of_sale: int, number: int) -> str:
    return f"{point_of_sale:04d}-{number:08d}"


class PostgresInvoiceRepository:
    """Invoice repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_payment_id(self, payment_id: str) -> Invoice | None:
        """Get invoice for payment."""
        cur = await self._conn.execute(
            "SELECT id, payment_id, contract_id, number, amount, issued_at "
            "FROM invoice WHERE payment_id = %s",
            (payment_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Invoice(
            id=r[0],
            payment_id=r[1],
            contract_id=r[2],
            number=r[3],
            amount=r[4],
            issued_at=r[5],
        )

    async def create_if_absent(self, invoice: Invoice) -> bool:
        """Conditional insert; unique payment_id decides the winner.

        The number comes from the invoice_counter row, inside a savepoint
        that is rolled back when the insert is skipped.
        """
        async with self._conn.transaction() as tx:
            cur = await self._conn.execute(
                "UPDATE invoice_counter SET last_number = last_number + 1 "
                "WHERE point_of_sale = %s RETURNING last_number",
                (INVOICE_POINT_OF_SALE,),
            )
            r = await cur.fetchone()
            number = format_invoice_number(INVOICE_POINT_OF_SALE, r[0])
            cur = await self._conn.execute(
                "INSERT INTO invoice (id, payment_id, contract_id, number, amount, issued_at) "
                "VALUES (%s, %s, %s, %s, %s, %s) "
                "ON CONFLICT (payment_id) DO NOTHING RETURNING id",
                (
                    invoice.id,
                    invoice.payment_id,
                    invoice.contract_id,
                    number,
                    invoice.amount,
                    invoice.issued_at,
                ),
            )
            if await cur.fetchone() is None:
                raise Rollback(tx)
            invoice.number = number
            return True
        return False
