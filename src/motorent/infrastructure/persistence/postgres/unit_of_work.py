"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from motorent.infrastructure.persistence.postgres.alert_repository import PostgresAlertRepository
from motorent.infrastructure.persistence.postgres.event_repository import PostgresEventRepository
from motorent.infrastructure.persistence.postgres.invoice_repository import (
    PostgresInvoiceRepository,
)
from motorent.infrastructure.persistence.postgres.payment_repository import (
    PostgresPaymentRepository,
)
from motorent.infrastructure.persistence.postgres.profile_repository import (
    PostgresProfileRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._events = PostgresEventRepository(self._conn)
        self._payments = PostgresPaymentRepository(self._conn)
        self._invoices = PostgresInvoiceRepository(self._conn)
        self._profiles = PostgresProfileRepository(self._conn)
        self._alerts = PostgresAlertRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def events(self) -> PostgresEventRepository:
        return self._events

    @property
    def payments(self) -> PostgresPaymentRepository:
        return self._payments

    @property
    def invoices(self) -> PostgresInvoiceRepository:
        return self._invoices

    @property
    def profiles(self) -> PostgresProfileRepository:
        return self._profiles

    @property
    def alerts(self) -> PostgresAlertRepository:
        return self._alerts

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
