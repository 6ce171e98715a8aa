"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from motorent.application.ports.repositories import (
    AlertRepository,
    EventRepository,
    InvoiceRepository,
    PaymentRepository,
    ProfileRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def events(self) -> EventRepository: ...

    @property
    def payments(self) -> PaymentRepository: ...

    @property
    def invoices(self) -> InvoiceRepository: ...

    @property
    def profiles(self) -> ProfileRepository: ...

    @property
    def alerts(self) -> AlertRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
