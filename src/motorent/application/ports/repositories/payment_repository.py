"""Payment repository port."""

from datetime import datetime
from typing import Protocol

from motorent.domain.entities import Payment
from motorent.domain.value_objects import PaymentStatus


class PaymentRepository(Protocol):
    """Port for payment persistence."""

    async def get_by_id(self, payment_id: str) -> Payment | None: ...

    async def update(self, payment: Payment) -> None: ...

    async def list_approved_without_invoice(
        self, paid_before: datetime, limit: int = 100
    ) -> list[Payment]: ...

    async def count_by_contract(self, contract_id: str, status: PaymentStatus) -> int: ...

    async def list_by_contract(
        self, contract_id: str, created_since: datetime
    ) -> list[Payment]: ...
