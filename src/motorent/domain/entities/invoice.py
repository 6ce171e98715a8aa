"""Invoice entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass
class Invoice:
    """Sale invoice - at most one per payment.

    number is assigned by the repository when the invoice is stored.
    """

    id: UUID
    payment_id: str
    contract_id: str
    amount: Decimal
    issued_at: datetime
    number: str | None = None
