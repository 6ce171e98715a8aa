"""Payment entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from motorent.domain.value_objects.payment_status import PaymentStatus


@dataclass
class Payment:
    """Payment - one installment of a rental contract."""

    id: str
    contract_id: str
    amount: Decimal
    status: PaymentStatus
    created_at: datetime
    method: str | None = None
    paid_at: datetime | None = None
    notes: str | None = None
    due_at: datetime | None = None
    external_id: str | None = None
