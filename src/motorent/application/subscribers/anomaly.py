"""Anomaly detection on payment events.

Duplicate payments are checked on approval, repeated refunds on refund.
Both raise an alert for back-office review and never block the payment.
"""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from motorent.domain.entities import Alert, BusinessEvent
from motorent.domain.value_objects import PaymentStatus

logger = logging.getLogger(__name__)

DUPLICATE_KIND = "PAGO_DUPLICADO"
SUSPICIOUS_KIND = "PATRON_SOSPECHOSO"
DUPLICATE_WINDOW = timedelta(hours=48)
REFUND_WINDOW = timedelta(days=30)
REFUND_THRESHOLD = 2


class AnomalySubscriber:
    """Raises alerts for duplicate payments and repeated refunds on a contract."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_payment_approved(self, event: BusinessEvent) -> None:
        """Alert when the contract has another payment of the same amount within 48 hours."""
        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            payment = await uow.payments.get_by_id(event.entity_id)
            if payment is None:
                return
            candidates = await uow.payments.list_by_contract(
                payment.contract_id, payment.created_at - DUPLICATE_WINDOW
            )
            duplicates = [
                p
                for p in candidates
                if p.id != payment.id
                and p.amount == payment.amount
                and abs(p.created_at - payment.created_at) <= DUPLICATE_WINDOW
            ]
            if not duplicates:
                return
            since = now - DUPLICATE_WINDOW
            if await uow.alerts.find_recent(payment.contract_id, DUPLICATE_KIND, since):
                return
            await uow.alerts.create(
                Alert(
                    id=uuid4(),
                    kind=DUPLICATE_KIND,
                    message=(
                        f"[Anomalía] Pago {payment.id} por ${payment.amount} coincide con "
                        f"{len(duplicates)} pago(s) del mismo contrato en 48hs."
                    ),
                    created_at=now,
                    contract_id=payment.contract_id,
                )
            )
        logger.info(
            "Duplicate payment alert for %s (%d matches)", payment.id, len(duplicates)
        )

    async def on_payment_refunded(self, event: BusinessEvent) -> None:
        """Alert when a contract has more than two refunded payments in 30 days."""
        contract_id = event.payload.get("contract_id")
        if not contract_id:
            return

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            recent = await uow.payments.list_by_contract(contract_id, now - REFUND_WINDOW)
            refunded = [p for p in recent if p.status == PaymentStatus.REEMBOLSADO]
            if len(refunded) <= REFUND_THRESHOLD:
                return
            if await uow.alerts.find_recent(contract_id, SUSPICIOUS_KIND, now - REFUND_WINDOW):
                return
            total = sum(p.amount for p in refunded)
            await uow.alerts.create(
                Alert(
                    id=uuid4(),
                    kind=SUSPICIOUS_KIND,
                    message=(
                        f"[Anomalía] {len(refunded)} reembolsos en 30 días "
                        f"por un total de ${total}."
                    ),
                    created_at=now,
                    contract_id=contract_id,
                )
            )
        logger.info("Refund pattern alert for contract %s (%d refunds)", contract_id, len(refunded))
