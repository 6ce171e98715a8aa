"""Invoice generation on payment approval.

Idempotent: the recovery sweep re-emits payment.approve for approved
payments that still have no invoice, so the same payment may arrive here
more than once. The conditional insert keyed by payment id is the guard.
"""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from motorent.domain.entities import BusinessEvent, Invoice
from motorent.domain.value_objects import PaymentStatus

logger = logging.getLogger(__name__)


class InvoicingSubscriber:
    """Creates the sale invoice for an approved payment."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def __call__(self, event: BusinessEvent) -> None:
        async with self._uow_factory() as uow:
            payment = await uow.payments.get_by_id(event.entity_id)
            if payment is None:
                logger.warning("Payment %s not found, no invoice generated", event.entity_id)
                return
            if payment.status != PaymentStatus.APROBADO:
                logger.info(
                    "Payment %s is %s, no invoice generated", payment.id, payment.status
                )
                return

            if await uow.invoices.get_by_payment_id(payment.id):
                logger.debug("Payment %s already invoiced", payment.id)
                return

            invoice = Invoice(
                id=uuid4(),
                payment_id=payment.id,
                contract_id=payment.contract_id,
                amount=payment.amount,
                issued_at=datetime.now(UTC),
            )
            if await uow.invoices.create_if_absent(invoice):
                logger.info("Invoice %s issued for payment %s", invoice.number, payment.id)
            else:
                logger.info("Payment %s invoiced concurrently, skipped", payment.id)
