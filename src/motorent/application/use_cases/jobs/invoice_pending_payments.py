"""Recovery sweep: approved payments that never got an invoice."""

import logging
from datetime import UTC, datetime, timedelta

from motorent.application.dto.job_results import SweepResult
from motorent.application.events import EventDispatcher

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system-job"


class InvoicePendingPaymentsUseCase:
    """Re-emit payment.approve for approved payments without invoice.

    Only payments approved longer than `grace` ago are considered, at most
    `batch_size` per run. Relies on the invoicing subscriber being
    idempotent; safe to run concurrently with request traffic.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        dispatcher: EventDispatcher,
        grace: timedelta = timedelta(minutes=5),
        batch_size: int = 100,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._dispatcher = dispatcher
        self._grace = grace
        self._batch_size = batch_size

    async def execute(self) -> SweepResult:
        cutoff = datetime.now(UTC) - self._grace
        async with self._uow_factory() as uow:
            payments = await uow.payments.list_approved_without_invoice(
                cutoff, limit=self._batch_size
            )

        result = SweepResult()
        for payment in payments:
            try:
                await self._dispatcher.emit(
                    "payment.approve",
                    "Pago",
                    payment.id,
                    {
                        "previous_status": "PENDIENTE",
                        "new_status": payment.status.value,
                        "amount": str(payment.amount),
                        "method": payment.method,
                        "contract_id": payment.contract_id,
                    },
                    SYSTEM_ACTOR,
                )
                result.processed += 1
            except Exception as exc:
                message = f"Payment {payment.id}: {exc}"
                logger.exception("Invoice sweep failed for payment %s", payment.id)
                result.errors.append(message)

        logger.info(
            "Invoice sweep: %d payments re-emitted, %d errors",
            result.processed,
            len(result.errors),
        )
        return result
