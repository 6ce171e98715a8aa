"""Get payment use case."""

from motorent.domain.entities import Invoice, Payment
from motorent.domain.exceptions import NotFound


class GetPaymentUseCase:
    """Fetch a payment together with its invoice, if any."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, payment_id: str) -> tuple[Payment, Invoice | None]:
        async with self._uow_factory() as uow:
            payment = await uow.payments.get_by_id(payment_id)
            if payment is None:
                raise NotFound("Payment", payment_id)
            invoice = await uow.invoices.get_by_payment_id(payment.id)
        return payment, invoice
