"""Approve payment use case."""

from datetime import UTC, datetime

from motorent.application.use_cases.payment.transition import PaymentTransitionUseCase
from motorent.domain.entities import Payment
from motorent.domain.exceptions import ValidationError
from motorent.domain.value_objects import PaymentStatus


class ApprovePaymentUseCase(PaymentTransitionUseCase):
    """Approve a payment; invoicing happens in the payment.approve subscriber."""

    target = PaymentStatus.APROBADO
    operation_key = "payment.approve"

    def apply(
        self,
        payment: Payment,
        method: str | None = None,
        external_id: str | None = None,
        **_: object,
    ) -> None:
        method = method or payment.method
        if not method:
            raise ValidationError("Payment method is required to approve a payment")
        payment.method = method
        payment.external_id = external_id or payment.external_id
        payment.paid_at = datetime.now(UTC)
