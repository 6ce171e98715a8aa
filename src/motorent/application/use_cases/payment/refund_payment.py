"""Refund payment use case."""

from motorent.application.use_cases.payment.transition import PaymentTransitionUseCase
from motorent.domain.value_objects import PaymentStatus


class RefundPaymentUseCase(PaymentTransitionUseCase):
    """Refund an approved payment."""

    target = PaymentStatus.REEMBOLSADO
    operation_key = "payment.refund"
